"""Component registration.

Components are registered once at startup under a stable name, which fixes
the set of entry paths the bundler will ever see.

Contract:
- Inputs: Component names and entry paths
- Outputs: Component definitions, bundled scripts
- Side Effects: None beyond bundling
"""

import logging
from pathlib import Path

from uikit_library.bundler.service import ComponentBundler
from uikit_library.models.components import ComponentDefinition

logger = logging.getLogger(__name__)


class ComponentRegistry:
    """Name -> entry path registry backed by a ComponentBundler.

    Example:
        >>> registry = ComponentRegistry(bundler, components_dir=Path("components"))
        >>> registry.register("weather-dashboard", "index.jsx")
        >>> script = await registry.bundle("weather-dashboard")
    """

    def __init__(self, bundler: ComponentBundler, components_dir: Path | str = ".") -> None:
        """Initialize registry.

        Args:
            bundler: Bundler used to build registered components
            components_dir: Base directory for relative entry paths
        """
        self.bundler = bundler
        self.components_dir = Path(components_dir).expanduser().resolve()
        self._components: dict[str, ComponentDefinition] = {}

    def register(self, name: str, entry_path: str | Path) -> ComponentDefinition:
        """Register a component.

        Args:
            name: Component name (e.g. "weather-dashboard")
            entry_path: Entry module, absolute or relative to components_dir

        Returns:
            The registered component definition

        Raises:
            ValueError: Name already registered
            FileNotFoundError: Entry module does not exist
        """
        if name in self._components:
            raise ValueError(f"Component already registered: {name}")

        path = Path(entry_path).expanduser()
        if not path.is_absolute():
            path = self.components_dir / path
        path = path.resolve()
        if not path.is_file():
            raise FileNotFoundError(f"Component entry not found: {path}")

        component = ComponentDefinition(name=name, entry_path=str(path))
        self._components[name] = component
        logger.info(f"Registered component {name} -> {path}")
        return component

    def register_all(self, components: dict[str, str]) -> None:
        """Register every name -> entry path pair from configuration."""
        for name, entry_path in components.items():
            self.register(name, entry_path)

    def get(self, name: str) -> ComponentDefinition:
        """Look up a component.

        Raises:
            KeyError: Unknown component
        """
        try:
            return self._components[name]
        except KeyError:
            raise KeyError(f"Component not registered: {name}") from None

    def list_components(self) -> list[ComponentDefinition]:
        return sorted(self._components.values(), key=lambda c: c.name)

    async def bundle(self, name: str) -> str:
        """Bundle a registered component.

        Raises:
            KeyError: Unknown component
            CompileError: The component could not be compiled
            BackendUnavailableError: No compiler backend available
        """
        component = self.get(name)
        return await self.bundler.bundle_component(component.entry_path)
