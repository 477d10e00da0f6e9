"""Component bundling service.

The single public entry point that composes the cache, the build executor
and the recovery policy.

Contract:
- Inputs: Entry path of a component module
- Outputs: Self-contained bundled script text
- Side Effects: Compiler invocation, cache population (production only)

Example:
    >>> from uikit_library.config import load_config
    >>> bundler = create_bundler(load_config())
    >>> script = await bundler.bundle_component("components/index.jsx")
"""

import logging

from uikit_library.config.settings import BundlerSettings
from uikit_library.models.bundles import ProcessMode
from uikit_library.models.components import BundlerStatus

from .backends.native import EsbuildBackend
from .backends.portable import DukpyBackend
from .cache import BundleCache
from .errors import TransientBackendFailure
from .executor import BuildExecutor
from .recovery import RecoveryPolicy
from .resolver import BackendResolver

logger = logging.getLogger(__name__)


class ComponentBundler:
    """Bundle UI components, caching results in production mode.

    In development mode every call recompiles from current source so edits
    between calls show up immediately.
    """

    def __init__(
        self,
        executor: BuildExecutor,
        recovery: RecoveryPolicy,
        mode: ProcessMode,
        cache: BundleCache | None = None,
    ) -> None:
        """Initialize bundler.

        Args:
            executor: Runs builds against the resolved backend
            recovery: Handles transient backend crashes
            mode: Process mode, fixed for the process lifetime
            cache: Bundle cache (a fresh one by default)
        """
        self.executor = executor
        self.recovery = recovery
        self.mode = mode
        self.cache = cache if cache is not None else BundleCache()

    @property
    def resolver(self) -> BackendResolver:
        return self.executor.resolver

    async def bundle_component(self, entry_path: str) -> str:
        """Return the bundled script for an entry module.

        Args:
            entry_path: Entry module to bundle

        Returns:
            Complete bundled script text

        Raises:
            CompileError: The source could not be compiled
            BackendUnavailableError: No compiler backend could be initialized
        """
        use_cache = self.mode.is_production

        if use_cache:
            cached = self.cache.get(entry_path)
            if cached is not None:
                logger.debug(f"Returning cached bundle for {entry_path}")
                return cached

        try:
            result = await self.executor.build(entry_path)
        except TransientBackendFailure as e:
            result = await self.recovery.recover(entry_path, e)

        if use_cache:
            self.cache.set(entry_path, result.bundled_text)

        return result.bundled_text

    def status(self) -> BundlerStatus:
        """Snapshot of mode, active backend and cache size."""
        handle = self.resolver.handle
        return BundlerStatus(
            mode=self.mode.value,
            backend=handle.variant.value if handle is not None else None,
            cached_entries=len(self.cache),
        )

    async def aclose(self) -> None:
        await self.resolver.aclose()


def create_bundler(settings: BundlerSettings) -> ComponentBundler:
    """Wire a bundler with the esbuild and portable backends.

    Args:
        settings: Loaded bundler settings

    Returns:
        Ready-to-use ComponentBundler (backends are probed lazily)
    """
    resolver = BackendResolver(
        native_factory=lambda: EsbuildBackend(settings.esbuild_binary, cwd=settings.components_dir),
        portable_factory=lambda: DukpyBackend(cwd=settings.components_dir),
    )
    executor = BuildExecutor(resolver, mode=settings.mode, target=settings.target)
    recovery = RecoveryPolicy(resolver, executor)

    logger.info(f"Component bundler created (mode={settings.mode.value}, esbuild={settings.esbuild_binary})")
    return ComponentBundler(executor, recovery, mode=settings.mode)
