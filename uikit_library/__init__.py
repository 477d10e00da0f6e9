"""uikit library layer.

Business logic for bundling UI components into self-contained scripts,
independent of the daemon that serves them.

Public Interface:
    Modules:
    - bundler: Backend resolution, builds, recovery and caching
    - components: Component registration
    - config: Configuration loading
    - models: Shared data structures
    - storage: Storage locations
"""

from .bundler import ComponentBundler
from .bundler import create_bundler
from .components import ComponentRegistry

__all__ = [
    "ComponentBundler",
    "ComponentRegistry",
    "create_bundler",
]
