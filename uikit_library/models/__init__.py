"""Models for uikit library."""

from .base import CamelCaseModel
from .bundles import BackendHandle
from .bundles import BackendVariant
from .bundles import BuildOptions
from .bundles import BuildRequest
from .bundles import BuildResult
from .bundles import CompileOutput
from .bundles import ProcessMode
from .components import BundlerStatus
from .components import ComponentDefinition

__all__ = [
    "CamelCaseModel",
    "BackendHandle",
    "BackendVariant",
    "BuildOptions",
    "BuildRequest",
    "BuildResult",
    "CompileOutput",
    "ProcessMode",
    "BundlerStatus",
    "ComponentDefinition",
]
