"""On-demand component bundler.

Public Interface:
    - ComponentBundler: bundle_component() entry point
    - create_bundler: Wire a bundler from settings
    - BackendResolver, BuildExecutor, RecoveryPolicy, BundleCache: Building blocks
    - CompileError, TransientBackendFailure, BackendUnavailableError: Failures
"""

from .cache import BundleCache
from .errors import BackendUnavailableError
from .errors import BundlerError
from .errors import CompileError
from .errors import TransientBackendFailure
from .executor import BuildExecutor
from .recovery import TRANSIENT_ERROR_SIGNATURES
from .recovery import RecoveryPolicy
from .recovery import is_transient_failure
from .resolver import BackendResolver
from .service import ComponentBundler
from .service import create_bundler

__all__ = [
    "ComponentBundler",
    "create_bundler",
    "BackendResolver",
    "BuildExecutor",
    "RecoveryPolicy",
    "BundleCache",
    "is_transient_failure",
    "TRANSIENT_ERROR_SIGNATURES",
    "BundlerError",
    "CompileError",
    "TransientBackendFailure",
    "BackendUnavailableError",
]
