"""Bundler error taxonomy.

- CompileError: the source cannot be compiled; never retried
- TransientBackendFailure: the native backend process went away; retried once
- BackendUnavailableError: no backend could be initialized; fatal
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uikit_library.models.bundles import BackendHandle


class BundlerError(Exception):
    """Base class for bundler failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CompileError(BundlerError):
    """Raised when the backend reports a genuine compile failure."""

    pass


class TransientBackendFailure(BundlerError):
    """Raised when the native backend died for reasons unrelated to the source."""

    def __init__(self, message: str, handle: BackendHandle) -> None:
        super().__init__(message)
        self.handle = handle


class BackendUnavailableError(BundlerError):
    """Raised when neither the native nor the portable backend can be used."""

    pass
