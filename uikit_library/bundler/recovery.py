"""Transient backend failure recovery.

Serverless hosts may freeze or kill the native compiler process between
invocations. Such failures say nothing about the source, so the backend is
restarted and the build retried exactly once. Everything else is a compile
error.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from uikit_library.models.bundles import BackendVariant
from uikit_library.models.bundles import BuildResult

from .errors import CompileError
from .errors import TransientBackendFailure

if TYPE_CHECKING:
    from .executor import BuildExecutor
    from .resolver import BackendResolver

logger = logging.getLogger(__name__)

# Case-sensitive phrasings of "the backend process is gone". Update here when
# the compiler changes its messages; anything unmatched is treated as permanent.
TRANSIENT_ERROR_SIGNATURES: tuple[str, ...] = (
    "service was stopped",
    "service is no longer running",
    "could not be found",
)


def is_transient_failure(error: BaseException, variant: BackendVariant) -> bool:
    """Classify a build failure.

    Only the native backend runs out of process, so only it can crash this way.

    Args:
        error: Exception raised by the backend
        variant: Variant of the backend that raised it

    Returns:
        True if the build should be retried after a backend restart

    Example:
        >>> is_transient_failure(RuntimeError("The service was stopped"), BackendVariant.NATIVE)
        True
        >>> is_transient_failure(RuntimeError("The service was stopped"), BackendVariant.PORTABLE)
        False
    """
    if variant is not BackendVariant.NATIVE:
        return False
    message = str(error)
    return any(signature in message for signature in TRANSIENT_ERROR_SIGNATURES)


class RecoveryPolicy:
    """Restart the backend after a transient failure and rebuild once."""

    def __init__(self, resolver: BackendResolver, executor: BuildExecutor) -> None:
        self.resolver = resolver
        self.executor = executor

    async def recover(self, entry_path: str, failure: TransientBackendFailure) -> BuildResult:
        """Release the dead backend, reset resolution and retry the build.

        Args:
            entry_path: Entry module whose build failed
            failure: The transient failure, carrying the failed handle

        Returns:
            Result of the single retry

        Raises:
            CompileError: The retry failed, including a second transient failure
            BackendUnavailableError: Re-resolution found no usable backend
        """
        logger.warning(f"Compiler backend crashed while building {entry_path}: {failure.message}")

        await failure.handle.backend.shutdown()
        await self.resolver.reset(stale=failure.handle)

        logger.info(f"Retrying build for {entry_path} with a fresh backend")
        try:
            result = await self.executor.build(entry_path)
        except TransientBackendFailure as e:
            raise CompileError(f"Build failed after backend restart: {e.message}") from e

        logger.info(f"Retry succeeded for {entry_path}")
        return result
