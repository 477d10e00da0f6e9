"""Backend resolution.

Chooses one working compiler backend per process, preferring the native
variant and falling back to the portable one. The choice is memoized behind
an asyncio lock so concurrent first builds probe only once.

Contract:
- Inputs: Factories for the native and portable backends
- Outputs: Verified BackendHandle
- Side Effects: Smoke compiles, native subprocesses
"""

import asyncio
import logging
from collections.abc import Callable

from uikit_library.models.bundles import BackendHandle

from .backends.base import CompilerBackend
from .errors import BackendUnavailableError

logger = logging.getLogger(__name__)

BackendFactory = Callable[[], CompilerBackend]


class BackendResolver:
    """Resolve and memoize a verified compiler backend.

    Fallback is one-directional: once the native probe fails, native is never
    tried again in this process.

    Example:
        >>> resolver = BackendResolver(lambda: EsbuildBackend(), DukpyBackend)
        >>> async def run():
        ...     handle = await resolver.resolve()
        ...     print(handle.variant)
    """

    def __init__(self, native_factory: BackendFactory, portable_factory: BackendFactory) -> None:
        """Initialize resolver.

        Args:
            native_factory: Creates the native backend candidate
            portable_factory: Creates the portable backend candidate
        """
        self._native_factory = native_factory
        self._portable_factory = portable_factory
        self._handle: BackendHandle | None = None
        self._native_disabled = False
        self._lock = asyncio.Lock()

    @property
    def handle(self) -> BackendHandle | None:
        """Currently memoized handle, if any."""
        return self._handle

    @property
    def native_disabled(self) -> bool:
        return self._native_disabled

    async def resolve(self) -> BackendHandle:
        """Return the memoized backend, probing on first use.

        Returns:
            Verified backend handle

        Raises:
            BackendUnavailableError: Neither backend could be verified
        """
        handle = self._handle
        if handle is not None and handle.verified:
            return handle

        async with self._lock:
            # Another caller may have resolved while we waited
            handle = self._handle
            if handle is not None and handle.verified:
                return handle

            handle = None
            if not self._native_disabled:
                handle = await self._probe_native()
            if handle is None:
                handle = await self._probe_portable()

            self._handle = handle
            logger.info(f"Using {handle.variant.value} compiler backend")
            return handle

    async def _probe_native(self) -> BackendHandle | None:
        backend: CompilerBackend | None = None
        try:
            backend = self._native_factory()
            verified = await backend.verify()
        except Exception as e:
            logger.warning(f"Native backend initialization failed: {e}")
            verified = False

        if verified and backend is not None:
            return BackendHandle(variant=backend.variant, backend=backend, verified=True)

        logger.warning("Native backend unusable in this environment, falling back to portable backend")
        self._native_disabled = True
        if backend is not None:
            await backend.shutdown()
        return None

    async def _probe_portable(self) -> BackendHandle:
        try:
            backend = self._portable_factory()
            verified = await backend.verify()
        except Exception as e:
            raise BackendUnavailableError(f"No compiler backend available: portable backend failed: {e}") from e

        if not verified:
            raise BackendUnavailableError("No compiler backend available: portable backend failed its smoke compile")
        return BackendHandle(variant=backend.variant, backend=backend, verified=True)

    async def reset(self, stale: BackendHandle | None = None) -> None:
        """Forget the memoized backend so the next resolve() probes again.

        Args:
            stale: Handle known to be broken. When given and already replaced,
                the reset is skipped.
        """
        async with self._lock:
            if stale is not None and self._handle is not stale:
                logger.debug("Backend already replaced, skipping reset")
                return
            self._handle = None
            logger.info("Compiler backend reset")

    async def aclose(self) -> None:
        """Shut down the current backend at process exit."""
        async with self._lock:
            if self._handle is not None:
                await self._handle.backend.shutdown()
                self._handle = None
