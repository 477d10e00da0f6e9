"""Build execution against the resolved backend.

Contract:
- Inputs: Entry path
- Outputs: BuildResult holding the complete bundle
- Side Effects: Backend invocation only (never touches the bundle cache)
"""

import logging

from uikit_library.models.bundles import BuildOptions
from uikit_library.models.bundles import BuildRequest
from uikit_library.models.bundles import BuildResult
from uikit_library.models.bundles import ProcessMode

from .errors import CompileError
from .errors import TransientBackendFailure
from .recovery import is_transient_failure
from .resolver import BackendResolver

logger = logging.getLogger(__name__)


class BuildExecutor:
    """Run single builds with the fixed build configuration.

    Minification is on in production (smaller payloads on every tool call)
    and off in development (readable stack traces).
    """

    def __init__(self, resolver: BackendResolver, mode: ProcessMode, target: str = "es2020") -> None:
        """Initialize executor.

        Args:
            resolver: Source of the compiler backend
            mode: Process mode, fixed for the process lifetime
            target: Syntax level bundles are compiled down to
        """
        self.resolver = resolver
        self.mode = mode
        self._options = BuildOptions(minify=mode.is_production, target=target)

    @property
    def options(self) -> BuildOptions:
        return self._options

    async def build(self, entry_path: str) -> BuildResult:
        """Bundle one entry module.

        Args:
            entry_path: Entry module to compile

        Returns:
            Build result with the bundled script

        Raises:
            CompileError: The source could not be compiled
            TransientBackendFailure: The native backend process went away
            BackendUnavailableError: No backend could be resolved
        """
        handle = await self.resolver.resolve()
        request = BuildRequest(entry_path=entry_path, options=self._options)

        logger.debug(f"Building {entry_path} with {handle.variant.value} backend (minify={request.options.minify})")
        try:
            output = await handle.backend.compile(request.entry_path, request.options)
        except CompileError:
            raise
        except Exception as e:
            if is_transient_failure(e, handle.variant):
                raise TransientBackendFailure(str(e), handle=handle) from e
            raise CompileError(str(e)) from e

        result = BuildResult(
            entry_path=entry_path,
            bundled_text=output.output_text,
            variant=handle.variant,
            warnings=output.warnings,
        )
        logger.info(f"Bundled {entry_path}: {result.size} bytes ({handle.variant.value})")
        return result
