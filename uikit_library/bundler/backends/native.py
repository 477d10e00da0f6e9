"""Native backend driving the esbuild executable.

Each build runs esbuild as a subprocess and reads the bundle from stdout,
so nothing is written to disk. Process-level failures are reported with
the phrasing esbuild's own service uses, which is what the recovery
policy recognizes as transient.
"""

import asyncio
import contextlib
import logging
import shutil

from uikit_library.models.bundles import BackendVariant
from uikit_library.models.bundles import BuildOptions
from uikit_library.models.bundles import CompileOutput

from .base import SMOKE_SOURCE
from .base import CompilerBackend

logger = logging.getLogger(__name__)


class BackendProcessError(RuntimeError):
    """Raised when the esbuild process fails or reports errors."""

    pass


class EsbuildBackend(CompilerBackend):
    """Compile bundles with the esbuild executable.

    Example:
        >>> backend = EsbuildBackend("esbuild")
        >>> async def run():
        ...     if await backend.verify():
        ...         output = await backend.compile("components/index.tsx", BuildOptions(minify=True))
        ...         print(len(output.output_text))
    """

    variant = BackendVariant.NATIVE

    def __init__(self, binary: str = "esbuild", cwd: str | None = None) -> None:
        """Initialize the native backend.

        Args:
            binary: Executable name (looked up on PATH) or path
            cwd: Working directory for esbuild (node_modules resolution root)
        """
        self.binary = binary
        self.cwd = cwd
        self._processes: set[asyncio.subprocess.Process] = set()

    def _executable(self) -> str:
        path = shutil.which(self.binary)
        if path is None:
            raise BackendProcessError(f'The esbuild executable "{self.binary}" could not be found')
        return path

    @staticmethod
    def build_args(entry_path: str, options: BuildOptions) -> list[str]:
        """Translate build options into esbuild command-line flags.

        Args:
            entry_path: Entry module
            options: Build configuration

        Returns:
            Arguments following the executable name
        """
        args = [entry_path]
        if options.bundle:
            args.append("--bundle")
        args.extend(
            [
                f"--format={options.format}",
                f"--target={options.target}",
                f"--jsx={options.jsx}",
            ]
        )
        args.extend(f"--loader:{ext}={loader}" for ext, loader in options.loaders)
        args.append("--log-level=warning")
        if options.minify:
            args.append("--minify")
        return args

    async def _run(self, args: list[str], stdin: bytes | None = None) -> tuple[int, str, str]:
        """Run esbuild once and collect its output.

        Raises:
            BackendProcessError: When the process cannot be started or dies
        """
        executable = self._executable()
        try:
            proc = await asyncio.create_subprocess_exec(
                executable,
                *args,
                stdin=asyncio.subprocess.PIPE if stdin is not None else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self.cwd,
            )
        except OSError as e:
            raise BackendProcessError(
                f'The esbuild executable "{self.binary}" could not be found or started: {e}'
            ) from e

        self._processes.add(proc)
        try:
            stdout, stderr = await proc.communicate(stdin)
        except (BrokenPipeError, ConnectionResetError) as e:
            raise BackendProcessError(f"The service is no longer running: {e}") from e
        except asyncio.CancelledError:
            # The caller gave up; don't leave esbuild running untracked
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
            await proc.wait()
            raise
        finally:
            self._processes.discard(proc)

        returncode = await proc.wait()
        if returncode < 0:
            raise BackendProcessError(f"The service was stopped (esbuild terminated by signal {-returncode})")

        return returncode, stdout.decode("utf-8"), stderr.decode("utf-8", errors="replace")

    async def verify(self) -> bool:
        try:
            returncode, stdout, stderr = await self._run(
                ["--loader=ts", "--format=iife", "--log-level=error"],
                stdin=SMOKE_SOURCE.encode("utf-8"),
            )
        except BackendProcessError as e:
            logger.warning(f"esbuild smoke compile failed: {e}")
            return False

        if returncode != 0 or not stdout.strip():
            logger.warning(f"esbuild smoke compile failed (exit {returncode}): {stderr.strip()}")
            return False
        return True

    async def compile(self, entry_path: str, options: BuildOptions) -> CompileOutput:
        returncode, stdout, stderr = await self._run(self.build_args(entry_path, options))

        if returncode != 0:
            raise BackendProcessError(stderr.strip() or f"esbuild exited with code {returncode}")

        warnings = tuple(block.strip() for block in stderr.split("\n\n") if block.strip())
        for warning in warnings:
            logger.debug(f"esbuild warning for {entry_path}: {warning}")
        return CompileOutput(output_text=stdout, warnings=warnings)

    async def shutdown(self) -> None:
        """Kill any esbuild processes still running."""
        for proc in list(self._processes):
            if proc.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    proc.kill()
        self._processes.clear()
        logger.debug("esbuild backend shut down")
