"""Compiler backend contract.

A backend turns one entry module into one self-contained script. Two
variants implement it: the native esbuild executable and the portable
in-process compiler.

Contract:
- Inputs: Entry path, fixed build options
- Outputs: CompileOutput with the bundled script
- Side Effects: Native variant spawns subprocesses
"""

from abc import ABC
from abc import abstractmethod
from typing import ClassVar

from uikit_library.models.bundles import BackendVariant
from uikit_library.models.bundles import BuildOptions
from uikit_library.models.bundles import CompileOutput

# Trivial module used by every smoke compile
SMOKE_SOURCE = "export const ok: number = 1;\n"


class CompilerBackend(ABC):
    """Capability to compile an entry module into a single script."""

    variant: ClassVar[BackendVariant]

    @abstractmethod
    async def verify(self) -> bool:
        """Smoke-compile a trivial module to prove the backend executes here.

        Returns:
            True if the backend produced output, False otherwise
        """

    @abstractmethod
    async def compile(self, entry_path: str, options: BuildOptions) -> CompileOutput:
        """Build one entry module and all of its dependencies.

        Args:
            entry_path: Path to the entry module
            options: Fixed build configuration

        Returns:
            Compiled output

        Raises:
            Exception: Any failure; the executor classifies it
        """

    @abstractmethod
    async def shutdown(self) -> None:
        """Release held processes. Must be safe on an already dead backend."""
