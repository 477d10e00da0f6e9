"""Bundle build models.

This module contains the data models that flow through the bundler:
- Process mode and backend variant enums
- Build configuration and requests
- Backend output and build results
- The resolver-owned backend handle
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uikit_library.bundler.backends.base import CompilerBackend


class ProcessMode(str, Enum):
    """Process-wide build mode.

    Governs minification and cache participation:
    - PRODUCTION: minified bundles, cached per entry path
    - DEVELOPMENT: readable bundles, recompiled on every call
    """

    PRODUCTION = "production"
    DEVELOPMENT = "development"

    @property
    def is_production(self) -> bool:
        return self is ProcessMode.PRODUCTION


class BackendVariant(str, Enum):
    """Compiler backend implementation."""

    NATIVE = "native"
    PORTABLE = "portable"


@dataclass(frozen=True)
class BuildOptions:
    """Fixed build configuration shared by every build in a process.

    Only ``minify`` (tied to the process mode) and ``target`` (read once from
    settings) vary between processes.
    """

    minify: bool
    target: str = "es2020"
    bundle: bool = True
    write: bool = False
    format: str = "iife"
    jsx: str = "automatic"
    loaders: tuple[tuple[str, str], ...] = ((".tsx", "tsx"), (".ts", "ts"))


@dataclass(frozen=True)
class BuildRequest:
    """A single build of one entry module."""

    entry_path: str
    options: BuildOptions


@dataclass(frozen=True)
class CompileOutput:
    """Raw output reported by a backend for one build."""

    output_text: str
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class BuildResult:
    """Fully materialized bundle for one entry path."""

    entry_path: str
    bundled_text: str
    variant: BackendVariant
    warnings: tuple[str, ...] = ()

    @property
    def size(self) -> int:
        """Bundle size in bytes (UTF-8)."""
        return len(self.bundled_text.encode("utf-8"))


@dataclass(frozen=True)
class BackendHandle:
    """Reference to an initialized compiler backend.

    Handles are immutable: a reset replaces the resolver's handle rather than
    mutating it, so builds already holding a handle never observe a partial reset.
    """

    variant: BackendVariant
    backend: CompilerBackend = field(compare=False)
    verified: bool = True
