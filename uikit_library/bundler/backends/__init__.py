"""Compiler backend variants.

Public Interface:
    - CompilerBackend: Backend contract
    - EsbuildBackend: Native variant (esbuild subprocess)
    - DukpyBackend: Portable variant (in-process)
"""

from .base import CompilerBackend
from .native import BackendProcessError
from .native import EsbuildBackend
from .portable import DukpyBackend

__all__ = [
    "CompilerBackend",
    "BackendProcessError",
    "EsbuildBackend",
    "DukpyBackend",
]
