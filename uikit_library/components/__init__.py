"""Component registration for uikit_library."""

from .registry import ComponentRegistry

__all__ = ["ComponentRegistry"]
