"""API models for uikitd daemon.

This module defines response models for the REST API.
"""

from uikit_library.models.components import ComponentDefinition

from .responses import StatusResponse

__all__ = [
    "ComponentDefinition",
    "StatusResponse",
]
