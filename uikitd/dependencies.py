"""Shared dependency factories for FastAPI endpoints.

The bundler and registry are created once in the application lifespan and
live on app.state; these factories hand them to the routers.
"""

from fastapi import Request

from uikit_library.bundler import ComponentBundler
from uikit_library.components import ComponentRegistry


def get_bundler(request: Request) -> ComponentBundler:
    """Get the process-wide component bundler.

    Returns:
        ComponentBundler instance
    """
    return request.app.state.bundler


def get_component_registry(request: Request) -> ComponentRegistry:
    """Get the component registry.

    Returns:
        ComponentRegistry instance
    """
    return request.app.state.registry
