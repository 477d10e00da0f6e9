"""API routers for uikitd daemon."""

from .components import router as components_router
from .status import router as status_router

__all__ = [
    "components_router",
    "status_router",
]
