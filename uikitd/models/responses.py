"""Response models for uikitd API."""

from pydantic import Field

from uikit_library.models.base import CamelCaseModel


class StatusResponse(CamelCaseModel):
    """Response for daemon status.

    Attributes:
        status: Status string (e.g., 'running')
        version: Daemon version
        uptime_seconds: Uptime in seconds
        mode: Bundler process mode
        backend: Active compiler backend variant (None until the first build)
        cached_entries: Number of cached bundles
        components: Number of registered components
    """

    status: str = Field(..., description="Daemon status")
    version: str = Field(..., description="Daemon version")
    uptime_seconds: float = Field(..., description="Uptime in seconds")
    mode: str = Field(..., description="Bundler process mode")
    backend: str | None = Field(default=None, description="Active compiler backend variant")
    cached_entries: int = Field(default=0, description="Number of cached bundles")
    components: int = Field(default=0, description="Number of registered components")
