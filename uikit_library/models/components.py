"""Component registry and status models."""

from pydantic import Field

from uikit_library.models.base import CamelCaseModel


class ComponentDefinition(CamelCaseModel):
    """A UI component registered under a stable name."""

    name: str = Field(description="Registered component name (e.g. weather-dashboard)")
    entry_path: str = Field(description="Absolute path to the component entry module")


class BundlerStatus(CamelCaseModel):
    """Snapshot of bundler state for status reporting."""

    mode: str = Field(description="Process mode (production or development)")
    backend: str | None = Field(default=None, description="Active backend variant, None until first build")
    cached_entries: int = Field(default=0, description="Number of cached bundles")
