"""Component bundle router.

Thin HTTP wrapper around ComponentRegistry. Only registered components can
be bundled; arbitrary entry paths are never accepted from requests.
"""

import logging
from typing import Annotated

from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException
from fastapi import Response

from uikit_library.bundler import BackendUnavailableError
from uikit_library.bundler import CompileError
from uikit_library.components import ComponentRegistry

from ..dependencies import get_component_registry
from ..models import ComponentDefinition

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/components", tags=["components"])


@router.get("", response_model=list[ComponentDefinition])
async def list_components(
    registry: Annotated[ComponentRegistry, Depends(get_component_registry)],
) -> list[ComponentDefinition]:
    """List registered components."""
    return registry.list_components()


@router.get("/{name}", response_model=ComponentDefinition)
async def get_component(
    name: str,
    registry: Annotated[ComponentRegistry, Depends(get_component_registry)],
) -> ComponentDefinition:
    """Get one registered component."""
    try:
        return registry.get(name)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=f"Component not found: {name}") from exc


@router.get("/{name}/bundle")
async def get_component_bundle(
    name: str,
    registry: Annotated[ComponentRegistry, Depends(get_component_registry)],
) -> Response:
    """Bundle a registered component into a self-contained script."""
    try:
        script = await registry.bundle(name)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=f"Component not found: {name}") from exc
    except CompileError as exc:
        logger.warning(f"Build failed for component {name}: {exc.message}")
        raise HTTPException(status_code=422, detail=exc.message) from exc
    except BackendUnavailableError as exc:
        logger.error(f"No compiler backend available: {exc.message}")
        raise HTTPException(status_code=503, detail=exc.message) from exc
    except Exception as exc:
        logger.error(f"Failed to bundle component {name}: {exc}")
        raise HTTPException(status_code=500, detail="Internal server error") from exc

    return Response(content=script, media_type="application/javascript")
