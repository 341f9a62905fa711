"""Shared FastAPI dependencies for service access."""

from typing import Annotated

from fastapi import Depends, HTTPException, status

from scripture_engine.services import ServiceContainer, runtime
from scripture_engine.services.ai_gateway import AIGateway
from scripture_engine.services.scripture_service import ScriptureService


def get_service_container() -> ServiceContainer:
    """Resolve the globally configured service container."""
    try:
        return runtime.get_services()
    except RuntimeError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Service container not configured",
        ) from exc


def get_scripture_service(
    container: Annotated[ServiceContainer, Depends(get_service_container)],
) -> ScriptureService:
    """Return the scripture fetch service bound to the active container."""
    return container.scripture


def get_ai_gateway(
    container: Annotated[ServiceContainer, Depends(get_service_container)],
) -> AIGateway:
    """Return the long-lived AI gateway bound to the active container."""
    return container.gateway


__all__ = ["get_ai_gateway", "get_scripture_service", "get_service_container"]
