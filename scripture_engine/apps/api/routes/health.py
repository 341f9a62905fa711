"""Health and readiness routes."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

router = APIRouter()


@router.get("/")
def read_root() -> dict[str, str]:
    """Health/info endpoint with a short usage message."""
    return {
        "message": "Welcome to the Scripture Engine API. Refer to /docs for available endpoints."
    }


@router.get("/alive")
async def alive_check() -> JSONResponse:
    """Unauthenticated liveness probe."""
    return JSONResponse({"status": "ok", "message": "Scripture engine is alive and healthy."})


__all__ = ["router"]
