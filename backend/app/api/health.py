from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.db.mongodb import db

router = APIRouter()


@router.get("/live", summary="Liveness Probe")
async def liveness():
    """
    Liveness probe to check if the application process is running.
    """
    return {"status": "alive"}


@router.get("/ready", summary="Readiness Probe")
async def readiness():
    """
    Readiness probe. Teams cannot be served without MongoDB, so a failed
    ping marks the service as not ready.
    """
    components = {"database": "unknown"}
    is_ready = True

    try:
        if db.client:
            await db.client.admin.command("ping")
            components["database"] = "connected"
        else:
            components["database"] = "client_not_initialized"
            is_ready = False
    except Exception as e:
        components["database"] = f"error: {str(e)}"
        is_ready = False

    if is_ready:
        return {"status": "ready", "components": components}

    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "components": components},
    )
