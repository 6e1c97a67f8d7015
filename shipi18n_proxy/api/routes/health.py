from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from shipi18n_proxy.api.deps import get_shipi18n_client
from shipi18n_proxy.integrations.shipi18n import Shipi18nClient, Shipi18nError

router = APIRouter()


@router.get("/healthz")
async def healthcheck() -> dict[str, str]:
    """Lightweight health endpoint for liveness probes."""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/health/upstream")
async def upstream_healthcheck(client: Shipi18nClient = Depends(get_shipi18n_client)):
    """Report the hosted Shipi18n API health as seen from this server."""
    try:
        health = await client.health_check()
    except Shipi18nError as exc:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"error": str(exc)},
        )
    return health.model_dump(exclude_none=True)
