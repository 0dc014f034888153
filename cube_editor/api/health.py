from __future__ import annotations

from fastapi import APIRouter, Request, Response

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    """Liveness probe — confirms the process is alive."""
    return {"status": "ok"}


@router.get("/ready")
async def ready(request: Request, response: Response):
    """Readiness probe — confirms Redis is reachable."""
    try:
        await request.app.state.redis.ping()
    except Exception:
        response.status_code = 503
        return {"status": "not ready", "reason": "redis unreachable"}

    return {"status": "ready"}
