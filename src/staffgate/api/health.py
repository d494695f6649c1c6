"""Health check endpoint.

Learn: GET endpoint that verifies the server is running and the
users database is reachable. Sign-in is impossible without it, so
a failed database check reports the service as degraded.
"""

from fastapi import APIRouter
from sqlalchemy import text

from staffgate import __version__
from staffgate.db.engine import engine

router = APIRouter()


@router.get("/health")
async def health_check():
    checks = {"server": "ok", "version": __version__}

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        checks["postgres"] = "ok"
    except Exception as e:
        checks["postgres"] = f"error: {e}"

    status = "healthy" if checks["postgres"] == "ok" else "degraded"
    return {"status": status, **checks}
