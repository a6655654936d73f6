"""Health domain router.

Liveness plus database connectivity, for monitoring and load balancers.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.core.constants import Routes
from app.core.deps import SessionDep, SettingsDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix=Routes.HEALTH.prefix, tags=[Routes.HEALTH.tag])


@router.get("", responses={503: {"description": "Database unreachable"}})
async def health(session: SessionDep, settings: SettingsDep):
    """Report service status and whether the database answers."""
    try:
        session.exec(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Health check failed: database unreachable")
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "database": "error",
                "environment": settings.env_name,
            },
        )
    return {"status": "ok", "database": "ok", "environment": settings.env_name}
