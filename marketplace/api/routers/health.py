from fastapi import APIRouter, Request
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(request: Request):
    db_status = "connected"
    sessions_status = "connected"

    try:
        request.app.state.db.ping()
    except SQLAlchemyError as e:
        logger.warning(f"Health check: database unreachable: {e}")
        db_status = "disconnected"

    try:
        request.app.state.sessions.ping()
    except RedisError as e:
        logger.warning(f"Health check: session store unreachable: {e}")
        sessions_status = "disconnected"

    healthy = db_status == sessions_status == "connected"
    return {
        "status": "healthy" if healthy else "degraded",
        "database": db_status,
        "sessions": sessions_status,
    }
