"""
Health check and ops endpoints
"""
import logging
from fastapi import APIRouter, Depends, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from api.deps import get_runner
from lib.prometheus_metrics import health_check_status
from lib.query import QueryRunner

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ops"])


@router.get("/healthz")
async def health_check(request: Request, response: Response, runner: QueryRunner = Depends(get_runner)):
    """
    Health check endpoint
    Returns: {"ok": true} with 200 if the database answers
    """
    try:
        probe = await runner.run("SELECT 1 AS ok")
        db_healthy = probe.first is not None
    except Exception as e:
        logger.warning(f"Health check failed: {e}")
        db_healthy = False

    health_check_status.labels(check_type="database").set(1 if db_healthy else 0)

    if db_healthy:
        response.status_code = 200
        result = {"ok": True, "database": "connected"}
    else:
        response.status_code = 503
        result = {"ok": False, "database": "disconnected"}

    result["request_id"] = getattr(request.state, "request_id", None)
    return result


@router.get("/version")
async def version_info(request: Request):
    """Return API version information"""
    settings = request.app.state.settings
    return {
        "version": settings.app_version,
        "name": settings.app_name,
        "environment": settings.environment
    }


@router.get("/metrics", response_class=Response)
async def metrics(request: Request):
    """Prometheus-compatible metrics endpoint"""
    request.app.state.database.refresh_metrics()
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
