from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from employee_api.core.dependencies import get_repository
from employee_api.repositories.base import EmployeeRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check(
    request: Request,
    repository: EmployeeRepository = Depends(get_repository),  # noqa: B008
):
    services: dict[str, str] = {}

    try:
        if repository.initialized:
            ok = await repository.check_connection()
            services["storage"] = "ok" if ok else "error"
        else:
            services["storage"] = "not_configured"
    except Exception:
        logger.exception("Storage health check failed")
        services["storage"] = "error"

    all_ok = all(v in ("ok", "not_configured") for v in services.values())

    return {
        "status": "healthy" if all_ok else "degraded",
        "version": request.app.state.settings.APP_VERSION,
        "backend": repository.name,
        "services": services,
    }


@router.get("/ready")
async def readiness_probe():
    return {"ready": True}
