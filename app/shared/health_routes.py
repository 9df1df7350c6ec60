# app/shared/health_routes.py
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.connection import get_db
from config.serviceconfig import service_settings

router = APIRouter()


class ComponentHealth(BaseModel):
    status: str
    provider: Optional[str] = None
    details: Dict[str, Any] = {}


class SystemHealth(BaseModel):
    overall_status: str
    database: ComponentHealth
    services: Dict[str, ComponentHealth]


@router.get("/health", response_model=SystemHealth, tags=["System Health"])
async def system_health_check(db: AsyncSession = Depends(get_db)):
    """Database connectivity plus which upstream services are configured."""
    is_healthy = True

    try:
        await db.execute(text("SELECT 1"))
        database = {"status": "healthy", "provider": db.bind.dialect.name}
    except Exception as e:
        is_healthy = False
        database = {"status": "unhealthy", "details": {"error": str(e)}}

    # Unconfigured services degrade features but do not make the API unhealthy
    services = {
        name: {"status": "configured" if configured else "not_configured"}
        for name, configured in service_settings.configured_services.items()
    }

    payload = {
        "overall_status": "healthy" if is_healthy else "unhealthy",
        "database": database,
        "services": services,
    }
    http_status = status.HTTP_200_OK if is_healthy else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(content=payload, status_code=http_status)
