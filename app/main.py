# app/main.py
from dotenv import load_dotenv

load_dotenv()

import logging
import logging.config
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.appconfig import settings

# Apply logging configuration
logging.config.dictConfig(settings.LOGGING_CONFIG)

# Import routers
from app.diagnosis_engine.routes import router as diagnose_router
from app.localization.routes import router as output_router
from app.shared.health_routes import router as health_router
from app.uploadsystem.routes import router as upload_router

from app.database.connection import init_db
from config.serviceconfig import service_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    await init_db()
    logger.info("===============================================================================")
    logger.info(f" 🚀 Starting {settings.APP_NAME}")
    for service, configured in service_settings.configured_services.items():
        marker = "✅" if configured else "⚠️ "
        logger.info(f" {marker} {service}: {'configured' if configured else 'not configured'}")
    logger.info("===============================================================================")
    yield
    # Shutdown
    logger.info("👋 Shutting down")


app = FastAPI(
    title=settings.APP_NAME,
    description="Crop diagnosis from voice symptoms and photos, with localized spoken advice",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# Include routers with prefixes
app.include_router(upload_router, prefix="/upload", tags=["Upload"])
app.include_router(diagnose_router, prefix="/diagnose", tags=["Diagnosis"])
app.include_router(output_router, prefix="/output", tags=["Localization"])
app.include_router(health_router, prefix="/api/system")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT, reload=True)
