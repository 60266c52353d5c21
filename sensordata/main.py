# sensordata/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sensordata.database import engine, settings
from sensordata.exceptions import DeviceAlreadyExists, StorageFailure
from sensordata.init_db import init_database
from sensordata.logging_config import configure_logging

# Routers
from sensordata.routers import readings_router, devices_router, health_router

logger = logging.getLogger(__name__)


def create_app(db_engine=None) -> FastAPI:
    db_engine = db_engine or engine

    # Startup: schema creation is idempotent
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_database(db_engine)
        logger.info("Sensor data API started")
        yield
        logger.info("Sensor data API stopped")

    configure_logging(settings.log_level)

    app = FastAPI(
        title="Sensor Data API",
        description="Storage and queries for environmental sensor readings and device metadata",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Devices post from anywhere on the network
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DeviceAlreadyExists)
    async def device_exists_handler(request: Request, exc: DeviceAlreadyExists):
        return JSONResponse(status_code=409, content={"success": False, "error": exc.message})

    @app.exception_handler(StorageFailure)
    async def storage_failure_handler(request: Request, exc: StorageFailure):
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=500, content={"success": False, "error": exc.message})

    # Mount router
    app.include_router(health_router)            # /healthz, /api/v1/health
    app.include_router(readings_router)          # /api/v1/readings/...
    app.include_router(devices_router)           # /api/v1/devices/...

    return app


app = create_app()
