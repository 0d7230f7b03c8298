"""
SafetyNet Alerts — FastAPI Application.

Entry point for the API server.
Run: uvicorn safetynet.main:app --host 0.0.0.0 --port 8080

Endpoints:
  - Alert queries:   /communityEmail, /phoneAlert, /personInfo, /childAlert,
                     /fire, /flood/stations, /firestation
  - CRUD:            /person(s), /medicalRecord(s), /fireStation(s)
  - GET /health      ← liveness + collection sizes
"""

from contextlib import asynccontextmanager
from datetime import date
from typing import Callable, Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from safetynet.config import Settings, settings
from safetynet.db.store import RecordStore
from safetynet.engine.alerts import AlertQueryEngine
from safetynet.errors import DataLoadError, register_exception_handlers
from safetynet.logging_config import configure_logging
from safetynet.middleware.error_handler import ErrorHandlerMiddleware
from safetynet.middleware.request_context import RequestContextMiddleware
from safetynet.services.loader import load_data

from safetynet.api.routers.alerts import router as alerts_router
from safetynet.api.routers.fire_stations import router as fire_stations_router
from safetynet.api.routers.medical_records import router as medical_records_router
from safetynet.api.routers.persons import router as persons_router

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — load the data file, then serve."""
    cfg: Settings = app.state.settings
    logger.info("safetynet_starting", version=cfg.app_version, environment=cfg.environment)

    if app.state.load_data_on_startup:
        try:
            load_data(app.state.store, cfg.data_path)
        except DataLoadError as exc:
            if cfg.strict_data_load:
                logger.error("data_load_failed", error=exc.message)
                raise
            logger.warning("data_load_failed", error=exc.message, msg="Starting with an empty store")

    yield
    logger.info("safetynet_shutdown")


def create_app(
    app_settings: Optional[Settings] = None,
    store: Optional[RecordStore] = None,
    clock: Callable[[], date] = date.today,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    When a store is passed in it is used as-is and the data file is not
    loaded; tests use this to start from a known state.
    """
    cfg = app_settings or settings
    configure_logging(cfg.log_level, cfg.log_format)

    app = FastAPI(
        title=cfg.app_name,
        description=(
            "Emergency dispatch queries joining residents, fire station "
            "coverage and medical records."
        ),
        version=cfg.app_version,
        lifespan=lifespan,
        docs_url="/docs" if cfg.debug else None,
        redoc_url="/redoc" if cfg.debug else None,
        openapi_tags=[
            {"name": "health", "description": "Liveness probe"},
            {"name": "alerts", "description": "Emergency alert queries"},
            {"name": "persons", "description": "Resident CRUD"},
            {"name": "medical-records", "description": "Medical record CRUD"},
            {"name": "fire-stations", "description": "Fire station mapping CRUD"},
        ],
    )

    app.state.settings = cfg
    app.state.store = store if store is not None else RecordStore()
    app.state.load_data_on_startup = store is None
    app.state.alert_engine = AlertQueryEngine(app.state.store, clock=clock)

    register_exception_handlers(app)

    # ── Middleware (last added = outermost) ──────────────────────────────
    app.add_middleware(ErrorHandlerMiddleware, debug=cfg.debug)
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routes ────────────────────────────────────────────────────────
    app.include_router(alerts_router)
    app.include_router(persons_router)
    app.include_router(medical_records_router)
    app.include_router(fire_stations_router)

    @app.get("/health", tags=["health"])
    def health():
        """Liveness probe with the size of each collection."""
        return {
            "status": "ok",
            "version": cfg.app_version,
            "service": "safetynet-alerts",
            "records": app.state.store.counts(),
        }

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "safetynet.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
