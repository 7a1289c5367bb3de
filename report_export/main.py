# report_export/main.py
"""
FastAPI application entry point for the report export service.
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from report_export.api import HealthResponse, export_router, get_export_service
from report_export.cache import get_report_cache
from report_export.config import SERVER
from report_export.export.service import ExportService
from report_export.utils.logger import setup_logger

logger = setup_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - startup and shutdown."""
    logger.info("Starting report export service...")
    availability = get_export_service().availability()
    missing = [fmt for fmt, ok in availability.items() if not ok]
    if missing:
        logger.warning(f"Renderers unavailable: {', '.join(missing)}")
    yield
    swept = get_report_cache().sweep_expired()
    logger.info(f"Shutting down (swept {swept} stale cache entries)")


app = FastAPI(
    title="Report Export Service",
    description="Renders workforce capability reports to PDF, DOCX, XLSX, CSV and JSON",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=SERVER.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(export_router)


@app.get("/health", response_model=HealthResponse)
async def health(service: ExportService = Depends(get_export_service)):
    """Renderer availability and cache counters."""
    return HealthResponse(
        status="healthy",
        renderers=service.availability(),
        cache=get_report_cache().stats(),
    )
