"""
API routes and models.
"""

from report_export.api.routes import router as export_router, get_export_service
from report_export.api.schemas import (
    DocumentPayload,
    SectionPayload,
    TextContent,
    TableContent,
    ImageContent,
    ClipboardResponse,
    HealthResponse,
)

__all__ = [
    "export_router",
    "get_export_service",
    "DocumentPayload",
    "SectionPayload",
    "TextContent",
    "TableContent",
    "ImageContent",
    "ClipboardResponse",
    "HealthResponse",
]
