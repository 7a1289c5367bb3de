# report_export/api/routes.py
"""
Export API routes.
Render a posted document into a downloadable file.
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from report_export.api.schemas import ClipboardResponse, DocumentPayload
from report_export.cache import ReportCache, get_report_cache
from report_export.core.exceptions import (
    ClipboardWriteError,
    ConfigurationException,
    InvalidDocumentError,
    MissingTableDataError,
    RendererUnavailableError,
)
from report_export.export.clipboard import ClipboardRenderer, MemoryClipboard
from report_export.export.service import ExportService
from report_export.utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/exports", tags=["exports"])

_export_service = None


def get_export_service() -> ExportService:
    """Shared export service built from configuration."""
    global _export_service
    if _export_service is None:
        _export_service = ExportService.from_config()
    return _export_service


# =============================================================================
# Clipboard
# =============================================================================

@router.post("/sheets", response_model=ClipboardResponse)
async def copy_for_sheets(
    payload: DocumentPayload,
    service: ExportService = Depends(get_export_service),
):
    """
    Flatten the document's table to tab-separated text.

    The browser writes `payload` to the user's clipboard.
    """
    try:
        document = payload.to_document()
        clipboard = MemoryClipboard()
        message = await ClipboardRenderer(clipboard, service.settings).copy(document)
    except InvalidDocumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except MissingTableDataError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ClipboardWriteError as e:
        logger.error(f"Clipboard export error: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return ClipboardResponse(message=message, payload=clipboard.content)


# =============================================================================
# Cache
# =============================================================================

@router.get("/cache/stats")
async def cache_stats(cache: ReportCache = Depends(get_report_cache)):
    return cache.stats()


@router.delete("/cache/{key}", status_code=204)
async def clear_cached_report(key: str, cache: ReportCache = Depends(get_report_cache)):
    """Drop a cached report so the next request regenerates it."""
    cache.clear(key)
    return Response(status_code=204)


# =============================================================================
# File exports
# =============================================================================

@router.post("/{export_format}")
async def export_document(
    export_format: str,
    payload: DocumentPayload,
    service: ExportService = Depends(get_export_service),
):
    """Render the document and return it as an attachment."""
    try:
        renderer = service.renderer_for(export_format)
    except ConfigurationException as e:
        raise HTTPException(status_code=404, detail=str(e))

    try:
        generated = renderer.render(payload.to_document())
    except InvalidDocumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except MissingTableDataError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except RendererUnavailableError as e:
        logger.error(f"Export unavailable: {e}")
        raise HTTPException(status_code=503, detail=str(e))

    return Response(
        content=generated.data,
        media_type=generated.mime_type,
        headers={
            "Content-Disposition": f'attachment; filename="{generated.filename}"',
            "Content-Length": str(generated.size_bytes),
        },
    )
