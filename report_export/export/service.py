# report_export/export/service.py
"""
Export service: routes a Document to the renderer for a requested format.
"""

from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

from report_export.config.schema import BrandingSettings, ExportSettings
from report_export.core.exceptions import ConfigurationException
from report_export.export.clipboard import ClipboardBackend, ClipboardRenderer
from report_export.export.files import GeneratedFile
from report_export.export.model import Document
from report_export.export.renderers import (
    BaseRenderer,
    CsvRenderer,
    DocxRenderer,
    JsonRenderer,
    PdfRenderer,
    XlsxRenderer,
)
from report_export.utils.logger import setup_logger

logger = setup_logger(__name__)


class ExportFormat(str, Enum):
    """File-producing export formats."""
    PDF = "pdf"
    DOCX = "docx"
    XLSX = "xlsx"
    CSV = "csv"
    JSON = "json"


RENDERER_CLASSES = {
    ExportFormat.PDF: PdfRenderer,
    ExportFormat.DOCX: DocxRenderer,
    ExportFormat.XLSX: XlsxRenderer,
    ExportFormat.CSV: CsvRenderer,
    ExportFormat.JSON: JsonRenderer,
}


class ExportService:
    """
    One renderer per format, sharing the same branding.

    Pass `renderers` to substitute fakes; any format left out gets the
    default renderer.
    """

    def __init__(
        self,
        branding: Optional[BrandingSettings] = None,
        settings: Optional[ExportSettings] = None,
        renderers: Optional[Dict[ExportFormat, BaseRenderer]] = None,
        clipboard: Optional[ClipboardBackend] = None,
        outputs_dir: Optional[Union[str, Path]] = None,
    ):
        self.branding = branding or BrandingSettings()
        self.settings = settings or ExportSettings()
        self.outputs_dir = Path(outputs_dir) if outputs_dir else None

        self.renderers: Dict[ExportFormat, BaseRenderer] = {
            fmt: cls(self.branding, self.settings) for fmt, cls in RENDERER_CLASSES.items()
        }
        for fmt, renderer in (renderers or {}).items():
            self.renderers[ExportFormat(fmt)] = renderer

        self.clipboard = ClipboardRenderer(clipboard, self.settings)

    @classmethod
    def from_config(cls, **kwargs) -> "ExportService":
        """Build a service from the global configuration."""
        from report_export.config import BRANDING, EXPORT, PATHS
        return cls(branding=BRANDING, settings=EXPORT, outputs_dir=PATHS.outputs_dir, **kwargs)

    def renderer_for(self, export_format: Union[str, ExportFormat]) -> BaseRenderer:
        if not isinstance(export_format, ExportFormat):
            export_format = str(export_format).lower().strip('.')
        try:
            return self.renderers[ExportFormat(export_format)]
        except ValueError:
            raise ConfigurationException(f"Unsupported export format: {export_format}")

    def export(
        self,
        document: Any,
        export_format: Union[str, ExportFormat],
        today: Optional[date] = None,
    ) -> GeneratedFile:
        """Render `document` in one format."""
        renderer = self.renderer_for(export_format)
        return renderer.render(document, today)

    async def copy_for_sheets(self, document: Document) -> str:
        """Copy the document's table to the clipboard as TSV."""
        return await self.clipboard.copy(document)

    def save_to_disk(self, generated: GeneratedFile, directory: Optional[Union[str, Path]] = None) -> Path:
        """Write a rendered file under `directory` (default: configured outputs dir)."""
        target_dir = Path(directory) if directory else self.outputs_dir
        if target_dir is None:
            raise ConfigurationException("no output directory configured")

        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / generated.filename
        path.write_bytes(generated.data)

        logger.info(f"Saved export: {path} ({generated.size_bytes} bytes)")
        return path

    def availability(self) -> Dict[str, bool]:
        """Which renderers have their backing library installed."""
        return {fmt.value: renderer.is_available() for fmt, renderer in self.renderers.items()}
