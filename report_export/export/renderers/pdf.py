# report_export/export/renderers/pdf.py
"""
Paginated print renderer (PDF).
"""

import io
from datetime import date
from typing import Optional

from report_export.core.exceptions import InvalidDocumentError
from report_export.export.files import GeneratedFile
from report_export.export.model import Document
from report_export.export.renderers.base import BaseRenderer
from report_export.utils.logger import setup_logger

logger = setup_logger(__name__)


class PdfRenderer(BaseRenderer):
    """
    Fixed page-size printable document with a repeated institutional header,
    automatic pagination and per-section orientation.
    """

    format = "pdf"
    library = "reportlab"

    def _check_backend(self) -> None:
        self._require("reportlab")

    def render(self, document: Document, today: Optional[date] = None) -> GeneratedFile:
        if not document.sections:
            raise InvalidDocumentError("print export needs at least one section")

        self._check_backend()
        from report_export.export.renderers.print_layout import PrintJob

        buffer = io.BytesIO()
        job = PrintJob(
            buffer,
            document,
            self.branding,
            page_size=self.settings.page_size,
            compress=self.settings.pdf_compression,
        )
        page_count = job.run()

        logger.info(f"Rendered PDF '{document.title}': {page_count} page(s)")
        return GeneratedFile.build(
            self.file_name(document.title, today),
            self.format,
            buffer.getvalue(),
            page_count=page_count,
            orientations=[o.value for o in job.orientations],
        )
