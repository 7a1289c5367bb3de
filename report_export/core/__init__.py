"""
Core error types.
"""

from report_export.core.exceptions import (
    ReportExportException,
    InvalidDocumentError,
    MissingTableDataError,
    RendererUnavailableError,
    ClipboardWriteError,
    ConfigurationException,
)

__all__ = [
    "ReportExportException",
    "InvalidDocumentError",
    "MissingTableDataError",
    "RendererUnavailableError",
    "ClipboardWriteError",
    "ConfigurationException",
]
