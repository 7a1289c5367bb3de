# report_export/core/exceptions.py
"""
Application exceptions.
"""


class ReportExportException(Exception):
    """Base exception for the export core."""
    pass


class InvalidDocumentError(ReportExportException):
    """Raised when a document violates the model's shape rules."""
    def __init__(self, message: str):
        super().__init__(f"Invalid document: {message}")


class MissingTableDataError(ReportExportException):
    """Raised when a single-table export finds no table block."""
    def __init__(self, title: str, export_format: str):
        self.title = title
        self.export_format = export_format
        super().__init__(
            f"No table data in '{title}': cannot export {export_format}"
        )


class RendererUnavailableError(ReportExportException):
    """Raised when the library backing a renderer cannot be loaded."""
    def __init__(self, export_format: str, library: str, original_error: Exception = None):
        self.export_format = export_format
        self.library = library
        self.original_error = original_error
        super().__init__(
            f"{export_format} renderer unavailable: install '{library}'"
        )


class ClipboardWriteError(ReportExportException):
    """Raised when the clipboard backend rejects a write."""
    def __init__(self, message: str):
        super().__init__(f"Clipboard write failed: {message}")


class ConfigurationException(ReportExportException):
    """Raised for configuration errors."""
    def __init__(self, message: str):
        super().__init__(f"Configuration error: {message}")
