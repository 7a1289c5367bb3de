"""
Unified report export: one document model, many output formats.
"""

from report_export.export.model import (
    Document,
    Section,
    TextBlock,
    TableBlock,
    ImageBlock,
    Orientation,
)
from report_export.export.naming import create_file_name, slugify
from report_export.export.extraction import (
    TableSelectionPolicy,
    find_first_table,
    first_table_in_section,
    require_table,
    select_table,
)
from report_export.export.files import GeneratedFile
from report_export.export.clipboard import (
    ClipboardBackend,
    ClipboardRenderer,
    MemoryClipboard,
    SystemClipboard,
)
from report_export.export.service import ExportFormat, ExportService

__all__ = [
    "Document", "Section", "TextBlock", "TableBlock", "ImageBlock", "Orientation",
    "create_file_name", "slugify",
    "TableSelectionPolicy", "find_first_table", "first_table_in_section",
    "require_table", "select_table",
    "GeneratedFile",
    "ClipboardBackend", "ClipboardRenderer", "MemoryClipboard", "SystemClipboard",
    "ExportFormat", "ExportService",
]
