# report_export/export/renderers/xlsx.py
"""
Workbook renderer (XLSX): one sheet per section that holds a table.
"""

import io
import re
from datetime import date
from typing import List, Optional, Set

from report_export.core.exceptions import MissingTableDataError
from report_export.export.extraction import first_table_in_section
from report_export.export.files import GeneratedFile
from report_export.export.model import Document
from report_export.export.renderers.base import BaseRenderer
from report_export.utils.logger import setup_logger

logger = setup_logger(__name__)

_FORBIDDEN_SHEET_CHARS = re.compile(r"[\[\]:*?/\\]")


def make_sheet_name(title: str, used: Set[str], max_length: int = 31) -> str:
    """
    Truncate a section title to a valid, unique sheet name.

    Names are compared case-insensitively, as Excel does. A collision gets a
    ` (n)` suffix and the base is shortened so the result stays in bounds.
    `used` is updated in place.
    """
    base = _FORBIDDEN_SHEET_CHARS.sub("-", title).strip().strip("'") or "Sheet"
    name = base[:max_length]

    counter = 2
    while name.lower() in used:
        suffix = f" ({counter})"
        name = base[:max_length - len(suffix)].rstrip() + suffix
        counter += 1

    used.add(name.lower())
    return name


def keep_as_text(worksheet) -> None:
    """
    Store every cell as its literal value.

    openpyxl turns any string starting with '=' into a formula; table cells
    are opaque text, so those are switched back to plain strings.
    """
    for row in worksheet.iter_rows():
        for cell in row:
            if cell.data_type == "f":
                cell.data_type = "s"


class XlsxRenderer(BaseRenderer):
    """Spreadsheet workbook with per-section sheets and width hints."""

    format = "xlsx"
    library = "openpyxl"

    def _check_backend(self) -> None:
        self._require("pandas")
        self._require("openpyxl")

    def column_widths(self, column_count: int) -> List[int]:
        """The last column (conventionally free-text remarks) is wider."""
        return [
            self.settings.wide_column_width if i == column_count - 1 else self.settings.column_width
            for i in range(column_count)
        ]

    def render(self, document: Document, today: Optional[date] = None) -> GeneratedFile:
        self._check_backend()
        import pandas as pd
        from openpyxl.utils import get_column_letter

        sheets = [
            (section, table)
            for section, table in ((s, first_table_in_section(s)) for s in document.sections)
            if table is not None
        ]
        if not sheets:
            raise MissingTableDataError(document.title, self.format)

        skipped = len(document.sections) - len(sheets)
        if skipped:
            logger.debug(f"XLSX '{document.title}': {skipped} section(s) without a table skipped")

        used: Set[str] = set()
        sheet_names = []
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            for section, table in sheets:
                name = make_sheet_name(section.title, used, self.settings.sheet_name_max_length)
                sheet_names.append(name)

                frame = pd.DataFrame([list(row) for row in table.rows], columns=list(table.headers))
                frame.to_excel(writer, sheet_name=name, index=False)

                worksheet = writer.sheets[name]
                keep_as_text(worksheet)
                for index, width in enumerate(self.column_widths(len(table.headers)), start=1):
                    worksheet.column_dimensions[get_column_letter(index)].width = width

        logger.info(f"Rendered XLSX '{document.title}': {len(sheet_names)} sheet(s)")
        return GeneratedFile.build(
            self.file_name(document.title, today),
            self.format,
            buffer.getvalue(),
            sheet_names=sheet_names,
        )
