# report_export/export/renderers/delimited.py
"""
Delimited-text renderers: quoted CSV files and tab-separated clipboard text.
"""

import csv
import io
from datetime import date
from typing import Optional

from report_export.export.cells import format_cell
from report_export.export.extraction import TableSelectionPolicy, require_table
from report_export.export.files import GeneratedFile
from report_export.export.model import Document, TableBlock
from report_export.export.renderers.base import BaseRenderer
from report_export.utils.logger import setup_logger

logger = setup_logger(__name__)


def table_to_csv(table: TableBlock) -> str:
    """Every cell quoted (headers included), rows joined with '\\n'."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator='\n')
    writer.writerow(table.headers)
    writer.writerows([format_cell(value) for value in row] for row in table.rows)
    return buffer.getvalue()[:-1]


def table_to_tsv(table: TableBlock) -> str:
    """Unquoted tab-joined text that pastes cleanly into a spreadsheet."""
    lines = ['\t'.join(table.headers)]
    lines.extend('\t'.join(format_cell(value) for value in row) for row in table.rows)
    return '\n'.join(lines)


class CsvRenderer(BaseRenderer):
    """Exports one table as CSV; fails when the document has none."""

    format = "csv"

    @property
    def policy(self) -> TableSelectionPolicy:
        return TableSelectionPolicy(self.settings.table_selection_policy)

    def render(self, document: Document, today: Optional[date] = None) -> GeneratedFile:
        table = require_table(document, self.format, self.policy)
        data = table_to_csv(table).encode('utf-8')

        logger.info(f"Rendered CSV '{document.title}': {len(table.rows)} row(s)")
        return GeneratedFile.build(
            self.file_name(document.title, today),
            self.format,
            data,
            row_count=len(table.rows),
        )
