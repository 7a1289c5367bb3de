# report_export/export/extraction.py
"""
Table lookup for the single-table exporters (CSV, clipboard) and the
per-section lookup used by the workbook renderer.
"""

from enum import Enum
from typing import Iterator, Optional

from report_export.core.exceptions import InvalidDocumentError, MissingTableDataError
from report_export.export.model import Document, Section, TableBlock


class TableSelectionPolicy(str, Enum):
    """How a multi-table document is reduced to one table."""
    FIRST_FOUND = "first_found"
    CONCATENATE = "concatenate"


def iter_tables(document: Document) -> Iterator[TableBlock]:
    """Yield table blocks in section order, then block order."""
    for section in document.sections:
        for block in section.content:
            if isinstance(block, TableBlock):
                yield block


def find_first_table(document: Document) -> Optional[TableBlock]:
    """First table in reading order, or None. A zero-row table is still found."""
    return next(iter_tables(document), None)


def first_table_in_section(section: Section) -> Optional[TableBlock]:
    for block in section.content:
        if isinstance(block, TableBlock):
            return block
    return None


def select_table(
    document: Document,
    policy: TableSelectionPolicy = TableSelectionPolicy.FIRST_FOUND,
) -> Optional[TableBlock]:
    """Reduce a document to a single table according to `policy`."""
    policy = TableSelectionPolicy(policy)
    first = find_first_table(document)
    if first is None or policy is TableSelectionPolicy.FIRST_FOUND:
        return first

    rows = []
    for table in iter_tables(document):
        if table.headers != first.headers:
            raise InvalidDocumentError(
                "tables have different headers; flatten them before a concatenated export"
            )
        rows.extend(table.rows)
    return TableBlock(headers=first.headers, rows=tuple(rows))


def require_table(
    document: Document,
    export_format: str,
    policy: TableSelectionPolicy = TableSelectionPolicy.FIRST_FOUND,
) -> TableBlock:
    """Like select_table, but a document with no table is an error."""
    table = select_table(document, policy)
    if table is None:
        raise MissingTableDataError(document.title, export_format)
    return table
