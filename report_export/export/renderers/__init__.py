"""
Document renderers, one per output format.
"""

from report_export.export.renderers.base import BaseRenderer
from report_export.export.renderers.pdf import PdfRenderer
from report_export.export.renderers.docx import DocxRenderer
from report_export.export.renderers.xlsx import XlsxRenderer, make_sheet_name
from report_export.export.renderers.delimited import CsvRenderer, table_to_csv, table_to_tsv
from report_export.export.renderers.raw import JsonRenderer

__all__ = [
    "BaseRenderer",
    "PdfRenderer",
    "DocxRenderer",
    "XlsxRenderer",
    "CsvRenderer",
    "JsonRenderer",
    "make_sheet_name",
    "table_to_csv",
    "table_to_tsv",
]
