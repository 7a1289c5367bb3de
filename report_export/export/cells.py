# report_export/export/cells.py
"""Cell stringification shared by the text-based renderers."""

from report_export.export.model import Cell


def format_cell(value: Cell) -> str:
    """Render a scalar cell the way a spreadsheet user expects to read it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
