# report_export/export/renderers/print_layout.py
"""
Paginated print layout on a reportlab canvas.

The write position `y` is measured in points from the top edge of the
current page; it is converted to reportlab's bottom-left origin only when
drawing. Every page gets the institutional header when it is opened and the
footer once the page total is known, in NumberedCanvas.save().
"""

import base64
import io
from typing import List
from urllib.parse import unquote_to_bytes
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, LETTER, landscape, portrait
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, Table, TableStyle

from report_export.config.schema import BrandingSettings
from report_export.core.exceptions import InvalidDocumentError
from report_export.export.cells import format_cell
from report_export.export.model import (
    Document,
    ImageBlock,
    Orientation,
    TableBlock,
    TextBlock,
)
from report_export.utils.logger import setup_logger

logger = setup_logger(__name__)

PAGE_SIZES = {"A4": A4, "LETTER": LETTER}

MARGIN = 15 * mm
CONTENT_TOP = 55 * mm
BOTTOM_RESERVE = 25 * mm
LINE_HEIGHT = 5 * mm
BLOCK_SPACING = 10 * mm
TABLE_SPACING = 12 * mm
SECTION_TITLE_ADVANCE = 10 * mm
CELL_PADDING = 1.5 * mm

TEXT_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"
TEXT_SIZE = 10
TABLE_FONT_SIZE = 8.0
MIN_TABLE_FONT_SIZE = 5.0
FONT_STEP = 0.5


def decode_data_url(data_url: str) -> bytes:
    """Return the payload bytes of a `data:` URL."""
    if not data_url.startswith("data:") or "," not in data_url:
        raise InvalidDocumentError("image block needs a data: URL")
    header, payload = data_url.split(",", 1)
    if header.endswith(";base64"):
        try:
            return base64.b64decode(payload, validate=False)
        except ValueError as e:
            raise InvalidDocumentError(f"image data is not valid base64: {e}")
    return unquote_to_bytes(payload)


def _widest_word(table: TableBlock, font_size: float) -> float:
    widest = 0.0
    for header in table.headers:
        for word in header.split() or [""]:
            widest = max(widest, stringWidth(word, BOLD_FONT, font_size))
    for row in table.rows:
        for cell in row:
            for word in format_cell(cell).split() or [""]:
                widest = max(widest, stringWidth(word, TEXT_FONT, font_size))
    return widest


def fit_table_font_size(
    table: TableBlock,
    column_width: float,
    base: float = TABLE_FONT_SIZE,
    floor: float = MIN_TABLE_FONT_SIZE,
) -> float:
    """
    Largest font size, stepping down from `base`, at which the longest word
    of any cell fits its column. Never below `floor`: narrow columns shrink
    text, they are never dropped.
    """
    size = base
    usable = column_width - 2 * CELL_PADDING
    while size > floor and _widest_word(table, size) > usable:
        size -= FONT_STEP
    return max(size, floor)


class NumberedCanvas(canvas.Canvas):
    """Canvas that holds pages back until save() so footers know the total."""

    def __init__(self, *args, branding: BrandingSettings = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.branding = branding or BrandingSettings()
        self._saved_page_states = []

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    @property
    def page_total(self) -> int:
        return len(self._saved_page_states)

    def save(self):
        total = self.page_total
        for number, state in enumerate(self._saved_page_states, start=1):
            self.__dict__.update(state)
            self.draw_footer(number, total)
            super().showPage()
        super().save()

    def draw_footer(self, number: int, total: int):
        width, _ = self._pagesize
        self.saveState()
        self.setStrokeColor(colors.HexColor(self.branding.primary_color))
        self.setLineWidth(0.3 * mm)
        self.line(MARGIN, 15 * mm, width - MARGIN, 15 * mm)
        self.setFont(BOLD_FONT, 8)
        self.setFillGray(100 / 255.0)
        self.drawString(MARGIN, 10 * mm, self.branding.custodian_line)
        self.drawRightString(
            width - MARGIN, 10 * mm,
            f"{self.branding.footer_label} - Page {number} of {total}"
        )
        self.restoreState()


class PrintJob:
    """One pass of laying a Document out onto pages."""

    def __init__(
        self,
        buffer: io.BytesIO,
        document: Document,
        branding: BrandingSettings,
        page_size: str = "A4",
        compress: bool = True,
    ):
        self.document = document
        self.branding = branding
        self.brand_color = colors.HexColor(branding.primary_color)
        self.base_size = PAGE_SIZES.get(page_size.upper(), A4)

        first = document.sections[0].orientation or Orientation.PORTRAIT
        self.orientations: List[Orientation] = [first]
        self.canvas = NumberedCanvas(
            buffer,
            pagesize=self._size_for(first),
            pageCompression=1 if compress else 0,
            branding=branding,
        )
        self.canvas.setTitle(document.title)
        self.canvas.setAuthor(branding.organization_name)
        self.y = 0.0

    # -------------------------------------------------------------------------
    # Page geometry
    # -------------------------------------------------------------------------

    def _size_for(self, orientation: Orientation):
        if orientation is Orientation.LANDSCAPE:
            return landscape(self.base_size)
        return portrait(self.base_size)

    @property
    def page_width(self) -> float:
        return self.canvas._pagesize[0]

    @property
    def page_height(self) -> float:
        return self.canvas._pagesize[1]

    @property
    def printable_width(self) -> float:
        return self.page_width - 2 * MARGIN

    @property
    def bottom_limit(self) -> float:
        return self.page_height - BOTTOM_RESERVE

    def _baseline(self, offset: float) -> float:
        return self.page_height - offset

    # -------------------------------------------------------------------------
    # Driver
    # -------------------------------------------------------------------------

    def run(self) -> int:
        """Lay out every section and write the PDF. Returns the page count."""
        self.y = self.draw_header()

        for index, section in enumerate(self.document.sections):
            orientation = section.orientation or Orientation.PORTRAIT
            if index > 0:
                self.new_page(orientation)
            self.draw_section_title(section.title)

            for block in section.content:
                if isinstance(block, TextBlock):
                    self.draw_text(block.text, orientation)
                elif isinstance(block, TableBlock):
                    self.draw_table(block, orientation)
                elif isinstance(block, ImageBlock):
                    self.draw_image(block, orientation)

        self.canvas.showPage()
        total = self.canvas.page_total
        self.canvas.save()
        return total

    def new_page(self, orientation: Orientation):
        self.canvas.showPage()
        self.canvas.setPageSize(self._size_for(orientation))
        self.orientations.append(orientation)
        self.y = self.draw_header()

    # -------------------------------------------------------------------------
    # Drawing
    # -------------------------------------------------------------------------

    def draw_header(self) -> float:
        """Emblem, organisation and document title. Returns the content offset."""
        c = self.canvas
        centre = self.page_width / 2

        c.saveState()
        c.setStrokeColor(self.brand_color)
        c.setLineWidth(0.5 * mm)
        c.circle(centre, self._baseline(15 * mm), 10 * mm, stroke=1, fill=0)
        c.setFont(TEXT_FONT, 6)
        c.setFillGray(100 / 255.0)
        c.drawCentredString(centre, self._baseline(16 * mm), self.branding.emblem_label)

        c.setFillColor(self.brand_color)
        c.setFont(BOLD_FONT, 11)
        c.drawCentredString(centre, self._baseline(32 * mm), self.branding.organization_name.upper())
        c.setFont(BOLD_FONT, 15)
        c.drawCentredString(centre, self._baseline(42 * mm), self.document.title.upper())
        c.restoreState()

        return CONTENT_TOP

    def draw_section_title(self, title: str):
        c = self.canvas
        c.saveState()
        c.setFont(BOLD_FONT, 13)
        c.setFillColor(self.brand_color)
        c.drawString(MARGIN, self._baseline(self.y), title.upper())
        c.restoreState()
        self.y += SECTION_TITLE_ADVANCE

    def draw_text(self, text: str, orientation: Orientation):
        lines = []
        for paragraph in text.split("\n"):
            lines.extend(simpleSplit(paragraph, TEXT_FONT, TEXT_SIZE, self.printable_width) or [""])

        block_height = len(lines) * LINE_HEIGHT
        fits_on_fresh_page = block_height <= self.bottom_limit - CONTENT_TOP
        if self.y + block_height > self.bottom_limit and fits_on_fresh_page:
            self.new_page(orientation)

        for line in lines:
            # Only reached for blocks taller than a whole page
            if self.y + LINE_HEIGHT > self.bottom_limit:
                self.new_page(orientation)
            self.canvas.setFont(TEXT_FONT, TEXT_SIZE)
            self.canvas.setFillGray(50 / 255.0)
            self.canvas.drawString(MARGIN, self._baseline(self.y), line)
            self.y += LINE_HEIGHT

        self.y += BLOCK_SPACING

    def build_table(self, block: TableBlock, width: float) -> Table:
        columns = len(block.headers)
        font_size = fit_table_font_size(block, width / columns)
        if font_size < TABLE_FONT_SIZE:
            logger.debug(f"Table with {columns} columns shrunk to {font_size}pt")

        head_style = ParagraphStyle(
            "table-head", fontName=BOLD_FONT, fontSize=font_size,
            leading=font_size * 1.2, textColor=colors.white,
        )
        body_style = ParagraphStyle(
            "table-cell", fontName=TEXT_FONT, fontSize=font_size,
            leading=font_size * 1.2,
        )

        def cell(value: str, style: ParagraphStyle) -> Paragraph:
            return Paragraph(escape(value).replace("\n", "<br/>"), style)

        data = [[cell(h, head_style) for h in block.headers]]
        data.extend([cell(format_cell(v), body_style) for v in row] for row in block.rows)

        table = Table(data, colWidths=[width / columns] * columns, repeatRows=1)
        table.setStyle(TableStyle([
            ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
            ("BACKGROUND", (0, 0), (-1, 0), self.brand_color),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LEFTPADDING", (0, 0), (-1, -1), CELL_PADDING),
            ("RIGHTPADDING", (0, 0), (-1, -1), CELL_PADDING),
            ("TOPPADDING", (0, 0), (-1, -1), CELL_PADDING),
            ("BOTTOMPADDING", (0, 0), (-1, -1), CELL_PADDING),
        ]))
        return table

    def draw_table(self, block: TableBlock, orientation: Orientation):
        """Draw a table, continuing on new pages with the header row repeated."""
        if not block.headers:
            return

        c = self.canvas
        remaining = self.build_table(block, self.printable_width)

        while remaining is not None:
            width = self.printable_width
            available = self.bottom_limit - self.y
            _, height = remaining.wrapOn(c, width, available)

            if height <= available:
                remaining.drawOn(c, MARGIN, self._baseline(self.y + height))
                self.y += height
                break

            pieces = remaining.split(width, available) if available > 0 else []
            if len(pieces) < 2:
                if self.y <= CONTENT_TOP:
                    # A single row taller than a page: draw it and let it overflow
                    remaining.drawOn(c, MARGIN, self._baseline(self.y + height))
                    self.y += height
                    break
                self.new_page(orientation)
                continue

            head, remaining = pieces[0], pieces[1]
            _, head_height = head.wrapOn(c, width, available)
            head.drawOn(c, MARGIN, self._baseline(self.y + head_height))
            self.new_page(orientation)

        self.y += TABLE_SPACING

    def draw_image(self, block: ImageBlock, orientation: Orientation):
        width = block.width * mm
        height = block.height * mm
        if self.y + height > self.bottom_limit:
            self.new_page(orientation)

        reader = ImageReader(io.BytesIO(decode_data_url(block.data_url)))
        self.canvas.drawImage(
            reader, MARGIN, self._baseline(self.y + height),
            width=width, height=height, mask="auto",
        )
        self.y += height + BLOCK_SPACING
