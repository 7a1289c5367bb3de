# report_export/export/renderers/docx.py
"""
Structured word-processor renderer (DOCX).

Pagination is left to the viewer: the footer carries PAGE / NUMPAGES fields
rather than computed numbers.
"""

import io
from datetime import date
from typing import Optional

from report_export.export.cells import format_cell
from report_export.export.files import GeneratedFile
from report_export.export.model import Document, ImageBlock, TableBlock, TextBlock
from report_export.export.renderers.base import BaseRenderer
from report_export.utils.logger import setup_logger

logger = setup_logger(__name__)


class DocxRenderer(BaseRenderer):
    """Flowing document with running header/footer and styled tables."""

    format = "docx"
    library = "python-docx"

    def _check_backend(self) -> None:
        self._require("docx")

    def render(self, document: Document, today: Optional[date] = None) -> GeneratedFile:
        self._check_backend()
        from docx import Document as WordDocument
        from docx.enum.section import WD_SECTION
        from docx.shared import Inches

        doc = WordDocument()
        doc.core_properties.title = document.title
        doc.core_properties.author = self.branding.organization_name

        first = doc.sections[0]
        self._write_header(first.header)
        self._write_footer(first.footer)

        skipped_images = 0
        for index, section in enumerate(document.sections):
            # Later sections inherit (link to) the first section's header and footer
            docx_section = first if index == 0 else doc.add_section(WD_SECTION.NEW_PAGE)
            docx_section.top_margin = docx_section.bottom_margin = Inches(1)
            docx_section.left_margin = docx_section.right_margin = Inches(1)

            self._add_section_title(doc, section.title)
            for block in section.content:
                if isinstance(block, TextBlock):
                    self._add_text(doc, block.text)
                elif isinstance(block, TableBlock):
                    self._add_table(doc, block)
                elif isinstance(block, ImageBlock):
                    skipped_images += 1

        if skipped_images:
            logger.debug(f"DOCX '{document.title}': {skipped_images} image block(s) not rendered")

        buffer = io.BytesIO()
        doc.save(buffer)

        logger.info(f"Rendered DOCX '{document.title}': {len(document.sections)} section(s)")
        return GeneratedFile.build(
            self.file_name(document.title, today),
            self.format,
            buffer.getvalue(),
            section_count=len(document.sections),
        )

    # -------------------------------------------------------------------------
    # Header / footer
    # -------------------------------------------------------------------------

    def _write_header(self, header):
        from docx.enum.text import WD_ALIGN_PARAGRAPH
        from docx.shared import Pt, RGBColor

        paragraph = header.paragraphs[0]
        paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
        run = paragraph.add_run(self.branding.organization_name.upper())
        run.bold = True
        run.font.size = Pt(11)
        run.font.color.rgb = RGBColor.from_string(self.branding.color_hex)

    def _write_footer(self, footer):
        from docx.enum.text import WD_ALIGN_PARAGRAPH
        from docx.shared import Pt

        size = Pt(8)
        paragraph = footer.paragraphs[0]
        paragraph.alignment = WD_ALIGN_PARAGRAPH.LEFT

        paragraph.add_run(self.branding.custodian_line).font.size = size
        paragraph.add_run(f"\t\t{self.branding.footer_label} - Page ").font.size = size
        self._add_field(paragraph, "PAGE", size)
        paragraph.add_run(" of ").font.size = size
        self._add_field(paragraph, "NUMPAGES", size)

    @staticmethod
    def _add_field(paragraph, instruction: str, size):
        """Append a field the viewer evaluates (page number, page total)."""
        from docx.oxml import OxmlElement
        from docx.oxml.ns import qn

        run = paragraph.add_run()
        run.font.size = size

        begin = OxmlElement('w:fldChar')
        begin.set(qn('w:fldCharType'), 'begin')
        instr = OxmlElement('w:instrText')
        instr.set(qn('xml:space'), 'preserve')
        instr.text = instruction
        separate = OxmlElement('w:fldChar')
        separate.set(qn('w:fldCharType'), 'separate')
        placeholder = OxmlElement('w:t')
        placeholder.text = "1"
        end = OxmlElement('w:fldChar')
        end.set(qn('w:fldCharType'), 'end')

        for element in (begin, instr, separate, placeholder, end):
            run._r.append(element)

    # -------------------------------------------------------------------------
    # Body
    # -------------------------------------------------------------------------

    def _add_section_title(self, doc, title: str):
        from docx.shared import Pt, RGBColor

        paragraph = doc.add_paragraph()
        paragraph.paragraph_format.space_before = Pt(20)
        paragraph.paragraph_format.space_after = Pt(10)
        run = paragraph.add_run(title)
        run.bold = True
        run.font.size = Pt(14)
        run.font.color.rgb = RGBColor.from_string(self.branding.color_hex)

    @staticmethod
    def _add_text(doc, text: str):
        from docx.shared import Pt

        for line in text.split('\n'):
            paragraph = doc.add_paragraph()
            paragraph.paragraph_format.space_after = Pt(6)
            paragraph.add_run(line).font.size = Pt(10)

    def _add_table(self, doc, block: TableBlock):
        from docx.enum.text import WD_ALIGN_PARAGRAPH
        from docx.oxml import OxmlElement
        from docx.oxml.ns import qn
        from docx.shared import Pt, RGBColor

        if not block.headers:
            return

        table = doc.add_table(rows=1, cols=len(block.headers))
        table.style = 'Table Grid'

        for cell, header in zip(table.rows[0].cells, block.headers):
            paragraph = cell.paragraphs[0]
            paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
            run = paragraph.add_run(header)
            run.bold = True
            run.font.color.rgb = RGBColor(0xFF, 0xFF, 0xFF)

            shading = OxmlElement('w:shd')
            shading.set(qn('w:val'), 'clear')
            shading.set(qn('w:color'), 'auto')
            shading.set(qn('w:fill'), self.branding.color_hex)
            cell._tc.get_or_add_tcPr().append(shading)

        for row in block.rows:
            for cell, value in zip(table.add_row().cells, row):
                cell.paragraphs[0].add_run(format_cell(value)).font.size = Pt(9)
