# tests/unit/test_docx.py
"""
Unit tests for the word-processor renderer.
"""

import io
import sys

import pytest


def load(generated):
    from docx import Document
    return Document(io.BytesIO(generated.data))


class TestDocxRenderer:
    """Tests for DocxRenderer."""

    def test_render_plan(self, plan_document, today):
        from report_export.export.renderers import DocxRenderer

        generated = DocxRenderer().render(plan_document, today)

        assert generated.filename == "plan-official-report-2026-03-14.docx"
        assert generated.data[:2] == b"PK"
        assert generated.metadata["section_count"] == 1

    def test_table_contents(self, plan_document):
        from report_export.export.renderers import DocxRenderer

        doc = load(DocxRenderer().render(plan_document))

        assert len(doc.tables) == 1
        table = doc.tables[0]
        assert [cell.text for cell in table.rows[0].cells] == ["A", "B"]
        assert [cell.text for cell in table.rows[2].cells] == ["y", "2"]

    def test_none_cells_render_empty(self, training_plan_document):
        from report_export.export.renderers import DocxRenderer

        doc = load(DocxRenderer().render(training_plan_document))
        schedule = doc.tables[0]

        assert [cell.text for cell in schedule.rows[3].cells] == ["Records", "Q3", "", ""]
        assert schedule.rows[2].cells[2].text == "8500"

    def test_sections_start_new_pages(self, training_plan_document):
        from report_export.export.renderers import DocxRenderer

        doc = load(DocxRenderer().render(training_plan_document))

        assert len(doc.sections) == 3
        titles = [p.text for p in doc.paragraphs]
        for title in ("Executive Summary", "Training Schedule", "Budget"):
            assert title in titles

    def test_multiline_text_splits_into_paragraphs(self, training_plan_document):
        from report_export.export.renderers import DocxRenderer

        doc = load(DocxRenderer().render(training_plan_document))
        texts = [p.text for p in doc.paragraphs]

        assert "Capability gaps were found in 4 divisions." in texts
        assert "Priority: finance." in texts

    def test_header_and_footer(self, plan_document, branding):
        from report_export.export.renderers import DocxRenderer

        doc = load(DocxRenderer(branding=branding).render(plan_document))
        section = doc.sections[0]

        assert branding.organization_name.upper() in section.header.paragraphs[0].text
        footer_xml = section.footer._element.xml
        assert "NUMPAGES" in footer_xml
        assert "PAGE" in footer_xml
        assert branding.custodian_line in section.footer.paragraphs[0].text

    def test_header_cells_shaded_with_brand_color(self, plan_document, branding):
        from report_export.export.renderers import DocxRenderer

        doc = load(DocxRenderer(branding=branding).render(plan_document))
        header_cell_xml = doc.tables[0].rows[0].cells[0]._tc.xml

        assert branding.color_hex in header_cell_xml

    def test_images_are_skipped(self, png_data_url):
        from report_export.export.model import Document, ImageBlock, Section, TextBlock
        from report_export.export.renderers import DocxRenderer

        document = Document(title="Chart", sections=[Section(title="S", content=[
            TextBlock("before"),
            ImageBlock(data_url=png_data_url, width=20, height=20),
        ])])

        doc = load(DocxRenderer().render(document))

        assert "before" in [p.text for p in doc.paragraphs]
        assert not doc.inline_shapes

    def test_missing_library_raises(self, plan_document, monkeypatch):
        from report_export.core.exceptions import RendererUnavailableError
        from report_export.export.renderers import DocxRenderer

        # A None entry makes any import of the package fail
        monkeypatch.setitem(sys.modules, "docx", None)
        renderer = DocxRenderer()

        assert renderer.is_available() is False
        with pytest.raises(RendererUnavailableError) as exc_info:
            renderer.render(plan_document)
        assert exc_info.value.library == "python-docx"
