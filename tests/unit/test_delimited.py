# tests/unit/test_delimited.py
"""
Unit tests for the CSV renderer and TSV flattening.
"""

import csv
import io

import pytest


class TestTableToText:
    """Tests for the delimited encoders."""

    def test_csv_quotes_every_cell(self, plan_document):
        from report_export.export.renderers.delimited import table_to_csv

        table = plan_document.sections[0].tables[0]

        assert table_to_csv(table) == '"A","B"\n"x","1"\n"y","2"'

    def test_csv_escapes_embedded_quotes(self):
        from report_export.export.model import TableBlock
        from report_export.export.renderers.delimited import table_to_csv

        table = TableBlock(headers=["Note"], rows=[['say "hi"']])

        assert table_to_csv(table) == '"Note"\n"say ""hi"""'

    def test_csv_header_only(self):
        from report_export.export.model import TableBlock
        from report_export.export.renderers.delimited import table_to_csv

        assert table_to_csv(TableBlock(headers=["A", "B"])) == '"A","B"'

    def test_tsv_is_unquoted(self, plan_document):
        from report_export.export.renderers.delimited import table_to_tsv

        table = plan_document.sections[0].tables[0]

        assert table_to_tsv(table) == "A\tB\nx\t1\ny\t2"

    def test_csv_parses_back(self, training_plan_document):
        from report_export.export.cells import format_cell
        from report_export.export.renderers.delimited import table_to_csv

        table = training_plan_document.sections[1].tables[0]
        parsed = list(csv.reader(io.StringIO(table_to_csv(table))))

        assert parsed[0] == list(table.headers)
        assert parsed[1:] == [[format_cell(v) for v in row] for row in table.rows]


class TestCsvRenderer:
    """Tests for CsvRenderer."""

    def test_render_plan(self, plan_document, today):
        from report_export.export.renderers import CsvRenderer

        generated = CsvRenderer().render(plan_document, today)

        assert generated.filename == "plan-official-report-2026-03-14.csv"
        assert generated.mime_type == "text/csv"
        assert generated.data == b'"A","B"\n"x","1"\n"y","2"'
        assert generated.size_bytes == len(generated.data)
        assert generated.metadata["row_count"] == 2

    def test_uses_first_table(self, training_plan_document):
        from report_export.export.renderers import CsvRenderer

        text = CsvRenderer().render(training_plan_document).data.decode("utf-8")

        assert text.startswith('"Training Area","Quarter","Est. Cost (PGK)","Rationale"')
        assert '"Venue"' not in text
        assert '"Records","Q3","",""' in text

    def test_concatenate_policy_from_settings(self):
        from report_export.config.schema import ExportSettings
        from report_export.export.model import Document, Section, TableBlock
        from report_export.export.renderers import CsvRenderer

        document = Document(title="Roll", sections=[
            Section(title="A", content=[TableBlock(headers=["N"], rows=[["1"]])]),
            Section(title="B", content=[TableBlock(headers=["N"], rows=[["2"]])]),
        ])
        renderer = CsvRenderer(settings=ExportSettings(table_selection_policy="concatenate"))

        assert renderer.render(document).data == b'"N"\n"1"\n"2"'

    def test_missing_table(self, text_only_document):
        from report_export.core.exceptions import MissingTableDataError
        from report_export.export.renderers import CsvRenderer

        with pytest.raises(MissingTableDataError):
            CsvRenderer().render(text_only_document)
