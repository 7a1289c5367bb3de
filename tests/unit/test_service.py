# tests/unit/test_service.py
"""
Unit tests for the export service.
"""

import asyncio

import pytest


class StubRenderer:
    """Records what it was asked to render."""

    format = "pdf"

    def __init__(self):
        self.calls = []

    def render(self, payload, today=None):
        from report_export.export.files import GeneratedFile

        self.calls.append(payload)
        return GeneratedFile.build("stub.pdf", "pdf", b"%PDF-stub")

    def is_available(self):
        return True


@pytest.fixture
def service(export_settings, tmp_path):
    from report_export.export.service import ExportService
    return ExportService(settings=export_settings, outputs_dir=tmp_path / "outputs")


class TestExportService:
    """Tests for format dispatch."""

    @pytest.mark.parametrize("fmt,mime", [
        ("pdf", "application/pdf"),
        ("docx", "application/vnd.openxmlformats-officedocument.wordprocessingml.document"),
        ("xlsx", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"),
        ("csv", "text/csv"),
        ("json", "application/json"),
    ])
    def test_every_format(self, service, plan_document, today, fmt, mime):
        generated = service.export(plan_document, fmt, today)

        assert generated.filename == f"plan-official-report-2026-03-14.{fmt}"
        assert generated.mime_type == mime
        assert generated.size_bytes > 0

    def test_format_lookup_is_lenient(self, service):
        from report_export.export.service import ExportFormat

        assert service.renderer_for(".PDF") is service.renderers[ExportFormat.PDF]
        assert service.renderer_for(ExportFormat.CSV) is service.renderers[ExportFormat.CSV]

    def test_unknown_format(self, service, plan_document):
        from report_export.core.exceptions import ConfigurationException

        with pytest.raises(ConfigurationException):
            service.export(plan_document, "pptx")

    def test_same_run_shares_filename_stem(self, service, training_plan_document, today):
        names = [service.export(training_plan_document, fmt, today).filename
                 for fmt in ("pdf", "docx", "xlsx", "csv")]

        assert {name.rsplit(".", 1)[0] for name in names} == {
            "annual-training-plan---2026-official-report-2026-03-14"
        }

    def test_renderer_override(self, export_settings, plan_document):
        from report_export.export.service import ExportFormat, ExportService

        stub = StubRenderer()
        service = ExportService(settings=export_settings, renderers={"pdf": stub})

        generated = service.export(plan_document, "pdf")

        assert generated.data == b"%PDF-stub"
        assert stub.calls == [plan_document]
        assert service.renderers[ExportFormat.PDF] is stub

    def test_renderers_share_branding(self, service):
        branding = {id(renderer.branding) for renderer in service.renderers.values()}

        assert branding == {id(service.branding)}

    def test_copy_for_sheets(self, export_settings, plan_document):
        from report_export.export.clipboard import COPY_CONFIRMATION, MemoryClipboard
        from report_export.export.service import ExportService

        clipboard = MemoryClipboard()
        service = ExportService(settings=export_settings, clipboard=clipboard)

        assert asyncio.run(service.copy_for_sheets(plan_document)) == COPY_CONFIRMATION
        assert clipboard.content == "A\tB\nx\t1\ny\t2"

    def test_mime_map_covers_exactly_the_export_formats(self):
        from report_export.export.files import MIME_TYPES
        from report_export.export.service import ExportFormat

        assert set(MIME_TYPES) == {fmt.value for fmt in ExportFormat}

    def test_availability(self, service):
        availability = service.availability()

        assert set(availability) == {"pdf", "docx", "xlsx", "csv", "json"}
        assert availability["csv"] is True
        assert availability["json"] is True


class TestSaveToDisk:
    """Tests for writing exports to the outputs directory."""

    def test_writes_into_outputs_dir(self, service, plan_document, today):
        generated = service.export(plan_document, "csv", today)

        path = service.save_to_disk(generated)

        assert path.name == "plan-official-report-2026-03-14.csv"
        assert path.read_bytes() == generated.data

    def test_explicit_directory(self, service, plan_document, tmp_path):
        generated = service.export(plan_document, "json")

        path = service.save_to_disk(generated, tmp_path / "elsewhere")

        assert path.parent == tmp_path / "elsewhere"
        assert path.exists()

    def test_no_directory_configured(self, export_settings, plan_document):
        from report_export.core.exceptions import ConfigurationException
        from report_export.export.service import ExportService

        service = ExportService(settings=export_settings)
        generated = service.export(plan_document, "json")

        with pytest.raises(ConfigurationException):
            service.save_to_disk(generated)

    def test_from_config(self):
        from report_export.config import PATHS
        from report_export.export.service import ExportService

        service = ExportService.from_config()

        assert str(service.outputs_dir) == PATHS.outputs_dir
