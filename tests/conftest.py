# tests/conftest.py
"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
from datetime import date
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# 1x1 transparent PNG
PNG_DATA_URL = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


# =============================================================================
# Document Fixtures
# =============================================================================

@pytest.fixture
def today():
    """Fixed date so filenames are predictable."""
    return date(2026, 3, 14)


@pytest.fixture
def plan_payload():
    """The canonical one-table document in wire form."""
    return {
        "title": "Plan",
        "sections": [
            {
                "title": "Data",
                "content": [
                    {"type": "table", "headers": ["A", "B"], "rows": [["x", 1], ["y", 2]]}
                ],
            }
        ],
    }


@pytest.fixture
def plan_document(plan_payload):
    from report_export.export.model import Document
    return Document.from_dict(plan_payload)


@pytest.fixture
def training_plan_document():
    """Multi-section report mixing text, tables and orientations."""
    from report_export.export.model import Document, Section, TableBlock, TextBlock

    return Document(
        title="Annual Training Plan - 2026",
        sections=[
            Section(
                title="Executive Summary",
                content=[TextBlock("Capability gaps were found in 4 divisions.\nPriority: finance.")],
            ),
            Section(
                title="Training Schedule",
                orientation="landscape",
                content=[
                    TextBlock("Planned interventions by quarter."),
                    TableBlock(
                        headers=["Training Area", "Quarter", "Est. Cost (PGK)", "Rationale"],
                        rows=[
                            ["Financial Management", "Q1", 12000, "Audit findings"],
                            ["Leadership", "Q2", 8500.0, "Succession \"critical\" roles"],
                            ["Records", "Q3", None, ""],
                        ],
                    ),
                ],
            ),
            Section(
                title="Budget",
                content=[TableBlock(headers=["Item", "Amount"], rows=[["Venue", 3000]])],
            ),
        ],
    )


@pytest.fixture
def text_only_document():
    from report_export.export.model import Document, Section, TextBlock
    return Document(
        title="Narrative Only",
        sections=[Section(title="Overview", content=[TextBlock("No tables here.")])],
    )


@pytest.fixture
def png_data_url():
    return PNG_DATA_URL


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture
def branding():
    from report_export.config.schema import BrandingSettings
    return BrandingSettings()


@pytest.fixture
def export_settings():
    """Uncompressed PDFs so tests can look at page text."""
    from report_export.config.schema import ExportSettings
    return ExportSettings(pdf_compression=False)


# =============================================================================
# Cache Fixtures
# =============================================================================

class FakeClock:
    """Manually advanced clock in seconds."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def report_cache(clock):
    from report_export.cache import MemoryStore, ReportCache
    return ReportCache(store=MemoryStore(max_entries=None), ttl=3600, clock=clock)


# =============================================================================
# Server Fixtures
# =============================================================================

@pytest.fixture
def test_client(export_settings):
    """FastAPI test client with an isolated export service and cache."""
    from fastapi.testclient import TestClient
    from report_export.api.routes import get_export_service
    from report_export.cache import MemoryStore, ReportCache, get_report_cache
    from report_export.export.service import ExportService
    from report_export.main import app

    service = ExportService(settings=export_settings)
    cache = ReportCache(store=MemoryStore())
    app.dependency_overrides[get_export_service] = lambda: service
    app.dependency_overrides[get_report_cache] = lambda: cache

    yield TestClient(app)

    app.dependency_overrides.clear()
