# report_export/config/schema.py
"""
Configuration schema for the export core.
Each settings group is a dataclass with field metadata for validation.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional


class ConfigCategory(Enum):
    """Categories for grouping configuration fields."""
    BRANDING = "branding"
    EXPORT = "export"
    CACHE = "cache"
    SERVER = "server"
    PATHS = "paths"


@dataclass
class ConfigField:
    """Metadata for a configuration field."""
    name: str
    category: ConfigCategory
    description: str
    field_type: str  # "int", "float", "str", "bool", "list", "path"
    default: Any
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    options: Optional[List[str]] = None
    editable: bool = True
    requires_restart: bool = False


# =============================================================================
# Branding
# =============================================================================

@dataclass
class BrandingSettings:
    """
    Institutional identity stamped onto every rendered document.
    One instance per report tenant.
    """
    organization_name: str = "Independent State of Papua New Guinea"
    custodian_line: str = "System Custodian: Department of Personnel Management (DPM)"
    primary_color: str = "#1A365D"
    emblem_label: str = "CREST"
    footer_label: str = "Official Document"

    @property
    def color_hex(self) -> str:
        """Brand colour without the leading '#', upper-cased (docx style)."""
        return self.primary_color.lstrip("#").upper()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def get_field_metadata(cls) -> List[ConfigField]:
        return [
            ConfigField("organization_name", ConfigCategory.BRANDING,
                        "Organisation printed in running headers", "str",
                        cls.organization_name),
            ConfigField("custodian_line", ConfigCategory.BRANDING,
                        "Attribution printed in running footers", "str",
                        cls.custodian_line),
            ConfigField("primary_color", ConfigCategory.BRANDING,
                        "Brand colour as #RRGGBB", "str", cls.primary_color),
        ]


# =============================================================================
# Export
# =============================================================================

@dataclass
class ExportSettings:
    """Renderer behaviour."""
    page_size: str = "A4"
    pdf_compression: bool = True
    table_selection_policy: str = "first_found"
    sheet_name_max_length: int = 31
    wide_column_width: int = 60
    column_width: int = 25

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def get_field_metadata(cls) -> List[ConfigField]:
        return [
            ConfigField("page_size", ConfigCategory.EXPORT,
                        "Print page size", "str", "A4",
                        options=["A4", "LETTER"]),
            ConfigField("pdf_compression", ConfigCategory.EXPORT,
                        "Compress PDF page streams", "bool", True),
            ConfigField("table_selection_policy", ConfigCategory.EXPORT,
                        "Which table CSV/clipboard exports", "str", "first_found",
                        options=["first_found", "concatenate"]),
            ConfigField("sheet_name_max_length", ConfigCategory.EXPORT,
                        "Maximum workbook sheet name length", "int", 31, 1, 31),
            ConfigField("wide_column_width", ConfigCategory.EXPORT,
                        "Width of the last (remarks) column", "int", 60, 5, 255),
            ConfigField("column_width", ConfigCategory.EXPORT,
                        "Width of the other columns", "int", 25, 5, 255),
        ]


# =============================================================================
# Cache
# =============================================================================

@dataclass
class CacheSettings:
    """Report result cache."""
    ttl_seconds: int = 3600
    max_entries: int = 256
    backend: str = "memory"
    redis_url: str = "redis://localhost:6379/0"
    key_prefix: str = "report-cache:"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def get_field_metadata(cls) -> List[ConfigField]:
        return [
            ConfigField("ttl_seconds", ConfigCategory.CACHE,
                        "Freshness window (seconds)", "int", 3600, 1, 86400),
            ConfigField("max_entries", ConfigCategory.CACHE,
                        "Entries kept by the memory store", "int", 256, 1, 100000),
            ConfigField("backend", ConfigCategory.CACHE,
                        "Cache store", "str", "memory",
                        options=["memory", "redis"], requires_restart=True),
        ]


# =============================================================================
# Server / paths
# =============================================================================

@dataclass
class ServerSettings:
    """FastAPI server settings."""
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def get_field_metadata(cls) -> List[ConfigField]:
        return [
            ConfigField("port", ConfigCategory.SERVER,
                        "HTTP port", "int", 8000, 1, 65535, requires_restart=True),
            ConfigField("log_level", ConfigCategory.SERVER,
                        "Log level", "str", "INFO",
                        options=["DEBUG", "INFO", "WARNING", "ERROR"]),
        ]


@dataclass
class PathSettings:
    """Application file paths."""
    base_dir: str = ""
    outputs_dir: str = "outputs"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
