# report_export/export/renderers/base.py
"""
Base class for all document renderers.
"""

import importlib
from abc import ABC, abstractmethod
from datetime import date
from types import ModuleType
from typing import Any, Optional

from report_export.config.schema import BrandingSettings, ExportSettings
from report_export.core.exceptions import RendererUnavailableError
from report_export.export.files import GeneratedFile
from report_export.export.naming import create_file_name


class BaseRenderer(ABC):
    """
    Turns a Document into one output format.

    Branding and export settings are injected so one engine can serve
    several report tenants.
    """

    #: format key, also the file extension
    format: str = ""
    #: distribution name of the backing library, if any
    library: Optional[str] = None

    def __init__(
        self,
        branding: Optional[BrandingSettings] = None,
        settings: Optional[ExportSettings] = None,
    ):
        self.branding = branding or BrandingSettings()
        self.settings = settings or ExportSettings()

    @abstractmethod
    def render(self, payload: Any, today: Optional[date] = None) -> GeneratedFile:
        """Render `payload` and return the file bytes with their derived name."""

    def file_name(self, title: str, today: Optional[date] = None) -> str:
        return create_file_name(title, self.format, today)

    def _require(self, module: str) -> ModuleType:
        """Import a backing library or fail loudly."""
        try:
            return importlib.import_module(module)
        except ImportError as e:
            raise RendererUnavailableError(self.format, self.library or module, e) from e

    def is_available(self) -> bool:
        if not self.library:
            return True
        try:
            self._check_backend()
        except RendererUnavailableError:
            return False
        return True

    def _check_backend(self) -> None:
        """Subclasses import their backing library here."""
