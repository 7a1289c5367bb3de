# report_export/export/clipboard.py
"""
Clipboard export: copies one table as tab-separated text.

The clipboard is a single shared slot, so writes through one
ClipboardRenderer are serialized on an asyncio.Lock.
"""

import asyncio
import shutil
import sys
from abc import ABC, abstractmethod
from typing import List, Optional

from report_export.config.schema import ExportSettings
from report_export.core.exceptions import ClipboardWriteError
from report_export.export.extraction import TableSelectionPolicy, require_table
from report_export.export.model import Document
from report_export.export.renderers.delimited import table_to_tsv
from report_export.utils.logger import setup_logger

logger = setup_logger(__name__)

COPY_CONFIRMATION = "Official Table copied to clipboard."


class ClipboardBackend(ABC):
    """Where copied text ends up."""

    @abstractmethod
    async def write_text(self, text: str) -> None:
        ...


class MemoryClipboard(ClipboardBackend):
    """In-process single-slot clipboard."""

    def __init__(self):
        self.content: Optional[str] = None

    async def write_text(self, text: str) -> None:
        self.content = text


class SystemClipboard(ClipboardBackend):
    """Pipes text into the platform clipboard utility."""

    CANDIDATES = [
        ["pbcopy"],
        ["clip"],
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]

    def __init__(self, command: Optional[List[str]] = None):
        self.command = command or self._detect()

    @classmethod
    def _detect(cls) -> Optional[List[str]]:
        for candidate in cls.CANDIDATES:
            if shutil.which(candidate[0]):
                return candidate
        return None

    async def write_text(self, text: str) -> None:
        if not self.command:
            raise ClipboardWriteError(f"no clipboard utility found on {sys.platform}")

        process = await asyncio.create_subprocess_exec(
            *self.command,
            stdin=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        _, stderr = await process.communicate(text.encode('utf-8'))
        if process.returncode != 0:
            raise ClipboardWriteError(
                stderr.decode('utf-8', errors='replace').strip() or f"exit code {process.returncode}"
            )


class ClipboardRenderer:
    """Flattens a document's table and writes it to a clipboard backend."""

    format = "sheets"

    def __init__(
        self,
        backend: Optional[ClipboardBackend] = None,
        settings: Optional[ExportSettings] = None,
    ):
        self.backend = backend or MemoryClipboard()
        self.settings = settings or ExportSettings()
        self._lock = asyncio.Lock()

    async def copy(self, document: Document) -> str:
        """
        Copy the document's table as TSV.

        Returns a confirmation message. Raises MissingTableDataError when
        there is no table and ClipboardWriteError when the backend fails.
        """
        policy = TableSelectionPolicy(self.settings.table_selection_policy)
        table = require_table(document, self.format, policy)
        text = table_to_tsv(table)

        async with self._lock:
            try:
                await self.backend.write_text(text)
            except ClipboardWriteError:
                raise
            except Exception as e:
                raise ClipboardWriteError(str(e)) from e

        logger.info(f"Copied '{document.title}' table to clipboard: {len(table.rows)} row(s)")
        return COPY_CONFIRMATION
