# report_export/export/naming.py
"""
Output filename derivation shared by every renderer.
"""

import re
from datetime import date
from typing import Optional

_WHITESPACE = re.compile(r"\s+")
_INVALID_CHARS = re.compile(r'[<>:"/\\|?*]')

FALLBACK_TITLE = "export"


def slugify(title: str) -> str:
    """Lower-case a title and collapse whitespace runs into single hyphens."""
    slug = _WHITESPACE.sub("-", (title or "").strip().lower())
    slug = _INVALID_CHARS.sub("_", slug)
    return slug or FALLBACK_TITLE


def create_file_name(title: str, extension: str, today: Optional[date] = None) -> str:
    """
    Build `<slug>-official-report-<YYYY-MM-DD>.<ext>`.

    Files produced in the same run share everything but the extension.
    """
    stamp = (today or date.today()).isoformat()
    return f"{slugify(title)}-official-report-{stamp}.{extension.lstrip('.')}"
