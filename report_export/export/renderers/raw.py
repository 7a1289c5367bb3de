# report_export/export/renderers/raw.py
"""
Raw structured renderer (JSON) for archival and debugging.
"""

import json
from datetime import date
from typing import Any, Optional

from report_export.export.files import GeneratedFile
from report_export.export.naming import FALLBACK_TITLE
from report_export.export.renderers.base import BaseRenderer


def _payload_title(payload: Any) -> str:
    if isinstance(payload, dict):
        title = payload.get("title")
    else:
        title = getattr(payload, "title", None)
    return title if isinstance(title, str) and title.strip() else FALLBACK_TITLE


class JsonRenderer(BaseRenderer):
    """Serializes any payload verbatim; Documents go through to_dict()."""

    format = "json"

    def render(self, payload: Any, today: Optional[date] = None) -> GeneratedFile:
        data = payload.to_dict() if hasattr(payload, "to_dict") else payload
        text = json.dumps(data, indent=2, ensure_ascii=False, default=str)

        return GeneratedFile.build(
            self.file_name(_payload_title(payload), today),
            self.format,
            text.encode('utf-8'),
        )
