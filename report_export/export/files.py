# report_export/export/files.py
"""
Generated file envelope returned by every renderer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

MIME_TYPES = {
    'pdf': 'application/pdf',
    'docx': 'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    'xlsx': 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    'csv': 'text/csv',
    'json': 'application/json',
}


@dataclass
class GeneratedFile:
    """Represents a rendered export."""
    filename: str
    mime_type: str
    data: bytes
    size_bytes: int
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def build(cls, filename: str, extension: str, data: bytes, **metadata) -> "GeneratedFile":
        return cls(
            filename=filename,
            mime_type=MIME_TYPES.get(extension, 'application/octet-stream'),
            data=data,
            size_bytes=len(data),
            metadata=metadata,
        )
