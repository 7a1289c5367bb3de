# report_export/export/model.py
"""
Format-agnostic report document model.

A Document is a title plus ordered sections; each section holds text,
table and image blocks. Instances are frozen once built so renderers can
share them safely.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from report_export.core.exceptions import InvalidDocumentError

Cell = Union[str, int, float, None]


class Orientation(str, Enum):
    """Page orientation for print rendering."""
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


@dataclass(frozen=True)
class TextBlock:
    """Opaque, possibly multi-line narrative text."""
    text: str

    def to_dict(self) -> Any:
        return self.text


@dataclass(frozen=True)
class TableBlock:
    """A flat table. Every row has exactly len(headers) scalar cells."""
    headers: Tuple[str, ...]
    rows: Tuple[Tuple[Cell, ...], ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "headers", tuple(str(h) for h in self.headers))
        object.__setattr__(self, "rows", tuple(tuple(row) for row in self.rows))

        width = len(self.headers)
        for index, row in enumerate(self.rows):
            if len(row) != width:
                raise InvalidDocumentError(
                    f"table row {index} has {len(row)} cells, expected {width}"
                )
            for cell in row:
                if cell is not None and not isinstance(cell, (str, int, float)):
                    raise InvalidDocumentError(
                        f"table row {index} holds a non-scalar cell: {type(cell).__name__}"
                    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "table",
            "headers": list(self.headers),
            "rows": [list(row) for row in self.rows],
        }


@dataclass(frozen=True)
class ImageBlock:
    """An embedded image, sized in millimetres. Only the print renderer draws it."""
    data_url: str
    width: float
    height: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "image",
            "dataUrl": self.data_url,
            "width": self.width,
            "height": self.height,
        }


ContentBlock = Union[TextBlock, TableBlock, ImageBlock]


@dataclass(frozen=True)
class Section:
    """A titled run of content blocks."""
    title: str
    content: Tuple[ContentBlock, ...] = ()
    orientation: Optional[Orientation] = None

    def __post_init__(self):
        object.__setattr__(self, "content", tuple(self.content))
        if self.orientation is not None and not isinstance(self.orientation, Orientation):
            try:
                object.__setattr__(self, "orientation", Orientation(self.orientation))
            except ValueError:
                raise InvalidDocumentError(
                    f"unknown orientation '{self.orientation}' in section '{self.title}'"
                )

    @property
    def tables(self) -> List[TableBlock]:
        return [block for block in self.content if isinstance(block, TableBlock)]

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "title": self.title,
            "content": [block.to_dict() for block in self.content],
        }
        if self.orientation is not None:
            data["orientation"] = self.orientation.value
        return data


@dataclass(frozen=True)
class Document:
    """A complete report: title and ordered sections."""
    title: str
    sections: Tuple[Section, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "sections", tuple(self.sections))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "sections": [section.to_dict() for section in self.sections],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Document":
        """Build a document from its JSON wire form."""
        if not isinstance(data, dict) or "title" not in data:
            raise InvalidDocumentError("document needs a 'title'")

        sections = []
        for raw_section in data.get("sections", []):
            sections.append(Section(
                title=raw_section.get("title", ""),
                content=tuple(_block_from_dict(item) for item in raw_section.get("content", [])),
                orientation=raw_section.get("orientation"),
            ))
        return cls(title=data["title"], sections=tuple(sections))


def _block_from_dict(item: Any) -> ContentBlock:
    if isinstance(item, str):
        return TextBlock(item)
    if not isinstance(item, dict):
        raise InvalidDocumentError(f"unsupported content item: {item!r}")

    block_type = item.get("type")
    if block_type == "text":
        return TextBlock(item.get("text", ""))
    if block_type == "table":
        return TableBlock(headers=item.get("headers", []), rows=item.get("rows", []))
    if block_type == "image":
        return ImageBlock(
            data_url=item.get("dataUrl") or item.get("data_url", ""),
            width=float(item.get("width", 0)),
            height=float(item.get("height", 0)),
        )
    raise InvalidDocumentError(f"unknown content type '{block_type}'")
