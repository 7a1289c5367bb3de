# report_export/api/schemas.py
"""
Request/response models for the export API.
"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from report_export.export.model import Document


class TextContent(BaseModel):
    """Explicitly tagged text block; a bare string works too."""
    type: Literal["text"] = "text"
    text: str


class TableContent(BaseModel):
    """Table block in wire form."""
    type: Literal["table"] = "table"
    headers: List[str]
    rows: List[List[Union[str, int, float, None]]] = Field(default_factory=list)


class ImageContent(BaseModel):
    """Image block in wire form; width and height in millimetres."""
    type: Literal["image"] = "image"
    dataUrl: str
    width: float
    height: float


class SectionPayload(BaseModel):
    title: str
    content: List[Union[str, TextContent, TableContent, ImageContent]] = Field(default_factory=list)
    orientation: Optional[Literal["portrait", "landscape"]] = None


class DocumentPayload(BaseModel):
    """A report document as posted by the client."""
    title: str
    sections: List[SectionPayload] = Field(default_factory=list)

    def to_document(self) -> Document:
        return Document.from_dict(self.model_dump(exclude_none=True))


class ClipboardResponse(BaseModel):
    """Result of a copy-for-sheets export."""
    message: str
    payload: str


class HealthResponse(BaseModel):
    status: str
    renderers: Dict[str, bool]
    cache: Dict[str, Any]
