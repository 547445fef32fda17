"""Document API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class DocumentResponse(BaseModel):
    """Stored document record (POST /documents and GET /documents/{id})."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    original_filename: str
    mime_type: str
    file_size: int
    checksum: str
    file_url: str
    content: str
    topic: str
    project: str
    team: str
    created_at: datetime | None = None


class DocumentListItem(BaseModel):
    """Document list item (no content body)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    original_filename: str
    mime_type: str | None = None
    file_size: int | None = None
    file_url: str
    topic: str
    project: str
    team: str
    created_at: datetime | None = None
