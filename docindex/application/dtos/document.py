"""DTOs for document use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class DocumentCreate:
    """Input for creating a document record (write-model). Use case builds this; repo persists and returns DocumentResult."""

    id: str
    title: str
    original_filename: str
    mime_type: str
    file_size: int
    checksum: str
    storage_ref: str
    file_url: str
    content: str
    topic: str
    project: str
    team: str


@dataclass(frozen=True)
class DocumentResult:
    """Document read-model (result of get_by_id, get_by_checksum, create, list)."""

    id: str
    title: str
    original_filename: str
    mime_type: str
    file_size: int
    checksum: str
    storage_ref: str
    file_url: str
    content: str
    topic: str
    project: str
    team: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class DocumentListItem:
    """Document summary for listings (no content body)."""

    id: str
    title: str
    original_filename: str
    mime_type: str
    file_size: int
    file_url: str
    topic: str
    project: str
    team: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class DocumentFilters:
    """Optional exact-match filters on the categorization fields."""

    topic: str | None = None
    project: str | None = None
    team: str | None = None
