"""Document ORM model. Stored file metadata, extracted text and categorization."""

from sqlalchemy import BigInteger, Index, String, Text
from sqlalchemy.dialects.postgresql import TSVECTOR
from sqlalchemy.orm import Mapped, mapped_column

from docindex.infrastructure.persistence.database import Base
from docindex.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Document(CuidMixin, TimestampMixin, Base):
    """Document entity. Table: document.

    search_vector is maintained by a database trigger over title and
    content (see the initial migration); the ORM never writes it.
    """

    __tablename__ = "document"

    title: Mapped[str] = mapped_column(String, nullable=False)
    original_filename: Mapped[str] = mapped_column(String, nullable=False)
    mime_type: Mapped[str] = mapped_column(String, nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    checksum: Mapped[str] = mapped_column(String, nullable=False)
    storage_ref: Mapped[str] = mapped_column(String, nullable=False)
    file_url: Mapped[str] = mapped_column(String, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    topic: Mapped[str] = mapped_column(String, nullable=False, index=True)
    project: Mapped[str] = mapped_column(String, nullable=False, index=True)
    team: Mapped[str] = mapped_column(String, nullable=False, index=True)
    search_vector: Mapped[str | None] = mapped_column(
        TSVECTOR, nullable=True, deferred=True
    )

    __table_args__ = (
        Index("ix_document_checksum_unique", "checksum", unique=True),
        Index("ix_document_search_vector", "search_vector", postgresql_using="gin"),
    )
