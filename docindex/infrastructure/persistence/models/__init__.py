"""ORM models. Import here so Alembic autogenerate sees every table on Base.metadata."""

from docindex.infrastructure.persistence.models.document import Document

__all__ = ["Document"]
