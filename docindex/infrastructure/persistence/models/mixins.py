"""Column mixins shared by ORM models."""

from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from docindex.shared.utils.ids import generate_document_id


class CuidMixin:
    """CUID2 string primary key, generated client-side so it is known before insert."""

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_document_id)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
