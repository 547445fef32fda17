"""create document table with full-text search_vector

Revision ID: a1c4e7f20b93
Revises:
Create Date: 2025-03-04

Document records (file metadata, extracted content, categorization) plus a
tsvector over title and content kept current by a trigger.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "a1c4e7f20b93"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "document",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("original_filename", sa.String(), nullable=False),
        sa.Column("mime_type", sa.String(), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("checksum", sa.String(), nullable=False),
        sa.Column("storage_ref", sa.String(), nullable=False),
        sa.Column("file_url", sa.String(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("topic", sa.String(), nullable=False),
        sa.Column("project", sa.String(), nullable=False),
        sa.Column("team", sa.String(), nullable=False),
        sa.Column("search_vector", sa.dialects.postgresql.TSVECTOR(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_document_checksum_unique", "document", ["checksum"], unique=True)
    op.create_index("ix_document_topic", "document", ["topic"])
    op.create_index("ix_document_project", "document", ["project"])
    op.create_index("ix_document_team", "document", ["team"])

    op.execute(
        """
        CREATE OR REPLACE FUNCTION document_search_vector_fn()
        RETURNS trigger AS $$
        BEGIN
          NEW.search_vector :=
            setweight(to_tsvector('english', coalesce(NEW.title, '')), 'A')
            || setweight(to_tsvector('english', coalesce(NEW.content, '')), 'B');
          RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
        """
    )
    op.execute(
        """
        CREATE TRIGGER document_search_vector_trigger
        BEFORE INSERT OR UPDATE OF title, content ON document
        FOR EACH ROW EXECUTE FUNCTION document_search_vector_fn()
        """
    )
    op.create_index(
        "ix_document_search_vector",
        "document",
        ["search_vector"],
        unique=False,
        postgresql_using="gin",
    )


def downgrade() -> None:
    op.drop_index("ix_document_search_vector", table_name="document")
    op.execute("DROP TRIGGER IF EXISTS document_search_vector_trigger ON document")
    op.execute("DROP FUNCTION IF EXISTS document_search_vector_fn()")
    op.drop_index("ix_document_team", table_name="document")
    op.drop_index("ix_document_project", table_name="document")
    op.drop_index("ix_document_topic", table_name="document")
    op.drop_index("ix_document_checksum_unique", table_name="document")
    op.drop_table("document")
