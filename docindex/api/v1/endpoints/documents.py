"""Document API: thin routes delegating to DocumentIngestionService and DocumentQueryService."""

from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import StreamingResponse

from docindex.api.v1.dependencies import (
    get_document_ingestion_service,
    get_document_query_service,
)
from docindex.application.use_cases.documents import (
    DocumentIngestionService,
    DocumentQueryService,
)
from docindex.schemas.document import DocumentListItem, DocumentResponse

router = APIRouter()


@router.post(
    "",
    response_model=DocumentResponse,
    status_code=201,
)
async def upload_document(
    ingestion_svc: Annotated[
        DocumentIngestionService, Depends(get_document_ingestion_service)
    ],
    title: str = Form(..., min_length=1, max_length=500),
    file: UploadFile = File(...),
    content: str | None = Form(None),
):
    """Upload a document: extract text, categorize, store the file, index the record.

    `content` overrides text extraction when the client already has the text.
    """
    created = await ingestion_svc.ingest(
        file_data=file.file,
        filename=file.filename or "",
        title=title,
        mime_type=file.content_type,
        content=content,
    )
    return DocumentResponse.model_validate(created)


@router.get("", response_model=list[DocumentListItem])
async def list_documents(
    query_svc: Annotated[DocumentQueryService, Depends(get_document_query_service)],
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    topic: str | None = Query(None),
    project: str | None = Query(None),
    team: str | None = Query(None),
):
    """List documents newest first, optionally filtered by topic/project/team."""
    items = await query_svc.list_documents(
        limit=limit, offset=offset, topic=topic, project=project, team=team
    )
    return [DocumentListItem.model_validate(i) for i in items]


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    query_svc: Annotated[DocumentQueryService, Depends(get_document_query_service)],
):
    """Get one document record (including extracted content)."""
    doc = await query_svc.get_document(document_id)
    return DocumentResponse.model_validate(doc)


@router.get("/{document_id}/file")
async def download_document_file(
    document_id: str,
    query_svc: Annotated[DocumentQueryService, Depends(get_document_query_service)],
) -> StreamingResponse:
    """Stream the stored file."""
    doc, stream = await query_svc.open_file(document_id)
    return StreamingResponse(
        stream,
        media_type=doc.mime_type,
        headers={
            "Content-Disposition": f"attachment; filename*=UTF-8''{quote(doc.original_filename)}"
        },
    )
