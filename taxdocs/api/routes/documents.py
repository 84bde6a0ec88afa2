from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import StreamingResponse

from taxdocs.api.auth import CurrentUser, get_current_user
from taxdocs.api.dependencies import ServiceContainer, get_container, get_settings
from taxdocs.api.schemas import DocumentOut
from taxdocs.config.settings import Settings

router = APIRouter(prefix="/api/documents", tags=["documents"])


@router.post("/upload", response_model=DocumentOut)
def upload_document(
    file: UploadFile | None = File(default=None),
    tax_return_id: str | None = Form(default=None, alias="taxReturnId"),
    user: CurrentUser = Depends(get_current_user),
    container: ServiceContainer = Depends(get_container),
    settings: Settings = Depends(get_settings),
) -> DocumentOut:
    payload = None
    if file is not None:
        # One byte past the limit is enough to reject an oversize upload.
        payload = file.file.read(settings.max_upload_bytes + 1)
    document = container.intake.accept(
        user_id=user.user_id,
        tax_return_id=tax_return_id,
        file_name=file.filename if file is not None else None,
        mime_type=file.content_type if file is not None else None,
        payload=payload,
    )
    return DocumentOut.from_document(document)


@router.get("/{document_id}", response_model=DocumentOut)
def get_document(
    document_id: str,
    user: CurrentUser = Depends(get_current_user),
    container: ServiceContainer = Depends(get_container),
) -> DocumentOut:
    return DocumentOut.from_document(container.documents.find_owned(document_id, user.user_id))


@router.post("/{document_id}/process")
def process_document(
    document_id: str,
    user: CurrentUser = Depends(get_current_user),
    container: ServiceContainer = Depends(get_container),
) -> StreamingResponse:
    """Extract the document, then stream the stored result as server-sent events."""
    result = container.processor.process(document_id, user.user_id)
    return StreamingResponse(
        container.encoder.events(result),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )
