import uuid

from taxdocs.database.repositories.documents_repository import DocumentsRepository
from taxdocs.database.repositories.tax_returns_repository import TaxReturnsRepository
from taxdocs.documents.exceptions import DocumentValidationError
from taxdocs.documents.file_store import FileStore
from taxdocs.documents.models import Document, ProcessingStatus
from taxdocs.documents.type_inference import infer_document_type
from taxdocs.logging.logger import Log

ALLOWED_MIME_TYPES = frozenset(
    {"application/pdf", "image/png", "image/jpeg", "image/tiff"}
)
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class DocumentIntake:
    """Validates an upload, stores its bytes and creates a PENDING document."""

    def __init__(
        self,
        tax_returns: TaxReturnsRepository,
        documents: DocumentsRepository,
        file_store: FileStore,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
    ) -> None:
        self._tax_returns = tax_returns
        self._documents = documents
        self._file_store = file_store
        self._max_upload_bytes = max_upload_bytes

    def accept(
        self,
        *,
        user_id: str,
        tax_return_id: str | None,
        file_name: str | None,
        mime_type: str | None,
        payload: bytes | None,
    ) -> Document:
        """Accept an upload for a tax return owned by user_id.

        Raises:
            DocumentValidationError: missing fields, unsupported type or oversize file.
            TaxReturnNotFoundError: the tax return is not the caller's.
        """
        if not tax_return_id or not file_name or payload is None:
            raise DocumentValidationError("Missing file or tax return ID")

        self._tax_returns.find_owned(tax_return_id, user_id)

        if mime_type not in ALLOWED_MIME_TYPES:
            raise DocumentValidationError(
                "Invalid file type. Supported types: PDF, PNG, JPEG, TIFF"
            )
        if len(payload) > self._max_upload_bytes:
            limit_mib = self._max_upload_bytes // (1024 * 1024)
            raise DocumentValidationError(f"File size exceeds {limit_mib}MB limit")

        path = self._file_store.save(payload, file_name)
        document = Document(
            id=str(uuid.uuid4()),
            tax_return_id=tax_return_id,
            file_name=file_name,
            mime_type=mime_type,
            byte_size=len(payload),
            storage_path=str(path),
            document_type=infer_document_type(file_name),
            processing_status=ProcessingStatus.PENDING,
        )
        try:
            created = self._documents.create(document)
        except Exception:
            self._file_store.delete(path)
            raise

        Log.info(
            f"Accepted document {created.id} ({created.document_type.value}, "
            f"{created.byte_size} bytes) for tax return {tax_return_id}"
        )
        return created
