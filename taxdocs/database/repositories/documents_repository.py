from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from taxdocs.database.connection import get_connection
from taxdocs.documents.exceptions import DocumentNotFoundError, DocumentStateError
from taxdocs.documents.models import (
    Document,
    DocumentType,
    ExtractedTaxData,
    ProcessingStatus,
)

_DOCUMENT_COLUMNS = """
    d.id, d.tax_return_id, d.file_name, d.mime_type, d.byte_size,
    d.storage_path, d.document_type, d.processing_status, d.ocr_text,
    d.extracted_data, d.created_at
"""


def _row_to_document(row: dict[str, Any]) -> Document:
    return Document(
        id=str(row["id"]),
        tax_return_id=str(row["tax_return_id"]),
        file_name=row["file_name"],
        mime_type=row["mime_type"],
        byte_size=row["byte_size"],
        storage_path=row["storage_path"],
        document_type=DocumentType(row["document_type"]),
        processing_status=ProcessingStatus(row["processing_status"]),
        ocr_text=row["ocr_text"],
        extracted_data=row["extracted_data"],
        created_at=row["created_at"],
    )


class DocumentsRepository:
    """Database operations for the documents table."""

    def create(self, document: Document) -> Document:
        """Insert a new document row and return it with its creation time."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    INSERT INTO documents
                        (id, tax_return_id, file_name, mime_type, byte_size,
                         storage_path, document_type, processing_status)
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                    RETURNING created_at
                    """,
                    (
                        document.id,
                        document.tax_return_id,
                        document.file_name,
                        document.mime_type,
                        document.byte_size,
                        document.storage_path,
                        document.document_type.value,
                        document.processing_status.value,
                    ),
                )
                row = cur.fetchone()
            conn.commit()

        created_at = row["created_at"] if row is not None else None
        return Document(
            id=document.id,
            tax_return_id=document.tax_return_id,
            file_name=document.file_name,
            mime_type=document.mime_type,
            byte_size=document.byte_size,
            storage_path=document.storage_path,
            document_type=document.document_type,
            processing_status=document.processing_status,
            created_at=created_at,
        )

    def find_owned(self, document_id: str, user_id: str) -> Document:
        """Find a document whose tax return belongs to user_id.

        Raises:
            DocumentNotFoundError: if missing or owned by another user.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_DOCUMENT_COLUMNS}
                    FROM documents d
                    JOIN tax_returns t ON t.id = d.tax_return_id
                    WHERE d.id = %s AND t.user_id = %s
                    """,
                    (document_id, user_id),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")

        return _row_to_document(row)

    def mark_processing(self, document_id: str) -> None:
        """Start a processing attempt: status PROCESSING, previous result cleared.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET processing_status = %s,
                        extracted_data = NULL,
                        updated_at = NOW()
                    WHERE id = %s
                    """,
                    (ProcessingStatus.PROCESSING.value, document_id),
                )
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()

    def mark_completed(self, document_id: str, result: ExtractedTaxData) -> None:
        """Persist the extraction result and finish the attempt.

        Raises:
            DocumentStateError: if the document is not currently PROCESSING.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET ocr_text = %s,
                        extracted_data = %s,
                        processing_status = %s,
                        updated_at = NOW()
                    WHERE id = %s AND processing_status = %s
                    """,
                    (
                        result.ocr_text,
                        Jsonb(result.to_envelope()),
                        ProcessingStatus.COMPLETED.value,
                        document_id,
                        ProcessingStatus.PROCESSING.value,
                    ),
                )
                if cur.rowcount == 0:
                    raise DocumentStateError(
                        f"Document {document_id} is not in PROCESSING state"
                    )
            conn.commit()

    def mark_failed(self, document_id: str) -> bool:
        """Finish the attempt as FAILED. Returns False when no PROCESSING row matched."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET processing_status = %s,
                        extracted_data = NULL,
                        updated_at = NOW()
                    WHERE id = %s AND processing_status = %s
                    """,
                    (
                        ProcessingStatus.FAILED.value,
                        document_id,
                        ProcessingStatus.PROCESSING.value,
                    ),
                )
                updated = cur.rowcount > 0
            conn.commit()
        return updated
