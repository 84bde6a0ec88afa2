from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class DocumentType(str, Enum):
    """Tax form a document is believed to be."""

    W2 = "W2"
    FORM_1099_INT = "FORM_1099_INT"
    FORM_1099_DIV = "FORM_1099_DIV"
    FORM_1099_MISC = "FORM_1099_MISC"
    FORM_1099_NEC = "FORM_1099_NEC"
    FORM_1099_R = "FORM_1099_R"
    FORM_1099_G = "FORM_1099_G"
    OTHER_TAX_DOCUMENT = "OTHER_TAX_DOCUMENT"
    UNKNOWN = "UNKNOWN"

    @property
    def is_1099(self) -> bool:
        return self.value.startswith("FORM_1099_")

    @classmethod
    def parse(cls, raw: object) -> "DocumentType | None":
        """Return the member named by raw, or None when raw is not a valid value."""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip().upper())
        except ValueError:
            return None


class ProcessingStatus(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class TaxReturn:
    """Owning aggregate of uploaded documents (only the columns this service reads)."""

    id: str
    user_id: str


@dataclass(frozen=True)
class Document:
    """An uploaded tax document and its extraction state."""

    id: str
    tax_return_id: str
    file_name: str
    mime_type: str
    byte_size: int
    storage_path: str
    document_type: DocumentType
    processing_status: ProcessingStatus = ProcessingStatus.PENDING
    ocr_text: str | None = None
    extracted_data: dict[str, Any] | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class ExtractedTaxData:
    """Canonical result of one extraction attempt, whatever provider produced it."""

    document_type: DocumentType
    ocr_text: str
    extracted_data: dict[str, Any]
    confidence: float

    def to_envelope(self) -> dict[str, Any]:
        """JSON-ready shape stored in documents.extracted_data and sent to clients."""
        return {
            "documentType": self.document_type.value,
            "ocrText": self.ocr_text,
            "extractedData": self.extracted_data,
            "confidence": self.confidence,
        }
