from taxdocs.documents.models import DocumentType

# Checked in order; the first substring found in the lowercased file name wins.
FILENAME_PATTERNS: tuple[tuple[str, DocumentType], ...] = (
    ("w-2", DocumentType.W2),
    ("w2", DocumentType.W2),
    ("1099-int", DocumentType.FORM_1099_INT),
    ("1099-div", DocumentType.FORM_1099_DIV),
    ("1099-misc", DocumentType.FORM_1099_MISC),
    ("1099-nec", DocumentType.FORM_1099_NEC),
    ("1099-r", DocumentType.FORM_1099_R),
    ("1099-g", DocumentType.FORM_1099_G),
    ("1099", DocumentType.OTHER_TAX_DOCUMENT),
)


def infer_document_type(file_name: str) -> DocumentType:
    """Guess the document type from an uploaded file name."""
    lower_name = (file_name or "").lower()
    for pattern, document_type in FILENAME_PATTERNS:
        if pattern in lower_name:
            return document_type
    return DocumentType.UNKNOWN
