import json
from pathlib import Path

from taxdocs.documents.models import DocumentType
from taxdocs.extraction.exceptions import ConfigurationError
from taxdocs.extraction.schemas import schema_for

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"

DOCUMENT_LABELS: dict[DocumentType, str] = {
    DocumentType.W2: "W-2 forms",
    DocumentType.FORM_1099_INT: "1099-INT forms",
    DocumentType.FORM_1099_DIV: "1099-DIV forms",
    DocumentType.FORM_1099_MISC: "1099-MISC forms",
    DocumentType.FORM_1099_NEC: "1099-NEC forms",
    DocumentType.FORM_1099_R: "1099-R forms",
    DocumentType.FORM_1099_G: "1099-G forms",
}


def load_prompt_template(path: Path | None = None) -> str:
    """Load the extraction prompt template from a file.

    Args:
        path: Path to the prompt template file.
              Defaults to the bundled extraction_prompt.txt.

    Raises:
        ConfigurationError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "extraction_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Failed to load prompt template: {exc}") from exc


def prompt_document_type(document_type: DocumentType) -> DocumentType:
    """Types without a dedicated form schema are prompted as generic tax documents."""
    if document_type is DocumentType.UNKNOWN:
        return DocumentType.OTHER_TAX_DOCUMENT
    return document_type


def response_template(document_type: DocumentType) -> str:
    """Example response naming every expected field with its box label."""
    prompted = prompt_document_type(document_type)
    return json.dumps(
        {
            "documentType": prompted.value,
            "ocrText": "Full OCR text",
            "extractedData": {spec.name: spec.label for spec in schema_for(prompted)},
        },
        indent=2,
    )


def build_extraction_prompt(template: str, document_type: DocumentType) -> str:
    prompted = prompt_document_type(document_type)
    document_types = " | ".join(
        f'"{t.value}"' for t in DocumentType if t is not DocumentType.UNKNOWN
    )
    return template.format(
        document_types=document_types,
        document_label=DOCUMENT_LABELS.get(prompted, "other tax documents"),
        response_template=response_template(prompted),
    )
