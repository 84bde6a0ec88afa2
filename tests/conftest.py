import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from taxdocs.config.settings import Settings
from taxdocs.documents.models import Document, DocumentType, ProcessingStatus


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def w2_pdf_bytes() -> bytes:
    """A single-page PDF laid out like a W-2 summary."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Form W-2 Wage and Tax Statement 2024")
    c.drawString(72, 700, "Employer: Acme Corp  EIN 12-3456789")
    c.drawString(72, 680, "1 Wages, tips, other compensation 55000.00")
    c.drawString(72, 660, "2 Federal income tax withheld 6200.00")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        auth_secret_key="test-secret",
        extraction_llm_provider="example",
        google_cloud_project_id="",
        google_cloud_w2_processor_id="",
        google_application_credentials="",
        stream_chunk_delay_seconds=0.0,
    )


def make_document(**overrides: object) -> Document:
    values: dict[str, object] = {
        "id": "doc-1",
        "tax_return_id": "tr-1",
        "file_name": "w2_2024.pdf",
        "mime_type": "application/pdf",
        "byte_size": 1024,
        "storage_path": "/tmp/uploads/documents/doc-1.pdf",
        "document_type": DocumentType.W2,
        "processing_status": ProcessingStatus.PENDING,
    }
    values.update(overrides)
    return Document(**values)  # type: ignore[arg-type]


@pytest.fixture()
def document_factory():
    return make_document
