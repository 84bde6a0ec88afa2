from dataclasses import replace
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from taxdocs.api.app import create_app
from taxdocs.api.auth import create_access_token
from taxdocs.api.dependencies import ServiceContainer
from taxdocs.config.settings import Settings
from taxdocs.documents.exceptions import (
    DocumentNotFoundError,
    DocumentStateError,
    TaxReturnNotFoundError,
)
from taxdocs.documents.file_store import FileStore
from taxdocs.documents.intake import DocumentIntake
from taxdocs.documents.models import Document, ExtractedTaxData, ProcessingStatus, TaxReturn
from taxdocs.processor.event_stream import EventStreamEncoder
from taxdocs.processor.processor import Processor, build_processor


class InMemoryTaxReturnsRepository:
    def __init__(self, tax_returns: list[TaxReturn]) -> None:
        self._tax_returns = {t.id: t for t in tax_returns}

    def find_owned(self, tax_return_id: str, user_id: str) -> TaxReturn:
        tax_return = self._tax_returns.get(tax_return_id)
        if tax_return is None or tax_return.user_id != user_id:
            raise TaxReturnNotFoundError(f"Tax return {tax_return_id} not found")
        return tax_return


class InMemoryDocumentsRepository:
    """Same contract as DocumentsRepository, backed by a dict."""

    def __init__(self, tax_returns: InMemoryTaxReturnsRepository) -> None:
        self._tax_returns = tax_returns
        self.rows: dict[str, Document] = {}

    def create(self, document: Document) -> Document:
        self.rows[document.id] = document
        return document

    def find_owned(self, document_id: str, user_id: str) -> Document:
        document = self.rows.get(document_id)
        if document is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        try:
            self._tax_returns.find_owned(document.tax_return_id, user_id)
        except TaxReturnNotFoundError:
            raise DocumentNotFoundError(f"Document {document_id} not found") from None
        return document

    def mark_processing(self, document_id: str) -> None:
        if document_id not in self.rows:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        self._update(document_id, ProcessingStatus.PROCESSING, extracted_data=None)

    def mark_completed(self, document_id: str, result: ExtractedTaxData) -> None:
        if self.rows[document_id].processing_status is not ProcessingStatus.PROCESSING:
            raise DocumentStateError(f"Document {document_id} is not in PROCESSING state")
        self._update(
            document_id,
            ProcessingStatus.COMPLETED,
            ocr_text=result.ocr_text,
            extracted_data=result.to_envelope(),
        )

    def mark_failed(self, document_id: str) -> bool:
        if self.rows[document_id].processing_status is not ProcessingStatus.PROCESSING:
            return False
        self._update(document_id, ProcessingStatus.FAILED, extracted_data=None)
        return True

    def _update(self, document_id: str, status: ProcessingStatus, **changes: object) -> None:
        self.rows[document_id] = replace(
            self.rows[document_id], processing_status=status, **changes
        )


@pytest.fixture()
def api_settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        auth_secret_key="integration-secret",
        upload_dir=tmp_path / "uploads",
        extraction_llm_provider="example",
        google_cloud_project_id="",
        google_cloud_w2_processor_id="",
        google_application_credentials="",
        stream_chunk_size=64,
        stream_chunk_delay_seconds=0.0,
    )


@pytest.fixture()
def tax_returns() -> InMemoryTaxReturnsRepository:
    return InMemoryTaxReturnsRepository(
        [TaxReturn(id="tr-alice", user_id="alice"), TaxReturn(id="tr-bob", user_id="bob")]
    )


@pytest.fixture()
def documents(tax_returns: InMemoryTaxReturnsRepository) -> InMemoryDocumentsRepository:
    return InMemoryDocumentsRepository(tax_returns)


def build_test_container(
    settings: Settings,
    tax_returns: InMemoryTaxReturnsRepository,
    documents: InMemoryDocumentsRepository,
    processor: Processor | None = None,
) -> ServiceContainer:
    file_store = FileStore(settings.upload_dir)
    return ServiceContainer(
        intake=DocumentIntake(
            tax_returns=tax_returns,  # type: ignore[arg-type]
            documents=documents,  # type: ignore[arg-type]
            file_store=file_store,
            max_upload_bytes=settings.max_upload_bytes,
        ),
        processor=processor
        or build_processor(settings, documents=documents, file_store=file_store),  # type: ignore[arg-type]
        documents=documents,  # type: ignore[arg-type]
        encoder=EventStreamEncoder(
            chunk_size=settings.stream_chunk_size,
            delay_seconds=settings.stream_chunk_delay_seconds,
        ),
    )


@pytest.fixture()
def app(
    api_settings: Settings,
    tax_returns: InMemoryTaxReturnsRepository,
    documents: InMemoryDocumentsRepository,
) -> FastAPI:
    return create_app(api_settings, build_test_container(api_settings, tax_returns, documents))


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def alice_headers(api_settings: Settings) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token('alice', api_settings)}"}


@pytest.fixture()
def bob_headers(api_settings: Settings) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token('bob', api_settings)}"}
