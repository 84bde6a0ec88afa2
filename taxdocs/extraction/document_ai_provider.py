"""Primary extraction through Google Cloud Document AI form processors."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from google.api_core.client_options import ClientOptions
from google.api_core.exceptions import GoogleAPICallError
from google.cloud import documentai
from google.oauth2 import service_account

from taxdocs.config.settings import Settings
from taxdocs.documents.models import Document, DocumentType, ExtractedTaxData
from taxdocs.extraction.base import BaseExtractionProvider
from taxdocs.extraction.exceptions import ConfigurationError, ProviderError
from taxdocs.extraction.field_normalizer import (
    FieldNormalizer,
    ProviderDocument,
    ProviderEntity,
    ProviderFormField,
)
from taxdocs.logging.logger import Log

MIME_TYPES_BY_EXTENSION: dict[str, str] = {
    ".pdf": "application/pdf",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".tif": "image/tiff",
    ".tiff": "image/tiff",
}
DEFAULT_MIME_TYPE = "application/pdf"


def mime_type_for_path(storage_path: str) -> str:
    return MIME_TYPES_BY_EXTENSION.get(Path(storage_path).suffix.lower(), DEFAULT_MIME_TYPE)


@dataclass(frozen=True)
class DocumentAiConfig:
    project_id: str
    location: str
    w2_processor_id: str
    form_1099_processor_id: str
    credentials_path: str

    @classmethod
    def from_settings(cls, settings: Settings) -> "DocumentAiConfig":
        return cls(
            project_id=settings.google_cloud_project_id,
            location=settings.google_cloud_location or "us",
            w2_processor_id=settings.google_cloud_w2_processor_id,
            form_1099_processor_id=settings.google_cloud_1099_processor_id,
            credentials_path=settings.google_application_credentials,
        )

    def processor_id_for(self, document_type: DocumentType) -> str:
        """W2 processor for W2 and untyped documents, 1099 processor for every 1099 variant.

        Raises:
            ConfigurationError: if the required processor ID is not configured.
        """
        if document_type.is_1099:
            if not self.form_1099_processor_id:
                raise ConfigurationError(
                    f"No Document AI processor configured for {document_type.value}"
                )
            return self.form_1099_processor_id
        if not self.w2_processor_id:
            raise ConfigurationError("No Document AI W2 processor configured")
        return self.w2_processor_id

    def processor_name(self, document_type: DocumentType) -> str:
        return (
            f"projects/{self.project_id}/locations/{self.location}"
            f"/processors/{self.processor_id_for(document_type)}"
        )

    @property
    def api_endpoint(self) -> str | None:
        if self.location == "us":
            return None
        return f"{self.location}-documentai.googleapis.com"


class DocumentAiProvider(BaseExtractionProvider):
    """Submits the stored file to a Document AI processor and normalizes the result."""

    name = "document_ai"

    def __init__(
        self,
        config: DocumentAiConfig,
        normalizer: FieldNormalizer | None = None,
        client: Any = None,
    ) -> None:
        self._config = config
        self._normalizer = normalizer or FieldNormalizer()
        self._client = client

    def extract(self, document: Document, raw_bytes: bytes) -> ExtractedTaxData:
        processor_name = self._config.processor_name(document.document_type)
        request = documentai.ProcessRequest(
            name=processor_name,
            raw_document=documentai.RawDocument(
                content=raw_bytes,
                mime_type=mime_type_for_path(document.storage_path),
            ),
        )
        Log.info(f"Submitting document {document.id} to Document AI processor {processor_name}")

        try:
            response = self._get_client().process_document(request=request)
        except GoogleAPICallError as exc:
            raise ProviderError(f"Document AI request failed: {exc}") from exc

        result_document = getattr(response, "document", None)
        if not result_document:
            raise ProviderError("No document returned from processing")

        provider_document = to_provider_document(result_document)
        Log.info(
            f"Document AI returned {len(provider_document.entities)} entities and "
            f"{len(provider_document.form_fields)} form fields for document {document.id}"
        )
        return self._normalizer.normalize_provider_document(
            provider_document, document.document_type
        )

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self) -> Any:
        try:
            credentials = service_account.Credentials.from_service_account_file(
                self._config.credentials_path
            )
        except (OSError, ValueError) as exc:
            raise ConfigurationError(
                f"Cannot load Google credentials from {self._config.credentials_path}: {exc}"
            ) from exc

        client_options = None
        if self._config.api_endpoint is not None:
            client_options = ClientOptions(api_endpoint=self._config.api_endpoint)
        return documentai.DocumentProcessorServiceClient(
            credentials=credentials,
            client_options=client_options,
        )


def to_provider_document(result: Any) -> ProviderDocument:
    """Flatten a Document AI document into text, entities and form fields."""
    text = result.text or ""
    entities = tuple(
        ProviderEntity(
            type=entity.type_,
            value=_entity_text(entity, text),
            confidence=entity.confidence,
        )
        for entity in result.entities
    )
    form_fields = tuple(
        ProviderFormField(
            label=_anchor_text(form_field.field_name.text_anchor, text),
            value=_anchor_text(form_field.field_value.text_anchor, text),
            confidence=form_field.field_value.confidence,
        )
        for page in result.pages
        for form_field in page.form_fields
    )
    return ProviderDocument(text=text, entities=entities, form_fields=form_fields)


def _entity_text(entity: Any, text: str) -> str:
    anchored = _anchor_text(entity.text_anchor, text)
    return anchored or (entity.mention_text or "").strip()


def _anchor_text(text_anchor: Any, text: str) -> str:
    segments = list(getattr(text_anchor, "text_segments", None) or [])
    if not segments:
        return ""
    # Only the first segment is used.
    start = int(segments[0].start_index or 0)
    end = int(segments[0].end_index or 0) or len(text)
    return text[start:end].strip()
