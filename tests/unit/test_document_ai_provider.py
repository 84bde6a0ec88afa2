from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from google.api_core.exceptions import InternalServerError

from taxdocs.config.settings import Settings
from taxdocs.documents.models import DocumentType
from taxdocs.extraction.document_ai_provider import (
    DocumentAiConfig,
    DocumentAiProvider,
    mime_type_for_path,
    to_provider_document,
)
from taxdocs.extraction.exceptions import ConfigurationError, ProviderError

_TEXT = "Acme Corp\nEmployer name Acme Corp\nFederal income tax withheld 6200.00\n"


def _config(**overrides: str) -> DocumentAiConfig:
    values = {
        "project_id": "proj",
        "location": "us",
        "w2_processor_id": "w2proc",
        "form_1099_processor_id": "1099proc",
        "credentials_path": "/creds.json",
    }
    values.update(overrides)
    return DocumentAiConfig(**values)


def _anchor(text: str, fragment: str) -> SimpleNamespace:
    start = text.index(fragment)
    return SimpleNamespace(
        text_segments=[SimpleNamespace(start_index=start, end_index=start + len(fragment))]
    )


def _result_document() -> SimpleNamespace:
    entity = SimpleNamespace(
        type_="employer_name",
        text_anchor=_anchor(_TEXT, "Acme Corp"),
        mention_text="Acme Corp",
        confidence=0.9,
    )
    mention_only = SimpleNamespace(
        type_="employee_name",
        text_anchor=SimpleNamespace(text_segments=[]),
        mention_text=" Jane Doe ",
        confidence=0.7,
    )
    form_field = SimpleNamespace(
        field_name=SimpleNamespace(text_anchor=_anchor(_TEXT, "Federal income tax withheld")),
        field_value=SimpleNamespace(
            text_anchor=_anchor(_TEXT, "6200.00"),
            confidence=0.8,
        ),
    )
    return SimpleNamespace(
        text=_TEXT,
        entities=[entity, mention_only],
        pages=[SimpleNamespace(form_fields=[form_field])],
    )


class TestMimeTypeForPath:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/x/a.pdf", "application/pdf"),
            ("/x/a.PNG", "image/png"),
            ("/x/a.jpg", "image/jpeg"),
            ("/x/a.jpeg", "image/jpeg"),
            ("/x/a.tif", "image/tiff"),
            ("/x/a.tiff", "image/tiff"),
            ("/x/a.docx", "application/pdf"),
            ("/x/noext", "application/pdf"),
        ],
    )
    def test_extensions(self, path: str, expected: str) -> None:
        assert mime_type_for_path(path) == expected


class TestDocumentAiConfig:
    def test_w2_and_untyped_documents_use_w2_processor(self) -> None:
        config = _config()
        for document_type in (DocumentType.W2, DocumentType.OTHER_TAX_DOCUMENT, DocumentType.UNKNOWN):
            assert config.processor_name(document_type) == (
                "projects/proj/locations/us/processors/w2proc"
            )

    def test_1099_variants_use_1099_processor(self) -> None:
        config = _config()
        assert config.processor_name(DocumentType.FORM_1099_R).endswith("/processors/1099proc")

    def test_1099_without_processor_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="FORM_1099_INT"):
            _config(form_1099_processor_id="").processor_name(DocumentType.FORM_1099_INT)

    def test_regional_endpoint(self) -> None:
        assert _config().api_endpoint is None
        assert _config(location="eu").api_endpoint == "eu-documentai.googleapis.com"

    def test_from_settings(self) -> None:
        settings = Settings(
            _env_file=None,
            google_cloud_project_id="p",
            google_cloud_location="eu",
            google_cloud_w2_processor_id="w",
            google_cloud_1099_processor_id="n",
            google_application_credentials="/c.json",
        )
        assert DocumentAiConfig.from_settings(settings) == DocumentAiConfig(
            project_id="p",
            location="eu",
            w2_processor_id="w",
            form_1099_processor_id="n",
            credentials_path="/c.json",
        )


class TestToProviderDocument:
    def test_flattens_entities_and_form_fields(self) -> None:
        provider_document = to_provider_document(_result_document())

        assert provider_document.text == _TEXT
        assert [(e.type, e.value) for e in provider_document.entities] == [
            ("employer_name", "Acme Corp"),
            ("employee_name", "Jane Doe"),
        ]
        [form_field] = provider_document.form_fields
        assert form_field.label == "Federal income tax withheld"
        assert form_field.value == "6200.00"
        assert form_field.confidence == 0.8

    def test_zero_end_index_reads_to_end_of_text(self) -> None:
        document = SimpleNamespace(
            text="abc",
            entities=[
                SimpleNamespace(
                    type_="x",
                    text_anchor=SimpleNamespace(
                        text_segments=[SimpleNamespace(start_index=1, end_index=0)]
                    ),
                    mention_text="",
                    confidence=0.5,
                )
            ],
            pages=[],
        )
        assert to_provider_document(document).entities[0].value == "bc"


class TestDocumentAiProvider:
    def test_extracts_and_normalizes(self, document_factory) -> None:
        client = MagicMock()
        client.process_document.return_value = SimpleNamespace(document=_result_document())
        provider = DocumentAiProvider(_config(), client=client)

        result = provider.extract(document_factory(), b"%PDF-1.4")

        request = client.process_document.call_args.kwargs["request"]
        assert request.name == "projects/proj/locations/us/processors/w2proc"
        assert request.raw_document.content == b"%PDF-1.4"
        assert request.raw_document.mime_type == "application/pdf"
        assert result.document_type is DocumentType.W2
        assert result.extracted_data["employerName"] == "Acme Corp"
        assert result.extracted_data["employeeName"] == "Jane Doe"
        assert result.extracted_data["federalTaxWithheld"] == "6200.00"
        assert result.confidence == pytest.approx(0.8)

    def test_uses_image_mime_type_from_storage_path(self, document_factory) -> None:
        client = MagicMock()
        client.process_document.return_value = SimpleNamespace(document=_result_document())
        provider = DocumentAiProvider(_config(), client=client)

        provider.extract(document_factory(storage_path="/u/abc.png"), b"png")

        request = client.process_document.call_args.kwargs["request"]
        assert request.raw_document.mime_type == "image/png"

    def test_missing_document_raises_provider_error(self, document_factory) -> None:
        client = MagicMock()
        client.process_document.return_value = SimpleNamespace(document=None)
        provider = DocumentAiProvider(_config(), client=client)

        with pytest.raises(ProviderError, match="No document returned"):
            provider.extract(document_factory(), b"data")

    def test_api_error_raises_provider_error(self, document_factory) -> None:
        client = MagicMock()
        client.process_document.side_effect = InternalServerError("boom")
        provider = DocumentAiProvider(_config(), client=client)

        with pytest.raises(ProviderError, match="Document AI request failed"):
            provider.extract(document_factory(), b"data")

    def test_1099_without_processor_fails_before_calling_client(self, document_factory) -> None:
        client = MagicMock()
        provider = DocumentAiProvider(_config(form_1099_processor_id=""), client=client)

        with pytest.raises(ConfigurationError):
            provider.extract(
                document_factory(document_type=DocumentType.FORM_1099_NEC), b"data"
            )
        client.process_document.assert_not_called()

    @patch("taxdocs.extraction.document_ai_provider.service_account.Credentials.from_service_account_file")
    def test_unreadable_credentials_raise_configuration_error(
        self, mock_from_file: MagicMock, document_factory
    ) -> None:
        mock_from_file.side_effect = FileNotFoundError("no such file")
        provider = DocumentAiProvider(_config())

        with pytest.raises(ConfigurationError, match="Cannot load Google credentials"):
            provider.extract(document_factory(), b"data")

    @patch("taxdocs.extraction.document_ai_provider.documentai.DocumentProcessorServiceClient")
    @patch("taxdocs.extraction.document_ai_provider.service_account.Credentials.from_service_account_file")
    def test_creates_regional_client_lazily(
        self,
        mock_from_file: MagicMock,
        mock_client_cls: MagicMock,
        document_factory,
    ) -> None:
        mock_client_cls.return_value.process_document.return_value = SimpleNamespace(
            document=_result_document()
        )
        provider = DocumentAiProvider(_config(location="eu"))

        provider.extract(document_factory(), b"data")
        provider.extract(document_factory(), b"data")

        mock_from_file.assert_called_once_with("/creds.json")
        mock_client_cls.assert_called_once()
        options = mock_client_cls.call_args.kwargs["client_options"]
        assert options.api_endpoint == "eu-documentai.googleapis.com"
