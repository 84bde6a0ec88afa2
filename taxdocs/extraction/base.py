from abc import ABC, abstractmethod

from taxdocs.documents.models import Document, ExtractedTaxData


class BaseExtractionProvider(ABC):
    """Contract for all document extraction providers."""

    name: str = "provider"

    @abstractmethod
    def extract(self, document: Document, raw_bytes: bytes) -> ExtractedTaxData:
        """Extract canonical tax fields from a stored document.

        Args:
            document: The document record (type, file name, mime type, path).
            raw_bytes: The file content read from storage.

        Returns:
            ExtractedTaxData in the canonical schema for the document type.

        Raises:
            ConfigurationError: provider settings are missing or unusable.
            ProviderError: the upstream call failed or returned no document.
            ParseError: the upstream response could not be interpreted.
        """
