from taxdocs.documents.models import Document, ExtractedTaxData
from taxdocs.extraction.base import BaseExtractionProvider
from taxdocs.logging.logger import Log


class ExtractionStrategy:
    """Primary provider when configured, fallback provider otherwise or on any primary failure.

    Exactly one provider's result is returned. Fallback errors propagate.
    """

    def __init__(
        self,
        fallback: BaseExtractionProvider,
        primary: BaseExtractionProvider | None = None,
    ) -> None:
        self._fallback = fallback
        self._primary = primary

    @property
    def has_primary(self) -> bool:
        return self._primary is not None

    def extract(self, document: Document, raw_bytes: bytes) -> ExtractedTaxData:
        if self._primary is not None:
            try:
                return self._primary.extract(document, raw_bytes)
            except Exception as exc:
                Log.warning(
                    f"{self._primary.name} extraction failed for document {document.id}, "
                    f"falling back to {self._fallback.name}: {exc}"
                )
        return self._fallback.extract(document, raw_bytes)
