from abc import ABC, abstractmethod
from dataclasses import dataclass

from taxdocs.documents.models import Document, ExtractedTaxData


@dataclass(slots=True)
class PipelineContext:
    document: Document
    raw_bytes: bytes = b""
    result: ExtractedTaxData | None = None
    error_message: str = ""

    @property
    def document_id(self) -> str:
        return self.document.id


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
