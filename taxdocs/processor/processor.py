from taxdocs.config.settings import Settings
from taxdocs.database.repositories.documents_repository import DocumentsRepository
from taxdocs.documents.exceptions import ProcessingFailedError
from taxdocs.documents.file_store import FileStore
from taxdocs.documents.models import ExtractedTaxData
from taxdocs.extraction.factory import ExtractionStrategyFactory
from taxdocs.extraction.text_layer import PdfTextLayerReader
from taxdocs.logging.logger import Log
from taxdocs.processor.pipeline import PipelineContext, PipelineStep
from taxdocs.processor.steps import (
    BackfillOcrTextStep,
    ExtractStep,
    LoadFileStep,
    MarkFailedStep,
    MarkProcessingStep,
    PersistResultStep,
)


class Processor:
    """Runs one extraction attempt for a document.

    Pipeline: mark processing -> load file -> extract -> backfill OCR text -> persist.
    Any step failure marks the document FAILED and raises ProcessingFailedError.
    """

    def __init__(
        self,
        documents: DocumentsRepository,
        steps: list[PipelineStep],
        failed_step: PipelineStep,
    ) -> None:
        self._documents = documents
        self._steps = steps
        self._failed_step = failed_step

    def process(self, document_id: str, user_id: str) -> ExtractedTaxData:
        """Extract and persist tax data for a document owned by user_id.

        Raises:
            DocumentNotFoundError: if the document is missing or not the caller's.
            ProcessingFailedError: if any pipeline step failed.
        """
        document = self._documents.find_owned(document_id, user_id)
        Log.info(f"Processing document {document_id} ({document.document_type.value})")

        context = PipelineContext(document=document)
        try:
            for step in self._steps:
                context = step.run(context)
        except Exception as exc:
            context.error_message = str(exc) or exc.__class__.__name__
            self._failed_step.run(context)
            Log.exception(f"Processing failed for document {document_id}")
            raise ProcessingFailedError(
                f"Processing failed for document {document_id}"
            ) from exc

        if context.result is None:
            raise ProcessingFailedError(f"No result produced for document {document_id}")
        return context.result


def build_processor(
    settings: Settings,
    documents: DocumentsRepository | None = None,
    file_store: FileStore | None = None,
) -> Processor:
    """Build a Processor with the configured extraction strategy."""
    documents = documents or DocumentsRepository()
    file_store = file_store or FileStore(settings.upload_dir)
    strategy = ExtractionStrategyFactory.create(settings)
    return Processor(
        documents=documents,
        steps=[
            MarkProcessingStep(documents),
            LoadFileStep(file_store),
            ExtractStep(strategy),
            BackfillOcrTextStep(PdfTextLayerReader()),
            PersistResultStep(documents),
        ],
        failed_step=MarkFailedStep(documents),
    )
