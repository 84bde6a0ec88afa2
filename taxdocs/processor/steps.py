from dataclasses import replace

from taxdocs.database.repositories.documents_repository import DocumentsRepository
from taxdocs.documents.file_store import FileStore
from taxdocs.extraction.document_ai_provider import mime_type_for_path
from taxdocs.extraction.strategy import ExtractionStrategy
from taxdocs.extraction.text_layer import PdfTextLayerReader, TextLayerError
from taxdocs.logging.logger import Log
from taxdocs.processor.pipeline import PipelineContext, PipelineStep


class MarkProcessingStep(PipelineStep):
    def __init__(self, documents: DocumentsRepository) -> None:
        self._documents = documents

    def run(self, context: PipelineContext) -> PipelineContext:
        self._documents.mark_processing(context.document_id)
        Log.info(f"Document {context.document_id} marked as processing")
        return context


class MarkFailedStep(PipelineStep):
    def __init__(self, documents: DocumentsRepository) -> None:
        self._documents = documents

    def run(self, context: PipelineContext) -> PipelineContext:
        if self._documents.mark_failed(context.document_id):
            Log.error(
                f"Document {context.document_id} marked as failed: {context.error_message}"
            )
        else:
            Log.warning(
                f"Document {context.document_id} was not PROCESSING, failure not recorded: "
                f"{context.error_message}"
            )
        return context


class LoadFileStep(PipelineStep):
    def __init__(self, file_store: FileStore) -> None:
        self._file_store = file_store

    def run(self, context: PipelineContext) -> PipelineContext:
        context.raw_bytes = self._file_store.load(context.document.storage_path)
        Log.info(f"Loaded {len(context.raw_bytes)} bytes for document {context.document_id}")
        return context


class ExtractStep(PipelineStep):
    def __init__(self, strategy: ExtractionStrategy) -> None:
        self._strategy = strategy

    def run(self, context: PipelineContext) -> PipelineContext:
        context.result = self._strategy.extract(context.document, context.raw_bytes)
        Log.info(
            f"Extracted {context.result.document_type.value} data from document "
            f"{context.document_id} (confidence {context.result.confidence:.2f})"
        )
        return context


class BackfillOcrTextStep(PipelineStep):
    """Fill empty OCR text from the PDF's embedded text layer when one exists."""

    def __init__(self, reader: PdfTextLayerReader) -> None:
        self._reader = reader

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.result is None:
            raise ValueError("PipelineContext.result must be set before OCR backfill")
        if context.result.ocr_text:
            return context
        if mime_type_for_path(context.document.storage_path) != "application/pdf":
            return context

        try:
            text = self._reader.read(context.raw_bytes)
        except TextLayerError as exc:
            Log.warning(f"No text layer for document {context.document_id}: {exc}")
            return context

        if text:
            context.result = replace(context.result, ocr_text=text)
            Log.info(f"Backfilled {len(text)} chars of OCR text for document {context.document_id}")
        return context


class PersistResultStep(PipelineStep):
    def __init__(self, documents: DocumentsRepository) -> None:
        self._documents = documents

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.result is None:
            raise ValueError("PipelineContext.result must be set before persist")
        self._documents.mark_completed(context.document_id, context.result)
        Log.info(f"Document {context.document_id} marked as completed")
        return context
