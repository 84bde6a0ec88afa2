from dataclasses import dataclass

from fastapi import Request

from taxdocs.config.settings import Settings
from taxdocs.database.repositories.documents_repository import DocumentsRepository
from taxdocs.database.repositories.tax_returns_repository import TaxReturnsRepository
from taxdocs.documents.file_store import FileStore
from taxdocs.documents.intake import DocumentIntake
from taxdocs.processor.event_stream import EventStreamEncoder
from taxdocs.processor.processor import Processor, build_processor


@dataclass(frozen=True)
class ServiceContainer:
    """Services shared by all requests, built once at startup."""

    intake: DocumentIntake
    processor: Processor
    documents: DocumentsRepository
    encoder: EventStreamEncoder


def build_container(settings: Settings) -> ServiceContainer:
    documents = DocumentsRepository()
    file_store = FileStore(settings.upload_dir)
    return ServiceContainer(
        intake=DocumentIntake(
            tax_returns=TaxReturnsRepository(),
            documents=documents,
            file_store=file_store,
            max_upload_bytes=settings.max_upload_bytes,
        ),
        processor=build_processor(settings, documents=documents, file_store=file_store),
        documents=documents,
        encoder=EventStreamEncoder(
            chunk_size=settings.stream_chunk_size,
            delay_seconds=settings.stream_chunk_delay_seconds,
        ),
    )


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
