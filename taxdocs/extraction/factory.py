from typing import ClassVar

from taxdocs.config.settings import Settings
from taxdocs.extraction.client_base import BaseChatClient
from taxdocs.extraction.document_ai_provider import DocumentAiConfig, DocumentAiProvider
from taxdocs.extraction.example_client_adapter import ExampleChatClientAdapter
from taxdocs.extraction.field_normalizer import FieldNormalizer
from taxdocs.extraction.llm_provider import LlmExtractionProvider
from taxdocs.extraction.openai_client_adapter import OpenAIChatClientAdapter
from taxdocs.extraction.strategy import ExtractionStrategy
from taxdocs.logging.logger import Log


class ExtractionStrategyFactory:
    """Creates the extraction strategy from settings."""

    LLM_PROVIDERS: ClassVar[tuple[str, ...]] = ("example", "openai", "openai_compatible")

    @classmethod
    def create(cls, settings: Settings) -> ExtractionStrategy:
        normalizer = FieldNormalizer()
        fallback = LlmExtractionProvider(
            client=cls.create_chat_client(settings),
            model=settings.llm_model_name,
            max_tokens=settings.llm_max_tokens,
            normalizer=normalizer,
        )

        primary = None
        if settings.document_ai_configured:
            primary = DocumentAiProvider(DocumentAiConfig.from_settings(settings), normalizer)
        strategy = ExtractionStrategy(fallback=fallback, primary=primary)

        if strategy.has_primary:
            Log.info("Extraction: Document AI primary, LLM fallback")
        else:
            Log.info("Extraction: Document AI not configured, using LLM only")
        return strategy

    @classmethod
    def create_chat_client(cls, settings: Settings) -> BaseChatClient:
        provider = settings.extraction_llm_provider.lower()
        if provider not in cls.LLM_PROVIDERS:
            raise ValueError(
                f"Unknown extraction LLM provider '{provider}'. Choose from: {list(cls.LLM_PROVIDERS)}"
            )
        if provider == "example":
            return ExampleChatClientAdapter()
        return OpenAIChatClientAdapter(
            api_key=settings.llm_api_key,
            timeout_seconds=settings.llm_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )

    @staticmethod
    def _resolve_base_url(provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        url = (settings.llm_base_url or "").strip()
        if not url:
            raise ValueError(
                "llm_base_url is required for extraction_llm_provider=openai_compatible"
            )
        return url
