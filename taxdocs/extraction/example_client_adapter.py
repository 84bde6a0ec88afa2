"""Offline chat client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseChatClient and register the provider in ExtractionStrategyFactory.
"""

import json
import re

from taxdocs.documents.models import DocumentType
from taxdocs.extraction.client_base import BaseChatClient
from taxdocs.extraction.schemas import empty_record

_DOCUMENT_TYPE_MARKER = re.compile(r'"documentType":\s*"([A-Z0-9_]+)"')


class ExampleChatClientAdapter(BaseChatClient):
    """Adapter that answers every extraction prompt with an empty canonical record.

    No network calls. Useful for local development and tests: the document type
    is read back from the prompt so the response matches the requested schema.
    """

    def create_chat_completion(
        self,
        *,
        model: str,
        messages: list[dict[str, object]],
        max_tokens: int,
    ) -> str:
        _ = model, max_tokens
        document_type = self._requested_type(messages)
        return json.dumps({
            "documentType": document_type.value,
            "ocrText": "",
            "extractedData": empty_record(document_type),
        })

    @staticmethod
    def _requested_type(messages: list[dict[str, object]]) -> DocumentType:
        for message in messages:
            content = message.get("content")
            parts = content if isinstance(content, list) else [{"text": content}]
            for part in parts:
                text = part.get("text") if isinstance(part, dict) else None
                if not isinstance(text, str):
                    continue
                matches = _DOCUMENT_TYPE_MARKER.findall(text)
                if matches:
                    return DocumentType.parse(matches[-1]) or DocumentType.OTHER_TAX_DOCUMENT
        return DocumentType.OTHER_TAX_DOCUMENT
