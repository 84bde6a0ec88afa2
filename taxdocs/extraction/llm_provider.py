"""Fallback extraction through a multimodal chat-completion model."""

import base64
import json
from pathlib import Path
from typing import Any

from taxdocs.documents.models import Document, ExtractedTaxData
from taxdocs.extraction.base import BaseExtractionProvider
from taxdocs.extraction.client_base import BaseChatClient
from taxdocs.extraction.exceptions import ParseError
from taxdocs.extraction.field_normalizer import FieldNormalizer
from taxdocs.extraction.prompt_loader import build_extraction_prompt, load_prompt_template
from taxdocs.logging.logger import Log

DEFAULT_LLM_CONFIDENCE = 0.85


class LlmExtractionProvider(BaseExtractionProvider):
    """Sends the raw file plus a schema-specific prompt and parses the JSON answer."""

    name = "llm"

    def __init__(
        self,
        *,
        client: BaseChatClient,
        model: str,
        max_tokens: int = 3000,
        normalizer: FieldNormalizer | None = None,
        prompt_template_path: Path | None = None,
        confidence: float = DEFAULT_LLM_CONFIDENCE,
    ) -> None:
        self._client = client
        self._model = model
        self._max_tokens = max_tokens
        self._normalizer = normalizer or FieldNormalizer()
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._confidence = confidence

    def extract(self, document: Document, raw_bytes: bytes) -> ExtractedTaxData:
        messages = self._build_messages(document, raw_bytes)
        Log.debug(f"LLM extraction prompt for document {document.id}:\n{messages[0]['content'][1]['text']}")

        raw_response = self._client.create_chat_completion(
            model=self._model,
            messages=messages,
            max_tokens=self._max_tokens,
        )
        Log.debug(f"LLM raw response for document {document.id}:\n{raw_response}")

        payload = self._parse_json(raw_response)
        result = self._normalizer.normalize_llm_payload(
            payload, document.document_type, self._confidence
        )
        Log.info(
            f"LLM extraction complete for document {document.id}: "
            f"{sum(1 for v in result.extracted_data.values() if v not in ('', {}))} fields filled"
        )
        return result

    def _build_messages(self, document: Document, raw_bytes: bytes) -> list[dict[str, Any]]:
        encoded = base64.b64encode(raw_bytes).decode("ascii")
        return [{
            "role": "user",
            "content": [
                {
                    "type": "file",
                    "file": {
                        "filename": document.file_name,
                        "file_data": f"data:{document.mime_type};base64,{encoded}",
                    },
                },
                {
                    "type": "text",
                    "text": build_extraction_prompt(
                        self._prompt_template, document.document_type
                    ),
                },
            ],
        }]

    @staticmethod
    def _parse_json(raw: str) -> dict[str, Any]:
        cleaned = (raw or "").strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines).strip()

        if not cleaned:
            raise ParseError("LLM returned empty response")
        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise ParseError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise ParseError("JSON response must be an object")
        if not parsed:
            raise ParseError("JSON response is empty")
        return parsed
