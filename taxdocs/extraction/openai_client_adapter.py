import httpx
import openai

from taxdocs.extraction.client_base import BaseChatClient
from taxdocs.extraction.exceptions import ParseError, ProviderError


class OpenAIChatClientAdapter(BaseChatClient):
    """Chat client built on the OpenAI SDK; works with any OpenAI-compatible endpoint."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        messages: list[dict[str, object]],
        max_tokens: int,
    ) -> str:
        try:
            response = self._client.chat.completions.create(
                model=model,
                messages=messages,  # type: ignore[arg-type]
                max_tokens=max_tokens,
                stream=False,
                response_format={"type": "json_object"},
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ProviderError(f"LLM provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ProviderError(f"LLM provider API error: {exc}") from exc

        if not response.choices:
            raise ParseError("LLM returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise ParseError("LLM returned empty response")
        return content
