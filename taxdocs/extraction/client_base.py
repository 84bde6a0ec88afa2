from abc import ABC, abstractmethod


class BaseChatClient(ABC):
    """Contract for provider-specific chat-completion clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        messages: list[dict[str, object]],
        max_tokens: int,
    ) -> str:
        """Return the first choice's message content as plain text.

        The request is non-streaming and constrained to a JSON object response.
        """
