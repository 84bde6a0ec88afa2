import json
import time
from collections.abc import Iterator

from taxdocs.documents.models import ExtractedTaxData

DONE_EVENT = "data: [DONE]\n\n"


class EventStreamEncoder:
    """Streams an extraction result as server-sent events.

    The JSON envelope is sliced into fixed-size character chunks, each sent as
    `data: {"content": <chunk>}`, followed by a final `data: [DONE]`.
    """

    def __init__(self, chunk_size: int = 100, delay_seconds: float = 0.05) -> None:
        if chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")
        self._chunk_size = chunk_size
        self._delay_seconds = max(0.0, delay_seconds)

    def chunks(self, result: ExtractedTaxData) -> list[str]:
        payload = json.dumps(result.to_envelope())
        return [
            payload[i : i + self._chunk_size]
            for i in range(0, len(payload), self._chunk_size)
        ]

    def events(self, result: ExtractedTaxData) -> Iterator[str]:
        for index, chunk in enumerate(self.chunks(result)):
            if index and self._delay_seconds:
                time.sleep(self._delay_seconds)
            yield f"data: {json.dumps({'content': chunk})}\n\n"
        yield DONE_EVENT
