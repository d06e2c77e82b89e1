"""Maps raw Responses API stream events onto ChatStreamChunk."""

from typing import Any, Optional
from llm.openrouter.chat_parser import ChatParser, as_dict
from llm.providers.base import ChatStreamChunk

TEXT_DELTA_EVENTS = ("response.output_text.delta", "response.refusal.delta")
COMPLETED_EVENT = "response.completed"
FAILED_EVENT = "response.failed"
INCOMPLETE_EVENT = "response.incomplete"
ERROR_EVENT = "error"


class ChatStreamParser:
    """Parses one stream event.

    Text deltas become "output_text" chunks and the completed event becomes
    the terminal "response" chunk. Failed, incomplete and error events
    become a terminal "error" chunk whose data is the remote message. Any
    other event parses to None.
    """

    def __init__(self, event: Any):
        self.event = as_dict(event)

    @property
    def parsed(self) -> Optional[ChatStreamChunk]:
        event_type = self.event.get("type")

        if event_type in TEXT_DELTA_EVENTS:
            return ChatStreamChunk(type="output_text", data=self.event.get("delta"))

        if event_type == COMPLETED_EVENT:
            raw_response = self.event.get("response") or {}
            return ChatStreamChunk(
                type="response",
                data=ChatParser(raw_response).parsed,
                usage=raw_response.get("usage"),
            )

        if event_type in (FAILED_EVENT, INCOMPLETE_EVENT, ERROR_EVENT):
            return ChatStreamChunk(type="error", data=self._error_message(event_type))

        return None

    def _error_message(self, event_type: str) -> str:
        if event_type == ERROR_EVENT:
            return self.event.get("message") or "Stream reported an error"

        raw_response = self.event.get("response") or {}

        if event_type == INCOMPLETE_EVENT:
            reason = (raw_response.get("incomplete_details") or {}).get("reason")
            return f"Response incomplete: {reason or 'unknown reason'}"

        error = raw_response.get("error") or {}
        return error.get("message") or "Response failed"
