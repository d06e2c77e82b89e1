"""Maps a raw Responses API response onto ChatResponse."""

from typing import Any, Dict, List
from llm.providers.base import ChatFunctionRequest, ChatMessage, ChatResponse


def as_dict(obj: Any) -> Dict[str, Any]:
    """SDK objects are pydantic models; tests and stream events may be dicts."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    return obj


class ChatParser:
    def __init__(self, raw_response: Any):
        self.raw_response = as_dict(raw_response)

    @property
    def parsed(self) -> ChatResponse:
        return ChatResponse(
            id=self.raw_response.get("id"),
            model=self.raw_response.get("model"),
            messages=self._messages(),
            function_requests=self._function_requests(),
        )

    def _output_items(self, item_type: str) -> List[Dict[str, Any]]:
        output = self.raw_response.get("output") or []
        return [item for item in output if item.get("type") == item_type]

    def _messages(self) -> List[ChatMessage]:
        messages = []
        for message in self._output_items("message"):
            texts = [
                content.get("text") or content.get("refusal") or ""
                for content in message.get("content") or []
            ]
            messages.append(
                ChatMessage(id=message.get("id"), output_text="\n".join(texts))
            )
        return messages

    def _function_requests(self) -> List[ChatFunctionRequest]:
        return [
            ChatFunctionRequest(
                id=call.get("id"),
                call_id=call.get("call_id"),
                function_name=call.get("name"),
                function_args=call.get("arguments"),
            )
            for call in self._output_items("function_call")
        ]
