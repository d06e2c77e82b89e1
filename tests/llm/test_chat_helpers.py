"""Tests for the chat request builder and response parsers."""

from types import SimpleNamespace

from llm.openrouter.chat_config import ChatConfig
from llm.openrouter.chat_parser import ChatParser
from llm.openrouter.chat_stream_parser import ChatStreamParser
from llm.providers.base import ChatFunctionRequest, ChatMessage
from tests.helpers import raw_response


class TestChatConfig:
    """Tests for ChatConfig."""

    def test_input_without_function_results(self):
        """Test that a bare prompt becomes a single user message."""
        assert ChatConfig().build_input("Hi") == [{"role": "user", "content": "Hi"}]

    def test_function_outputs_are_json_encoded(self):
        """Test that function outputs follow the prompt as JSON strings."""
        config = ChatConfig(
            function_results=[
                {"call_id": "call_1", "output": {"balance": 12.5}},
                {"call_id": "call_2", "output": "done"},
            ]
        )

        payload = config.build_input("Continue")

        assert payload[1:] == [
            {"type": "function_call_output", "call_id": "call_1", "output": '{"balance": 12.5}'},
            {"type": "function_call_output", "call_id": "call_2", "output": '"done"'},
        ]

    def test_tools_default_missing_keys(self):
        """Test that tool definitions fill in missing description, schema and strict."""
        config = ChatConfig(functions=[{"name": "get_budget"}])

        assert config.tools == [
            {
                "type": "function",
                "name": "get_budget",
                "description": "",
                "parameters": {},
                "strict": False,
            }
        ]

    def test_no_functions_means_no_tools(self):
        """Test that no functions produce an empty tool list."""
        assert ChatConfig(functions=None).tools == []


class TestChatParser:
    """Tests for ChatParser."""

    def test_parses_messages_and_function_calls(self):
        """Test that messages and function calls are split out of the output."""
        raw = raw_response(
            text="Checking your accounts",
            function_calls=[
                {"id": "fc_1", "call_id": "call_1", "name": "get_accounts", "arguments": "{}"}
            ],
        )

        parsed = ChatParser(raw).parsed

        assert parsed.id == "resp_1"
        assert parsed.messages == [ChatMessage(id="msg_1", output_text="Checking your accounts")]
        assert parsed.function_requests == [
            ChatFunctionRequest(
                id="fc_1", call_id="call_1", function_name="get_accounts", function_args="{}"
            )
        ]

    def test_joins_message_content_parts(self):
        """Test that multiple content parts are joined with newlines."""
        raw = {
            "id": "resp_2",
            "model": "openai/gpt-4o",
            "output": [
                {
                    "type": "message",
                    "id": "msg_9",
                    "content": [
                        {"type": "output_text", "text": "Line one"},
                        {"type": "output_text", "text": "Line two"},
                    ],
                }
            ],
        }

        assert ChatParser(raw).parsed.output_text == "Line one\nLine two"

    def test_accepts_sdk_objects(self):
        """Test that objects exposing model_dump are parsed like dicts."""
        sdk_response = SimpleNamespace(model_dump=lambda: raw_response(text="From SDK"))

        assert ChatParser(sdk_response).parsed.output_text == "From SDK"

    def test_empty_output(self):
        """Test that a response without output parses to empty lists."""
        parsed = ChatParser({"id": "resp_3", "model": "m", "output": None}).parsed

        assert parsed.messages == []
        assert parsed.function_requests == []


class TestChatStreamParser:
    """Tests for ChatStreamParser."""

    def test_text_delta(self):
        """Test that a text delta becomes an output_text chunk."""
        chunk = ChatStreamParser({"type": "response.output_text.delta", "delta": "Hel"}).parsed

        assert chunk.type == "output_text"
        assert chunk.data == "Hel"
        assert chunk.usage is None

    def test_refusal_delta_is_text(self):
        """Test that refusal deltas stream like text."""
        chunk = ChatStreamParser({"type": "response.refusal.delta", "delta": "I can't"}).parsed

        assert chunk.type == "output_text"

    def test_completed_event_is_response_chunk(self):
        """Test that the completed event carries the parsed response and usage."""
        event = {"type": "response.completed", "response": raw_response(text="Done")}

        chunk = ChatStreamParser(event).parsed

        assert chunk.type == "response"
        assert chunk.data.output_text == "Done"
        assert chunk.usage["output_tokens"] == 30

    def test_failed_event_is_error_chunk(self):
        """Test that a failed response becomes an error chunk with the remote message."""
        event = {
            "type": "response.failed",
            "response": {"error": {"code": "server_error", "message": "Provider returned error"}},
        }

        chunk = ChatStreamParser(event).parsed

        assert chunk.type == "error"
        assert chunk.data == "Provider returned error"

    def test_failed_event_without_message(self):
        """Test that a failed response without details still yields a message."""
        chunk = ChatStreamParser({"type": "response.failed", "response": {"error": None}}).parsed

        assert chunk.data == "Response failed"

    def test_incomplete_event_is_error_chunk(self):
        """Test that an incomplete response reports its reason."""
        event = {
            "type": "response.incomplete",
            "response": {"incomplete_details": {"reason": "content_filter"}},
        }

        assert ChatStreamParser(event).parsed.data == "Response incomplete: content_filter"

    def test_error_event_is_error_chunk(self):
        """Test that an error event becomes an error chunk with its message."""
        chunk = ChatStreamParser({"type": "error", "message": "Invalid API key"}).parsed

        assert chunk.type == "error"
        assert chunk.data == "Invalid API key"

    def test_other_events_are_ignored(self):
        """Test that lifecycle events parse to None."""
        for event_type in ("response.created", "response.output_item.added", "response.in_progress"):
            assert ChatStreamParser({"type": event_type}).parsed is None
