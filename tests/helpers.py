"""Fake SDK clients for tests. Nothing here touches the network."""

import json
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from models.transaction import Transaction


class FakeCompletions:
    """Stands in for client.chat.completions and records each request."""

    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))],
            usage=SimpleNamespace(total_tokens=42),
        )


class FakeStream:
    """Iterable stand-in for the SDK's Stream that tracks close()."""

    def __init__(self, events):
        self.events = list(events)
        self.closed = False

    def __iter__(self):
        return iter(self.events)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self.closed = True


class FakeResponses:
    """Stands in for client.responses; streams events when stream=True."""

    def __init__(self, response=None, events=None, error=None):
        self.response = response
        self.events = events or []
        self.error = error
        self.calls = []
        self.stream = None

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        if kwargs.get("stream"):
            self.stream = FakeStream(self.events)
            return self.stream
        return self.response


class FakeClient:
    def __init__(self, completions=None, responses=None):
        self.completions = completions or FakeCompletions()
        self.responses = responses or FakeResponses()
        self.chat = SimpleNamespace(completions=self.completions)


class RecordingTracer:
    """Collects log_generation calls instead of sending them to Langfuse."""

    def __init__(self):
        self.generations = []

    def log_generation(self, name, model, input, output, usage=None):
        self.generations.append(
            {"name": name, "model": model, "input": input, "output": output, "usage": usage}
        )


def completion_json(key, items):
    """Build the JSON text a model returns for a structured output request."""
    return json.dumps({key: items})


def raw_response(
    response_id="resp_1",
    model="openai/gpt-4o",
    text="Your spending is up 10% this month.",
    function_calls=None,
    usage=None,
):
    """Build a Responses API response as the SDK would dump it."""
    output = []
    if text is not None:
        output.append(
            {
                "type": "message",
                "id": "msg_1",
                "role": "assistant",
                "content": [{"type": "output_text", "text": text}],
            }
        )
    for call in function_calls or []:
        output.append({"type": "function_call", **call})

    return {
        "id": response_id,
        "model": model,
        "output": output,
        "usage": usage or {"input_tokens": 120, "output_tokens": 30, "total_tokens": 150},
    }


def make_transaction(n, description="Coffee", type="expense", **kwargs):
    return Transaction(
        id=f"txn-{n}",
        transaction_date=date(2024, 1, 15),
        description=description,
        amount=Decimal("5.00"),
        type=type,
        **kwargs,
    )
