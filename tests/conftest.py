"""Shared pytest fixtures for all tests."""

import pytest

from config import Config
from llm.providers.openrouter import OpenRouterProvider
from models.category import Category
from models.merchant import Merchant
from tests.helpers import FakeClient, RecordingTracer, make_transaction


@pytest.fixture(autouse=True)
def no_langfuse_env(monkeypatch):
    """Keep real Langfuse credentials from leaking into tests."""
    monkeypatch.delenv("LANGFUSE_PUBLIC_KEY", raising=False)
    monkeypatch.delenv("LANGFUSE_SECRET_KEY", raising=False)


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration with LLM features enabled.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "ledgerwise",
        log_level="DEBUG",
        log_dir=tmp_path / "ledgerwise" / "logs",
        llm_enabled=True,
        llm_provider="openrouter",
        llm_openrouter_api_key="sk-or-test",
        llm_openrouter_model="openai/gpt-4o-mini",
    )


@pytest.fixture
def transactions():
    """Three transactions: two expenses and one income."""
    return [
        make_transaction(1, "STARBUCKS #1234", hint="Food and Drink"),
        make_transaction(2, "AMZN Mktp US*2K3"),
        make_transaction(3, "PAYROLL ACME CORP", type="income"),
    ]


@pytest.fixture
def categories():
    """User categories, including one subcategory."""
    return [
        Category(id=1, name="Food", classification="expense"),
        Category(id=2, name="Coffee Shops", parent_id=1, classification="expense"),
        Category(id=3, name="Shopping", classification="expense"),
        Category(id=4, name="Salary", classification="income"),
    ]


@pytest.fixture
def merchants():
    return [Merchant(id=1, name="Corner Bakery"), Merchant(id=2, name="Joe's Garage")]


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def tracer():
    return RecordingTracer()


@pytest.fixture
def provider(fake_client):
    """OpenRouter provider talking to a fake client, without tracing."""
    return OpenRouterProvider(client=fake_client)


@pytest.fixture
def traced_provider(fake_client, tracer):
    """OpenRouter provider that records traces instead of sending them."""
    return OpenRouterProvider(client=fake_client, tracer=tracer)
