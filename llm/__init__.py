"""LLM integration: OpenRouter-backed categorization, merchant detection and chat."""

from llm.factory import get_llm_provider

__all__ = ["get_llm_provider"]
