"""Factory for creating LLM provider instances."""

from typing import Optional
from config import Config
from llm.providers.base import LLMProvider
from llm.providers.openrouter import OpenRouterProvider
from llm.tracing import GenerationTracer
from logger import get_logger

logger = get_logger()


def get_llm_provider(
    config: Config, tracer: Optional[GenerationTracer] = None
) -> Optional[LLMProvider]:
    """Create an LLM provider instance based on configuration.

    Args:
        config: Application configuration.
        tracer: Langfuse tracer to attach. When None, one is built from the
            environment if Langfuse credentials are present.

    Returns:
        LLMProvider instance, or None if LLM is disabled.

    Raises:
        ValueError: If provider is configured but settings are invalid.
    """
    if not config.llm_enabled:
        logger.info("LLM features are disabled")
        return None

    provider_name = config.llm_provider

    if provider_name == "openrouter":
        if not config.llm_openrouter_api_key:
            raise ValueError(
                "OpenRouter provider selected but no API key configured "
                "(set llm.openrouter_api_key or OPENROUTER_API_KEY)"
            )

        logger.info(
            f"Initializing OpenRouter provider (default model: {config.llm_openrouter_model})"
        )

        return OpenRouterProvider(
            api_key=config.llm_openrouter_api_key,
            tracer=tracer or GenerationTracer.from_env(),
            app_url=config.llm_app_url,
            app_title=config.llm_app_title,
        )

    elif provider_name is None:
        logger.info("No LLM provider configured")
        return None

    else:
        raise ValueError(f"Unknown LLM provider: {provider_name}")
