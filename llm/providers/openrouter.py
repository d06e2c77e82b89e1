"""OpenRouter provider implementation.

OpenRouter exposes an OpenAI-compatible API at https://openrouter.ai/api/v1,
so this provider uses the OpenAI SDK with a custom base_url. Categorization
and merchant detection use Chat Completions with strict JSON schemas; chat
uses the Responses API so conversations can continue from a previous
response ID.
"""

from dataclasses import asdict
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, TypeVar
from openai import OpenAI
from config import DEFAULT_APP_TITLE, DEFAULT_APP_URL
from llm.openrouter import (
    AutoCategorizer,
    AutoMerchantDetector,
    ChatConfig,
    ChatParser,
    ChatStreamParser,
)
from llm.providers.base import (
    AutoCategorization,
    AutoDetectedMerchant,
    ChatResponse,
    ChatStreamChunk,
    LLMProvider,
    ProviderError,
    ProviderResponse,
    StreamCallback,
)
from llm.tracing import GenerationTracer
from models.transaction import Transaction
from models.category import Category
from models.merchant import Merchant
from logger import get_logger

logger = get_logger()

T = TypeVar("T")


class OpenRouterError(ProviderError):
    """Raised (and returned in ProviderResponse.error) for OpenRouter failures."""


class OpenRouterProvider(LLMProvider):
    """LLM provider backed by OpenRouter.

    Args:
        api_key: OpenRouter API key. Ignored when client is given.
        tracer: Optional Langfuse tracer; without one no traces are sent.
        client: Pre-built OpenAI-compatible client, mainly for tests.
        app_url: Sent as HTTP-Referer for OpenRouter app attribution.
        app_title: Sent as X-Title for OpenRouter app attribution.
    """

    BASE_URL = "https://openrouter.ai/api/v1"
    MAX_TRANSACTIONS_PER_REQUEST = 25

    # Popular models available on OpenRouter
    MODELS = frozenset(
        [
            "openai/gpt-4o",
            "openai/gpt-4o-mini",
            "openai/gpt-4-turbo",
            "openai/gpt-3.5-turbo",
            "anthropic/claude-3.5-sonnet",
            "anthropic/claude-3-haiku",
            "meta-llama/llama-3.2-3b-instruct",
            "meta-llama/llama-3.2-11b-instruct",
            "qwen/qwen-2.5-72b-instruct",
            "google/gemini-pro-1.5",
        ]
    )

    def __init__(
        self,
        api_key: Optional[str] = None,
        tracer: Optional[GenerationTracer] = None,
        client=None,
        app_url: str = DEFAULT_APP_URL,
        app_title: str = DEFAULT_APP_TITLE,
    ):
        if client is None:
            if not api_key:
                raise ValueError("OpenRouter API key not configured")
            client = OpenAI(
                api_key=api_key,
                base_url=self.BASE_URL,
                default_headers={"HTTP-Referer": app_url, "X-Title": app_title},
            )

        self.client = client
        self.tracer = tracer

    def name(self) -> str:
        return "openrouter"

    def supports_model(self, model: str) -> bool:
        return isinstance(model, str) and model in self.MODELS

    def auto_categorize(
        self,
        transactions: List[Transaction],
        user_categories: List[Category],
        model: str = "",
    ) -> ProviderResponse[List[AutoCategorization]]:
        def categorize() -> List[AutoCategorization]:
            self._check_batch_size(transactions, "auto-categorize")

            result = AutoCategorizer(
                self.client,
                model=model,
                transactions=transactions,
                user_categories=user_categories,
            ).auto_categorize()

            if self.tracer is not None:
                self.tracer.log_generation(
                    name="auto_categorize",
                    model=model,
                    input={
                        "transactions": [t.to_llm_dict() for t in transactions],
                        "user_categories": [c.to_llm_dict() for c in user_categories],
                    },
                    output=[asdict(r) for r in result],
                )

            return result

        return self._with_provider_response("auto_categorize", categorize)

    def auto_detect_merchants(
        self,
        transactions: List[Transaction],
        user_merchants: List[Merchant],
        model: str = "",
    ) -> ProviderResponse[List[AutoDetectedMerchant]]:
        def detect() -> List[AutoDetectedMerchant]:
            self._check_batch_size(transactions, "auto-detect merchants")

            result = AutoMerchantDetector(
                self.client,
                model=model,
                transactions=transactions,
                user_merchants=user_merchants,
            ).auto_detect_merchants()

            if self.tracer is not None:
                self.tracer.log_generation(
                    name="auto_detect_merchants",
                    model=model,
                    input={
                        "transactions": [t.to_llm_dict() for t in transactions],
                        "user_merchants": [m.to_llm_dict() for m in user_merchants],
                    },
                    output=[asdict(r) for r in result],
                )

            return result

        return self._with_provider_response("auto_detect_merchants", detect)

    def chat_response(
        self,
        prompt: str,
        model: str,
        instructions: Optional[str] = None,
        functions: Optional[List[Dict[str, Any]]] = None,
        function_results: Optional[List[Dict[str, Any]]] = None,
        streamer: Optional[StreamCallback] = None,
        previous_response_id: Optional[str] = None,
    ) -> ProviderResponse[ChatResponse]:
        def respond() -> ChatResponse:
            chat_config = ChatConfig(
                functions=functions, function_results=function_results
            )
            input_payload = chat_config.build_input(prompt)

            params: Dict[str, Any] = {"model": model, "input": input_payload}
            if instructions:
                params["instructions"] = instructions
            if chat_config.tools:
                params["tools"] = chat_config.tools
            if previous_response_id:
                params["previous_response_id"] = previous_response_id

            if streamer is not None:
                raw_stream = self.client.responses.create(**params, stream=True)

                collected_chunks: List[ChatStreamChunk] = []
                with raw_stream:
                    for chunk in self.parse_stream(raw_stream):
                        streamer(chunk)
                        collected_chunks.append(chunk)
                        if chunk.type == "error":
                            raise OpenRouterError(chunk.data)

                # The SDK stream has no return value, so the completed event
                # carries the final response
                response_chunk = next(
                    (c for c in collected_chunks if c.type == "response"), None
                )
                if response_chunk is None:
                    raise OpenRouterError(
                        "Stream ended without a completed response"
                    )

                response = response_chunk.data
                usage = response_chunk.usage
            else:
                parser = ChatParser(self.client.responses.create(**params))
                response = parser.parsed
                usage = parser.raw_response.get("usage")

            if self.tracer is not None:
                self.tracer.log_generation(
                    name="chat_response",
                    model=model,
                    input=input_payload,
                    output=response.output_text,
                    usage=usage,
                )

            return response

        return self._with_provider_response("chat_response", respond)

    @staticmethod
    def parse_stream(raw_stream: Iterable[Any]) -> Iterator[ChatStreamChunk]:
        """Yield parsed chunks from raw stream events, skipping unknown events."""
        for event in raw_stream:
            chunk = ChatStreamParser(event).parsed
            if chunk is not None:
                yield chunk

    def _check_batch_size(self, transactions: List[Any], action: str) -> None:
        if len(transactions) > self.MAX_TRANSACTIONS_PER_REQUEST:
            raise OpenRouterError(
                f"Too many transactions to {action}. "
                f"Max is {self.MAX_TRANSACTIONS_PER_REQUEST} per request."
            )

    def _with_provider_response(
        self, operation: str, block: Callable[[], T]
    ) -> ProviderResponse[T]:
        """Run block and wrap its result, turning any exception into OpenRouterError."""
        try:
            return ProviderResponse.ok(block())
        except OpenRouterError as e:
            logger.error(f"OpenRouter {operation} failed: {e}")
            return ProviderResponse.failure(e)
        except Exception as e:
            error = OpenRouterError(str(e))
            error.__cause__ = e
            logger.error(f"OpenRouter {operation} failed: {e}")
            return ProviderResponse.failure(error)
