"""Base provider interface and provider-neutral types for LLM implementations."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar
from models.transaction import Transaction
from models.category import Category
from models.merchant import Merchant

T = TypeVar("T")


class ProviderError(Exception):
    """Raised when a provider call fails.

    Each provider subclasses this so callers can tell which provider failed.
    """


@dataclass
class ProviderResponse(Generic[T]):
    """Outcome of a provider call: either data or an error, never both."""

    success: bool
    data: Optional[T] = None
    error: Optional[ProviderError] = None

    @classmethod
    def ok(cls, data: T) -> "ProviderResponse[T]":
        return cls(success=True, data=data)

    @classmethod
    def failure(cls, error: ProviderError) -> "ProviderResponse[T]":
        return cls(success=False, error=error)

    def unwrap(self) -> T:
        """Return the data, or raise the error if the call failed."""
        if not self.success:
            raise self.error
        return self.data


@dataclass
class AutoCategorization:
    """Category chosen for one transaction. None means no confident match."""

    transaction_id: str
    category_name: Optional[str]


@dataclass
class AutoDetectedMerchant:
    """Merchant detected for one transaction."""

    transaction_id: str
    business_name: Optional[str]
    business_url: Optional[str]


@dataclass
class ChatMessage:
    id: str
    output_text: str


@dataclass
class ChatFunctionRequest:
    """A tool call requested by the model.

    function_args is the raw JSON string the model produced.
    """

    id: str
    call_id: str
    function_name: str
    function_args: str


@dataclass
class ChatResponse:
    id: str
    model: str
    messages: List[ChatMessage] = field(default_factory=list)
    function_requests: List[ChatFunctionRequest] = field(default_factory=list)

    @property
    def output_text(self) -> str:
        """All message texts joined by newlines."""
        return "\n".join(message.output_text for message in self.messages)


@dataclass
class ChatStreamChunk:
    """One parsed piece of a streamed chat response.

    type is "output_text" (data is a text delta), "response" (data is the
    final ChatResponse and usage holds the token counts) or "error" (data is
    the message the service reported when the response failed).
    """

    type: str
    data: Any
    usage: Optional[Dict[str, Any]] = None


StreamCallback = Callable[[ChatStreamChunk], None]


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    All methods return a ProviderResponse instead of raising, so callers
    running batch jobs can keep going when one call fails.
    """

    @abstractmethod
    def name(self) -> str:
        """Return provider name for logging."""
        pass

    @abstractmethod
    def supports_model(self, model: str) -> bool:
        """Whether this provider can serve the given model identifier."""
        pass

    @abstractmethod
    def auto_categorize(
        self,
        transactions: List[Transaction],
        user_categories: List[Category],
        model: str = "",
    ) -> ProviderResponse[List[AutoCategorization]]:
        """Suggest a category for each transaction.

        Args:
            transactions: Transactions to categorize (at most 25).
            user_categories: Categories the user has defined.
            model: Model identifier to use.

        Returns:
            ProviderResponse wrapping one AutoCategorization per transaction.
        """
        pass

    @abstractmethod
    def auto_detect_merchants(
        self,
        transactions: List[Transaction],
        user_merchants: List[Merchant],
        model: str = "",
    ) -> ProviderResponse[List[AutoDetectedMerchant]]:
        """Detect the merchant behind each transaction.

        Args:
            transactions: Transactions to inspect (at most 25).
            user_merchants: Merchants the user has already defined.
            model: Model identifier to use.

        Returns:
            ProviderResponse wrapping one AutoDetectedMerchant per transaction.
        """
        pass

    @abstractmethod
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
        """Run a chat completion, optionally streaming chunks to streamer.

        Args:
            prompt: The user's message.
            model: Model identifier to use.
            instructions: Optional system instructions.
            functions: Tool definitions with name, description,
                params_schema and strict keys.
            function_results: Results of earlier tool calls, each with
                call_id and output.
            streamer: Called with each parsed chunk as it arrives.
            previous_response_id: Continue the conversation from this response.

        Returns:
            ProviderResponse wrapping the final ChatResponse.
        """
        pass
