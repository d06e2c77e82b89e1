"""Request builders and response parsers used by the OpenRouter provider."""

from llm.openrouter.auto_categorizer import AutoCategorizer
from llm.openrouter.auto_merchant_detector import AutoMerchantDetector
from llm.openrouter.chat_config import ChatConfig
from llm.openrouter.chat_parser import ChatParser
from llm.openrouter.chat_stream_parser import ChatStreamParser

__all__ = [
    "AutoCategorizer",
    "AutoMerchantDetector",
    "ChatConfig",
    "ChatParser",
    "ChatStreamParser",
]
