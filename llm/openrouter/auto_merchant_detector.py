"""Merchant detection through OpenRouter structured outputs."""

import json
from typing import List, Optional
from pydantic import BaseModel
from llm.openrouter.structured_output import normalize_null, request_structured_output
from llm.prompts.loader import PromptManager
from llm.providers.base import AutoDetectedMerchant
from models.transaction import Transaction
from models.merchant import Merchant
from logger import get_logger

logger = get_logger()


class DetectedMerchant(BaseModel):
    transaction_id: str
    business_name: str
    business_url: str


class MerchantDetectionResponse(BaseModel):
    merchants: List[DetectedMerchant]


class AutoMerchantDetector:
    """Asks a model for the business name and domain behind each transaction."""

    SCHEMA_NAME = "auto_detect_personal_finance_merchants"

    def __init__(
        self,
        client,
        model: str,
        transactions: List[Transaction],
        user_merchants: List[Merchant],
        prompt_manager: Optional[PromptManager] = None,
    ):
        self.client = client
        self.model = model
        self.transactions = transactions
        self.user_merchants = user_merchants
        self.prompt_manager = prompt_manager or PromptManager()

    def auto_detect_merchants(self) -> List[AutoDetectedMerchant]:
        """Detect merchants for the batch.

        Returns:
            One AutoDetectedMerchant per transaction the model answered for,
            with None for names or URLs it couldn't determine.
        """
        if not self.transactions:
            return []

        rendered_prompt = self.prompt_manager.render_prompt(
            "auto_detect_merchants",
            {
                "merchants": json.dumps(
                    [m.to_llm_dict() for m in self.user_merchants], indent=2
                ),
                "transactions": json.dumps(
                    [t.to_llm_dict() for t in self.transactions], indent=2
                ),
            },
        )
        model = self.model or rendered_prompt["parameters"].get("model")

        logger.info(
            f"Detecting merchants for {len(self.transactions)} transaction(s) "
            f"with {model} (prompt version {rendered_prompt['version']})"
        )

        content = request_structured_output(
            self.client, model, rendered_prompt, self.SCHEMA_NAME, self.json_schema()
        )
        result = MerchantDetectionResponse.model_validate_json(content)

        return [
            AutoDetectedMerchant(
                transaction_id=m.transaction_id,
                business_name=normalize_null(m.business_name),
                business_url=normalize_null(m.business_url),
            )
            for m in result.merchants
        ]

    def json_schema(self) -> dict:
        return {
            "type": "object",
            "properties": {
                "merchants": {
                    "type": "array",
                    "description": "An array of auto-detected merchant businesses for each transaction",
                    "items": {
                        "type": "object",
                        "properties": {
                            "transaction_id": {
                                "type": "string",
                                "description": "The internal ID of the original transaction",
                                "enum": [t.id for t in self.transactions],
                            },
                            "business_name": {
                                "type": "string",
                                "description": "The detected business name of the transaction, or null if uncertain",
                            },
                            "business_url": {
                                "type": "string",
                                "description": "The URL of the detected business such as 'amazon.com', or null if uncertain",
                            },
                        },
                        "required": ["transaction_id", "business_name", "business_url"],
                        "additionalProperties": False,
                    },
                }
            },
            "required": ["merchants"],
            "additionalProperties": False,
        }
