"""Transaction categorization through OpenRouter structured outputs."""

import json
from typing import List, Optional
from pydantic import BaseModel
from llm.openrouter.structured_output import (
    NULL_VALUE,
    normalize_null,
    request_structured_output,
)
from llm.prompts.loader import PromptManager
from llm.providers.base import AutoCategorization
from models.transaction import Transaction
from models.category import Category
from logger import get_logger

logger = get_logger()


class TransactionCategorization(BaseModel):
    """Single transaction categorization result."""

    transaction_id: str
    category_name: str


class CategorizationResponse(BaseModel):
    """Full categorization response with all transactions."""

    categorizations: List[TransactionCategorization]


class AutoCategorizer:
    """Asks a model to pick one of the user's categories per transaction."""

    SCHEMA_NAME = "auto_categorize_personal_finance_transactions"

    def __init__(
        self,
        client,
        model: str,
        transactions: List[Transaction],
        user_categories: List[Category],
        prompt_manager: Optional[PromptManager] = None,
    ):
        self.client = client
        self.model = model
        self.transactions = transactions
        self.user_categories = user_categories
        self.prompt_manager = prompt_manager or PromptManager()

    def auto_categorize(self) -> List[AutoCategorization]:
        """Categorize the batch.

        Returns:
            One AutoCategorization per transaction the model answered for.
            category_name is None when the model had no confident match.

        Raises:
            Exception: If the API call fails or the answer doesn't validate.
        """
        if not self.transactions:
            return []

        rendered_prompt = self.prompt_manager.render_prompt(
            "auto_categorize",
            {
                "categories": json.dumps(
                    [c.to_llm_dict() for c in self.user_categories], indent=2
                ),
                "transactions": json.dumps(
                    [t.to_llm_dict() for t in self.transactions], indent=2
                ),
            },
        )
        model = self.model or rendered_prompt["parameters"].get("model")

        logger.info(
            f"Auto-categorizing {len(self.transactions)} transaction(s) against "
            f"{len(self.user_categories)} categories with {model} "
            f"(prompt version {rendered_prompt['version']})"
        )

        content = request_structured_output(
            self.client, model, rendered_prompt, self.SCHEMA_NAME, self.json_schema()
        )
        result = CategorizationResponse.model_validate_json(content)

        return [
            AutoCategorization(
                transaction_id=c.transaction_id,
                category_name=normalize_null(c.category_name),
            )
            for c in result.categorizations
        ]

    def json_schema(self) -> dict:
        return {
            "type": "object",
            "properties": {
                "categorizations": {
                    "type": "array",
                    "description": "An array of auto-categorizations for each transaction",
                    "items": {
                        "type": "object",
                        "properties": {
                            "transaction_id": {
                                "type": "string",
                                "description": "The internal ID of the original transaction",
                                "enum": [t.id for t in self.transactions],
                            },
                            "category_name": {
                                "type": "string",
                                "description": "The matched category name of the transaction, or null if no match",
                                "enum": [c.name for c in self.user_categories]
                                + [NULL_VALUE],
                            },
                        },
                        "required": ["transaction_id", "category_name"],
                        "additionalProperties": False,
                    },
                }
            },
            "required": ["categorizations"],
            "additionalProperties": False,
        }
