from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass
class Transaction:
    id: str
    transaction_date: date
    description: str
    amount: Decimal  # always positive
    type: str  # 'income', 'expense', or 'transfer'
    hint: Optional[str] = None  # category supplied by the bank or aggregator
    merchant_name: Optional[str] = None
    auto_category_id: Optional[int] = None
    auto_merchant_name: Optional[str] = None
    auto_merchant_url: Optional[str] = None

    def to_llm_dict(self) -> dict:
        """Convert transaction to the shape sent to the LLM in prompts."""
        return {
            "id": self.id,
            "amount": float(self.amount),
            "classification": self.type,
            "description": self.description,
            "merchant": self.merchant_name,
            "hint": self.hint,
        }
