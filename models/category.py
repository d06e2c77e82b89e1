"""Category model for transaction categorization."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Category:
    """Represents a user-defined transaction category.

    Attributes:
        id: Unique identifier.
        name: Category name (unique). This is what the LLM matches on.
        description: Optional description of what belongs in this category.
        parent_id: Optional parent category ID for hierarchical categories.
        classification: 'expense' or 'income'; must agree with the
            transaction type for a match.
    """

    id: int
    name: str
    description: Optional[str] = None
    parent_id: Optional[int] = None
    classification: str = "expense"

    @property
    def is_subcategory(self) -> bool:
        return self.parent_id is not None

    def to_llm_dict(self) -> dict:
        """Convert category to the shape sent to the LLM in prompts."""
        return {
            "id": self.id,
            "name": self.name,
            "is_subcategory": self.is_subcategory,
            "parent_id": self.parent_id,
            "classification": self.classification,
        }
