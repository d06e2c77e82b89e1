"""Merchant model for merchant detection."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Merchant:
    """A merchant the user has already defined.

    Attributes:
        id: Unique identifier.
        name: Business name as the user wrote it.
        url: Optional business website domain.
    """

    id: int
    name: str
    url: Optional[str] = None

    def to_llm_dict(self) -> dict:
        return {"name": self.name}
