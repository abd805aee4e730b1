"""
Record model for finance tracker data.
"""

import math
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, computed_field, field_validator

MAX_DESCRIPTION_LENGTH = 500
MAX_ABS_AMOUNT = 10_000_000

INCOME = "income"
EXPENSE = "expense"


def classify(amount: float) -> str:
    """
    Classify an amount as income or expense.

    Zero counts as income.
    """
    return INCOME if amount >= 0 else EXPENSE


class Record(BaseModel):
    """
    Represents a single monetary transaction.

    Sign convention: amount >= 0 is income, amount < 0 is expense.
    """

    model_config = {"strict": True, "populate_by_name": True}

    # Required fields
    record_id: str = Field(serialization_alias="id")
    amount: float
    date: datetime

    # Categorization (cleared when the category is deleted)
    category_id: Optional[str] = Field(default=None, serialization_alias="categoryId")

    description: Optional[str] = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def type(self) -> str:
        """Income/expense classification derived from the amount."""
        return classify(self.amount)

    @field_validator("amount")
    @classmethod
    def validate_amount_range(cls, v: float) -> float:
        """Validate that amount is a finite number within reasonable range."""
        if not math.isfinite(v):
            raise ValueError("Amount must be a finite number")
        if abs(v) > MAX_ABS_AMOUNT:
            raise ValueError(f"Amount {v} exceeds maximum allowed value")
        return v
