"""
Category model for finance tracker data.
"""

from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, Field


class CategoryType(IntEnum):
    """Income/expense flag stored on a category."""

    EXPENSE = 0
    INCOME = 1


# Closed tag set of the earlier record model, kept verbatim.
INCOME_CATEGORY_NAMES = ("vzp", "plat", "investice", "polovicni_uvazek", "bonus")
EXPENSE_CATEGORY_NAMES = (
    "nakupovani", "jidlo", "telefon", "zabava", "vzdelani",
    "krasa", "sport", "socialni", "doprava", "obleceni", "auto",
    "alkohol", "cigarety", "elektronika", "cestovani", "zdravi",
    "domaci_mazlicek", "opravy", "bydleni", "domov", "darky",
    "dary", "loterie", "svaciny", "deti", "zelenina", "ovoce",
)
DEFAULT_CATEGORY_NAME = "ostatni"
LEGACY_CATEGORY_NAMES = (
    INCOME_CATEGORY_NAMES + EXPENSE_CATEGORY_NAMES + (DEFAULT_CATEGORY_NAME,)
)


def legacy_category_name(value: Optional[str]) -> str:
    """Map a tag onto the legacy set, falling back to 'ostatni'."""
    if value in LEGACY_CATEGORY_NAMES:
        return value
    return DEFAULT_CATEGORY_NAME


class Category(BaseModel):
    """
    Represents a record category.

    The ``type`` flag is display metadata only; records are classified
    as income or expense from the sign of their amount.
    """

    model_config = {"strict": True, "populate_by_name": True}

    # Required fields
    category_id: str = Field(serialization_alias="id")
    name: str = Field(min_length=1)
    type: CategoryType

    # Display metadata
    icon: Optional[str] = None
    color: Optional[str] = None
