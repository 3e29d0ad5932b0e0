"""
Input validation schemas using Pydantic for request bodies and query filters.
"""
import math
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from grocer.utilities.constants import MAX_CATEGORY_LENGTH, UUID_PATTERN


class DealFilterInput(BaseModel):
    """Optional deal-finder filters. Anything unusable falls back to the default."""
    model_config = ConfigDict(populate_by_name=True)

    category: str = 'all'
    max_price: Optional[float] = Field(default=None, alias='maxPrice')

    @field_validator('category', mode='before')
    @classmethod
    def default_category(cls, v):
        if not v or not isinstance(v, str):
            return 'all'
        return v

    @field_validator('max_price', mode='before')
    @classmethod
    def coerce_max_price(cls, v):
        """Empty, zero or non-numeric values mean no price cap."""
        if not v or isinstance(v, bool):
            return None
        try:
            value = float(v)
        except (TypeError, ValueError):
            return None
        if math.isnan(value) or value == 0:
            return None
        return value

    @classmethod
    def from_raw(cls, body: Any) -> "DealFilterInput":
        if not isinstance(body, dict):
            return cls()
        try:
            return cls.model_validate(body)
        except ValidationError:
            return cls()


class CartItemInput(BaseModel):
    """One cart line as sent by the storefront."""
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., alias='productId', min_length=1)
    quantity: int = Field(..., ge=1)

    @field_validator('product_id')
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip()


class CompareRequest(BaseModel):
    """Schema for the store comparison request."""
    items: List[CartItemInput] = Field(default_factory=list)


class InvalidQueryParameter(ValueError):
    """Raised when a live price query parameter is rejected."""

    def __init__(self, name: str):
        super().__init__(f"Invalid {name} parameter")
        self.name = name


def validate_price_query(category: Optional[str], store_id: Optional[str],
                         product_id: Optional[str]) -> None:
    """Reject oversized categories and ids that are not UUIDs."""
    if category and len(category) > MAX_CATEGORY_LENGTH:
        raise InvalidQueryParameter('category')
    if store_id and not UUID_PATTERN.match(store_id):
        raise InvalidQueryParameter('storeId')
    if product_id and not UUID_PATTERN.match(product_id):
        raise InvalidQueryParameter('productId')
