"""
Service categories and the optional attributes each one carries.

Every catalog item has a title and a description. On top of those, each
category recognises its own small set of optional attributes; all of them
accept an image URL. Categories without a dedicated attribute set (and
free-form service keys created by admins) only get the image URL.
"""

from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Type

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class ServiceCategory(str, Enum):
    """Predefined service categories, valued by their service key."""
    HOTELS = "hotels"
    RESTAURANTS = "restaurants"
    TRANSPORTATION = "transportation"
    SIM_CARDS = "simCards"
    GUIDES = "guides"

    @classmethod
    def from_key(cls, key: Optional[str]) -> Optional["ServiceCategory"]:
        """Return the category for a service key, or None for free-form keys."""
        try:
            return cls(key)
        except ValueError:
            return None


class CategoryAttributes(BaseModel):
    """Optional attributes shared by every category."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True
    )

    image_url: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @classmethod
    def stored_fields(cls) -> FrozenSet[str]:
        """Field names as they appear in stored documents."""
        return frozenset(field.alias or name for name, field in cls.model_fields.items())

    @classmethod
    def accepted_keys(cls) -> FrozenSet[str]:
        """Keys accepted on input: stored (camelCase) and Python (snake_case) names."""
        return cls.stored_fields() | frozenset(cls.model_fields)

    def to_document(self) -> Dict[str, str]:
        """Stored representation, leaving out attributes that were not supplied."""
        return self.model_dump(by_alias=True, exclude_none=True)


class GenericAttributes(CategoryAttributes):
    """Attributes of categories without a dedicated set: the image URL only."""


class HotelAttributes(CategoryAttributes):
    price: Optional[str] = None
    location: Optional[str] = None


class RestaurantAttributes(CategoryAttributes):
    cuisine_type: Optional[str] = None
    price_range: Optional[str] = None


class SimCardAttributes(CategoryAttributes):
    provider: Optional[str] = None
    data_amount: Optional[str] = None
    price: Optional[str] = None


CATEGORY_ATTRIBUTES: Dict[ServiceCategory, Type[CategoryAttributes]] = {
    ServiceCategory.HOTELS: HotelAttributes,
    ServiceCategory.RESTAURANTS: RestaurantAttributes,
    ServiceCategory.SIM_CARDS: SimCardAttributes,
}


def attributes_model_for(category: Optional[ServiceCategory]) -> Type[CategoryAttributes]:
    """
    Get the attribute model recognised for a category.

    Args:
        category: Service category, or None for free-form service keys

    Returns:
        The category's attribute model; ``GenericAttributes`` when it has none
    """
    if category is None:
        return GenericAttributes
    return CATEGORY_ATTRIBUTES.get(category, GenericAttributes)
