"""Merchant page document — the value edited in the visual editor."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from merchant_admin.models.hours import HoursOfWeek


class MerchantService(BaseModel):
    name: str
    description: str | None = None
    price: str | None = None


class MerchantPage(BaseModel):
    """A merchant's public page as held by the admin editor.

    Field names are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str | None = None
    business_name: str = ""
    street_address: str | None = None
    city: str = ""
    state: str = ""
    zip_code: str | None = None
    phone: str = ""
    website: str | None = None
    category_id: str | None = None
    description: str | None = None
    vimeo_url: str | None = None
    google_place_id: str | None = None
    logo_url: str | None = None
    hours: HoursOfWeek = Field(default_factory=HoursOfWeek)
    instagram_url: str | None = None
    facebook_url: str | None = None
    tiktok_url: str | None = None
    photos: list[str] = Field(default_factory=list)
    services: list[MerchantService] = Field(default_factory=list)
    about_story: str | None = None
