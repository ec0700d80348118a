"""Merchant page persistence — load, validate, save and wrap in a save engine."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from merchant_admin.errors import DataServiceError, SaveValidationError
from merchant_admin.hours import normalize_week
from merchant_admin.models.merchant import MerchantPage
from merchant_admin.saving import AutoSaveEngine, ManualSaveEngine

if TYPE_CHECKING:
    from merchant_admin.config import Settings
    from merchant_admin.saving.base import SaveOperation, StatusListener
    from merchant_admin.services.data_service import DataServiceClient

logger = logging.getLogger(__name__)

_PAGES_PATH = "/api/admin/merchant-pages"
_NON_DIGITS = re.compile(r"\D")
_PHONE_DIGITS = 10
_STATE_LENGTH = 2


def strip_phone(phone: str) -> str:
    """Keep at most ten digits of a phone number."""
    return _NON_DIGITS.sub("", phone)[:_PHONE_DIGITS]


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def validate_merchant_page(page: MerchantPage) -> None:
    """Reject a page the data service would refuse, before any request is made."""
    if not page.business_name.strip():
        raise SaveValidationError("Business name is required")
    if not page.city.strip():
        raise SaveValidationError("City is required")
    if len(page.state.strip()) != _STATE_LENGTH:
        raise SaveValidationError("State must be a 2-letter code")
    if len(strip_phone(page.phone)) != _PHONE_DIGITS:
        raise SaveValidationError("Phone number must be 10 digits")


def build_update_payload(page: MerchantPage) -> dict[str, Any]:
    """Shape a page into the PATCH body: trimmed strings, blanks as null, canonical hours."""
    hours = normalize_week(page.hours)
    return {
        "businessName": page.business_name.strip(),
        "streetAddress": _clean(page.street_address),
        "city": page.city.strip(),
        "state": page.state.strip().upper(),
        "zipCode": _clean(page.zip_code),
        "phone": strip_phone(page.phone),
        "website": _clean(page.website),
        "categoryId": page.category_id or None,
        "description": _clean(page.description),
        "vimeoUrl": _clean(page.vimeo_url),
        "googlePlaceId": page.google_place_id or None,
        "logoUrl": _clean(page.logo_url),
        "hours": None if hours.is_empty() else hours.model_dump(exclude_none=True),
        "instagramUrl": _clean(page.instagram_url),
        "facebookUrl": _clean(page.facebook_url),
        "tiktokUrl": _clean(page.tiktok_url),
        "photos": page.photos or None,
        "services": [s.model_dump(exclude_none=True) for s in page.services] or None,
        "aboutStory": _clean(page.about_story),
    }


def _unwrap(payload: Any) -> dict[str, Any]:
    if isinstance(payload, dict) and isinstance(payload.get("merchant"), dict):
        return payload["merchant"]
    if isinstance(payload, dict):
        return payload
    raise DataServiceError("Unexpected merchant payload")


class MerchantPageStore:
    """Read and write merchant pages through the data service."""

    def __init__(self, client: DataServiceClient) -> None:
        self._client = client

    async def load(self, page_id: str) -> MerchantPage:
        payload = await self._client.get_json(f"{_PAGES_PATH}/{page_id}")
        return MerchantPage.model_validate(_unwrap(payload))

    async def save(self, page_id: str, page: MerchantPage) -> MerchantPage:
        """Validate and persist a page; returns the page as stored by the server."""
        validate_merchant_page(page)
        payload = await self._client.patch_json(f"{_PAGES_PATH}/{page_id}", build_update_payload(page))
        logger.info("Merchant page %s saved", page_id)
        if payload is None:
            return page
        return MerchantPage.model_validate(_unwrap(payload))

    def saver(self, page_id: str) -> SaveOperation[MerchantPage]:
        """A save operation bound to one page, for use with the save engines."""

        async def _save(page: MerchantPage) -> MerchantPage | None:
            await self.save(page_id, page)
            # the submitted snapshot is the new baseline
            return None

        return _save

    async def upload_photo(
        self,
        page_id: str,
        *,
        filename: str,
        content: bytes,
        content_type: str,
    ) -> str:
        return await self._client.upload_file(
            f"{_PAGES_PATH}/{page_id}/upload-photo",
            filename=filename,
            content=content,
            content_type=content_type,
            fields={"type": "photo"},
        )

    async def revalidate(self, page_id: str) -> None:
        """Ask the public site to rebuild the merchant's page."""
        await self._client.post_json(f"{_PAGES_PATH}/{page_id}/revalidate")

    async def open_auto_save(
        self,
        page_id: str,
        settings: Settings,
        *,
        on_status_change: StatusListener | None = None,
    ) -> AutoSaveEngine[MerchantPage]:
        """Load a page and start an auto-save session for it."""
        page = await self.load(page_id)
        return AutoSaveEngine(
            page,
            self.saver(page_id),
            debounce_ms=settings.editor.debounce_ms,
            saved_display_ms=settings.editor.saved_display_ms,
            validator=validate_merchant_page,
            on_status_change=on_status_change,
        )

    async def open_manual_save(
        self,
        page_id: str,
        settings: Settings,
        *,
        on_status_change: StatusListener | None = None,
    ) -> ManualSaveEngine[MerchantPage]:
        """Load a page and start a manual-save session for it."""
        page = await self.load(page_id)
        return ManualSaveEngine(
            page,
            page,
            self.saver(page_id),
            saved_display_ms=settings.editor.saved_display_ms,
            validator=validate_merchant_page,
            on_status_change=on_status_change,
        )
