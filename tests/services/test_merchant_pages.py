"""Tests for merchant page persistence."""

import asyncio

import pytest

from merchant_admin.config import EditorConfig, Settings
from merchant_admin.errors import DataServiceError, SaveValidationError
from merchant_admin.models import HoursOfWeek, MerchantPage, MerchantService, SaveStatus
from merchant_admin.services import (
    MerchantPageStore,
    build_update_payload,
    strip_phone,
    validate_merchant_page,
)

_PAGE_PATH = "/api/admin/merchant-pages/mp-1"
_STORED = {
    "id": "mp-1",
    "businessName": "Blue Door Bakery",
    "city": "Austin",
    "state": "TX",
    "phone": "5125550100",
    "hours": {"monday": "7:00 AM - 3:00 PM", "sunday": "Closed"},
    "photos": ["https://cdn.test/1.jpg"],
}


@pytest.fixture
def page() -> MerchantPage:
    return MerchantPage.model_validate(_STORED)


@pytest.fixture
def store(client) -> MerchantPageStore:
    return MerchantPageStore(client)


@pytest.mark.unit
class TestValidation:
    def test_valid_page_passes(self, page):
        validate_merchant_page(page)

    @pytest.mark.parametrize(
        ("changes", "message"),
        [
            ({"business_name": "  "}, "Business name is required"),
            ({"city": ""}, "City is required"),
            ({"state": "Texas"}, "State must be a 2-letter code"),
            ({"phone": "555-0100"}, "Phone number must be 10 digits"),
        ],
    )
    def test_invalid_page(self, page, changes, message):
        with pytest.raises(SaveValidationError, match=message):
            validate_merchant_page(page.model_copy(update=changes))

    def test_strip_phone(self):
        assert strip_phone("(512) 555-0100") == "5125550100"
        assert strip_phone("+1 512 555 0100 ext 9") == "1512555010"


@pytest.mark.unit
class TestPayload:
    def test_payload_is_camel_case_and_trimmed(self, page):
        edited = page.model_copy(
            update={
                "business_name": " Blue Door Bakery ",
                "state": "tx",
                "phone": "(512) 555-0100",
                "website": "   ",
                "services": [MerchantService(name="Sourdough", price="$8")],
            }
        )

        payload = build_update_payload(edited)

        assert payload["businessName"] == "Blue Door Bakery"
        assert payload["state"] == "TX"
        assert payload["phone"] == "5125550100"
        assert payload["website"] is None
        assert payload["services"] == [{"name": "Sourdough", "price": "$8"}]
        assert payload["photos"] == ["https://cdn.test/1.jpg"]

    def test_payload_normalizes_hours(self, page):
        payload = build_update_payload(page)

        assert payload["hours"] == {"monday": "07:00-15:00", "sunday": "Closed"}

    def test_empty_collections_become_null(self, page):
        bare = page.model_copy(update={"hours": HoursOfWeek(), "photos": [], "services": []})

        payload = build_update_payload(bare)

        assert payload["hours"] is None
        assert payload["photos"] is None
        assert payload["services"] is None


@pytest.mark.unit
class TestStore:
    @pytest.mark.asyncio
    async def test_load_unwraps_merchant(self, store, data_service):
        data_service.reply("GET", _PAGE_PATH, body={"merchant": _STORED})

        loaded = await store.load("mp-1")

        assert loaded.business_name == "Blue Door Bakery"
        assert loaded.hours.monday == "7:00 AM - 3:00 PM"

    @pytest.mark.asyncio
    async def test_load_unexpected_payload(self, store, data_service):
        data_service.reply("GET", _PAGE_PATH, body=["not", "a", "page"])

        with pytest.raises(DataServiceError):
            await store.load("mp-1")

    @pytest.mark.asyncio
    async def test_save_patches_normalized_payload(self, store, data_service, page):
        data_service.reply("PATCH", _PAGE_PATH, body={"merchant": _STORED})

        await store.save("mp-1", page)

        assert data_service.requests[0].method == "PATCH"
        assert data_service.last_json()["hours"]["monday"] == "07:00-15:00"

    @pytest.mark.asyncio
    async def test_save_validates_before_request(self, store, data_service, page):
        with pytest.raises(SaveValidationError):
            await store.save("mp-1", page.model_copy(update={"city": ""}))

        assert data_service.requests == []

    @pytest.mark.asyncio
    async def test_save_surfaces_server_error(self, store, data_service, page):
        data_service.reply("PATCH", _PAGE_PATH, 404, {"error": "Merchant not found"})

        with pytest.raises(DataServiceError, match="Merchant not found"):
            await store.save("mp-1", page)

    @pytest.mark.asyncio
    async def test_upload_photo(self, store, data_service):
        data_service.reply("POST", f"{_PAGE_PATH}/upload-photo", body={"url": "https://cdn.test/2.jpg"})

        url = await store.upload_photo(
            "mp-1", filename="2.jpg", content=b"jpeg", content_type="image/jpeg"
        )

        assert url == "https://cdn.test/2.jpg"

    @pytest.mark.asyncio
    async def test_revalidate(self, store, data_service):
        data_service.reply("POST", f"{_PAGE_PATH}/revalidate", body={"revalidated": True})

        await store.revalidate("mp-1")

        assert data_service.requests[0].url.path == f"{_PAGE_PATH}/revalidate"


@pytest.mark.unit
class TestEditorSessions:
    """Test the store wired into both save engines."""

    @pytest.fixture
    def settings(self) -> Settings:
        return Settings(editor=EditorConfig(debounce_ms=20, saved_display_ms=30))

    @pytest.mark.asyncio
    async def test_auto_save_session(self, store, data_service, settings):
        data_service.reply("GET", _PAGE_PATH, body=_STORED)
        data_service.reply("PATCH", _PAGE_PATH, body=_STORED)
        engine = await store.open_auto_save("mp-1", settings)

        page = engine.current
        page.description = "Fresh bread daily"
        engine.edit(page)
        await asyncio.sleep(0.15)

        patches = [r for r in data_service.requests if r.method == "PATCH"]
        assert len(patches) == 1
        assert data_service.last_json()["description"] == "Fresh bread daily"
        assert engine.status == SaveStatus.CLEAN
        assert engine.previous.description is None
        engine.dispose()

    @pytest.mark.asyncio
    async def test_auto_save_blocks_invalid_page(self, store, data_service, settings):
        data_service.reply("GET", _PAGE_PATH, body=_STORED)
        engine = await store.open_auto_save("mp-1", settings)

        engine.edit(engine.current.model_copy(update={"state": "Texas"}))
        await asyncio.sleep(0.15)

        assert [r.method for r in data_service.requests] == ["GET"]
        assert engine.error == "State must be a 2-letter code"
        engine.dispose()

    @pytest.mark.asyncio
    async def test_manual_save_session(self, store, data_service, settings):
        data_service.reply("GET", _PAGE_PATH, body=_STORED)
        data_service.reply("PATCH", _PAGE_PATH, body=_STORED)
        engine = await store.open_manual_save("mp-1", settings)
        assert engine.is_dirty is False

        engine.update(engine.current.model_copy(update={"city": "Round Rock"}))
        assert engine.is_dirty is True
        await engine.save()

        assert engine.is_dirty is False
        assert engine.baseline.city == "Round Rock"
        engine.dispose()
