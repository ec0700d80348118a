"""Data-service glue for the admin screens."""

from merchant_admin.services.data_service import DataServiceClient
from merchant_admin.services.merchant_pages import (
    MerchantPageStore,
    build_update_payload,
    strip_phone,
    validate_merchant_page,
)
from merchant_admin.services.receipts import ReceiptModeration

__all__ = [
    "DataServiceClient",
    "MerchantPageStore",
    "ReceiptModeration",
    "build_update_payload",
    "strip_phone",
    "validate_merchant_page",
]
