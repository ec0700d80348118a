"""Data models for editable documents and their supporting values."""

from merchant_admin.models.hours import DayHours, HoursOfWeek, Weekday
from merchant_admin.models.merchant import MerchantPage, MerchantService
from merchant_admin.models.receipt import BulkReviewResult, ReviewAction
from merchant_admin.models.save import SaveErrorKind, SaveStatus

__all__ = [
    "BulkReviewResult",
    "DayHours",
    "HoursOfWeek",
    "MerchantPage",
    "MerchantService",
    "ReviewAction",
    "SaveErrorKind",
    "SaveStatus",
    "Weekday",
]
