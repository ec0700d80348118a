"""Change reconciliation — keep edited documents in sync with the data service."""

from merchant_admin.saving.auto_save import AutoSaveEngine, create_auto_save
from merchant_admin.saving.base import SaveEngine, SaveOperation, snapshot
from merchant_admin.saving.indicator import describe_status
from merchant_admin.saving.manual_save import ManualSaveEngine, create_manual_save

__all__ = [
    "AutoSaveEngine",
    "ManualSaveEngine",
    "SaveEngine",
    "SaveOperation",
    "create_auto_save",
    "create_manual_save",
    "describe_status",
    "snapshot",
]
