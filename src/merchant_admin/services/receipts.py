"""Receipt moderation — bulk approve and reject."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from merchant_admin.errors import SaveValidationError
from merchant_admin.models.receipt import BulkReviewResult, ReviewAction

if TYPE_CHECKING:
    from merchant_admin.services.data_service import DataServiceClient

logger = logging.getLogger(__name__)

_BULK_PATH = "/api/admin/receipts/bulk"


class ReceiptModeration:
    def __init__(self, client: DataServiceClient) -> None:
        self._client = client

    async def bulk_review(
        self,
        receipt_ids: list[str],
        action: ReviewAction | str,
        rejection_reason: str | None = None,
    ) -> BulkReviewResult:
        """Approve or reject several receipts at once.

        Some receipts may fail while others succeed; that is reported in the
        result, and callers should re-fetch the queue to reconcile.
        """
        if not receipt_ids:
            raise SaveValidationError("Select at least one receipt")
        try:
            action = ReviewAction(action)
        except ValueError:
            raise SaveValidationError("Invalid action. Must be 'approve' or 'reject'") from None
        reason = (rejection_reason or "").strip()
        if action == ReviewAction.REJECT and not reason:
            raise SaveValidationError("Rejection reason is required for bulk reject")

        body: dict[str, object] = {"receiptIds": receipt_ids, "action": action.value}
        if reason:
            body["rejectionReason"] = reason
        payload = await self._client.post_json(_BULK_PATH, body) or {}

        result = BulkReviewResult(
            action=action,
            updated=int(payload.get("updated", 0)),
            failed=int(payload.get("failed", 0)),
        )
        if result.failed:
            logger.warning(
                "Bulk %s left %d of %d receipts unchanged",
                action.value,
                result.failed,
                len(receipt_ids),
            )
        return result
