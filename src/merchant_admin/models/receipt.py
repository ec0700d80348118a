"""Receipt moderation models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, computed_field


class ReviewAction(StrEnum):
    APPROVE = "approve"
    REJECT = "reject"


class BulkReviewResult(BaseModel):
    """Outcome of a bulk approve/reject; a non-zero ``failed`` is not an error."""

    action: ReviewAction
    updated: int = 0
    failed: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def message(self) -> str:
        verb = "approved" if self.action == ReviewAction.APPROVE else "rejected"
        text = f"Successfully {verb} {self.updated} receipts"
        if self.failed:
            text += f" ({self.failed} could not be updated — refresh to reconcile)"
        return text
