from typing import Any, Optional

from pydantic import BaseModel, Field


class ApprovalRequestIn(BaseModel):
    quoteId: Any = None


class ApprovalOut(BaseModel):
    status: str
    requested: Optional[bool] = None
    retryAfterSeconds: Optional[int] = None


class ApprovalStatusEntry(BaseModel):
    status: Optional[str] = None
    requested_at: Optional[str] = None


class ApprovalStatusesOut(BaseModel):
    statuses: dict[str, ApprovalStatusEntry] = Field(default_factory=dict)
