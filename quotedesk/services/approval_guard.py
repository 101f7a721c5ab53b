from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Optional, Protocol

from quotedesk.core.clock import as_utc
from quotedesk.models.quote_approval import ApprovalStatus

APPROVAL_COOLDOWN = timedelta(minutes=10)


class ApprovalRecordLike(Protocol):
    status: Optional[str]
    requested_at: Optional[datetime]


class GuardOutcome(str, Enum):
    CREATE = "create"
    ALREADY_APPROVED = "already_approved"
    COOLDOWN = "cooldown"


@dataclass(frozen=True)
class GuardDecision:
    outcome: GuardOutcome
    retry_after_seconds: Optional[int] = None


def cooldown_remaining(requested_at: Any, now: datetime) -> timedelta:
    requested = as_utc(requested_at)
    if requested is None:
        return timedelta(0)
    elapsed = as_utc(now) - requested
    return max(timedelta(0), APPROVAL_COOLDOWN - elapsed)


def decide(latest: Optional[ApprovalRecordLike], now: datetime) -> GuardDecision:
    """
    Decide what a "request approval" call does given the latest approval row.

    - no row / rejected row: create a new pending request
    - approved: report approved, create nothing
    - pending inside the cooldown: refuse, tell the caller when to retry
    - pending past the cooldown: create a fresh pending row
    """
    if latest is None:
        return GuardDecision(GuardOutcome.CREATE)

    status = (latest.status or "").strip()
    if status == ApprovalStatus.APPROVED.value:
        return GuardDecision(GuardOutcome.ALREADY_APPROVED)

    if status == ApprovalStatus.PENDING.value:
        remaining = cooldown_remaining(latest.requested_at, now)
        if remaining > timedelta(0):
            return GuardDecision(
                GuardOutcome.COOLDOWN,
                retry_after_seconds=math.ceil(remaining.total_seconds()),
            )

    return GuardDecision(GuardOutcome.CREATE)
