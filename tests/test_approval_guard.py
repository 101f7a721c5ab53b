from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from quotedesk.services.approval_guard import (
    APPROVAL_COOLDOWN,
    GuardOutcome,
    cooldown_remaining,
    decide,
)

NOW = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


def _row(status, requested_at):
    return SimpleNamespace(status=status, requested_at=requested_at)


def test_no_previous_request_creates():
    assert decide(None, NOW).outcome is GuardOutcome.CREATE


def test_approved_is_terminal():
    decision = decide(_row("approved", NOW - timedelta(days=3)), NOW)
    assert decision.outcome is GuardOutcome.ALREADY_APPROVED
    assert decision.retry_after_seconds is None


def test_pending_inside_cooldown_reports_retry_after():
    decision = decide(_row("pending", NOW - timedelta(minutes=3)), NOW)
    assert decision.outcome is GuardOutcome.COOLDOWN
    assert decision.retry_after_seconds == 420


def test_retry_after_rounds_up():
    decision = decide(_row("pending", NOW - timedelta(seconds=599, microseconds=500000)), NOW)
    assert decision.outcome is GuardOutcome.COOLDOWN
    assert decision.retry_after_seconds == 1


def test_pending_after_cooldown_creates():
    assert decide(_row("pending", NOW - APPROVAL_COOLDOWN), NOW).outcome is GuardOutcome.CREATE
    assert decide(_row("pending", NOW - timedelta(hours=2)), NOW).outcome is GuardOutcome.CREATE


def test_missing_or_garbage_timestamp_counts_as_elapsed():
    assert decide(_row("pending", None), NOW).outcome is GuardOutcome.CREATE
    assert decide(_row("pending", "not-a-date"), NOW).outcome is GuardOutcome.CREATE


def test_rejected_is_treated_as_no_request():
    assert decide(_row("rejected", NOW), NOW).outcome is GuardOutcome.CREATE


def test_naive_timestamps_are_read_as_utc():
    # SQLite hands back naive datetimes
    naive = (NOW - timedelta(minutes=5)).replace(tzinfo=None)
    assert cooldown_remaining(naive, NOW) == timedelta(minutes=5)


def test_iso_string_timestamps_are_accepted():
    assert cooldown_remaining("2026-03-01T08:58:00Z", NOW) == timedelta(minutes=8)
