"""Check-in state machine.

    checkin --break--> break --checkin--> checkin
    checkin|break --checkout--> checkout   (terminal)

Pure functions only; persistence applies a plan with a conditional update keyed
on ``expected_from`` so concurrent requests cannot both succeed.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Any, FrozenSet, Optional

from ..core.enums import CheckinStatus
from ..core.exceptions import ConflictError, ValidationError
from .model import CheckinRecord

OPEN_STATUSES: FrozenSet[CheckinStatus] = frozenset({CheckinStatus.CHECKIN, CheckinStatus.BREAK})

_ALLOWED_FROM: dict[CheckinStatus, FrozenSet[CheckinStatus]] = {
    CheckinStatus.BREAK: frozenset({CheckinStatus.CHECKIN}),
    CheckinStatus.CHECKIN: frozenset({CheckinStatus.BREAK}),
    CheckinStatus.CHECKOUT: OPEN_STATUSES,
}


@dataclass(frozen=True)
class TransitionPlan:
    checkin_id: int
    target: CheckinStatus
    expected_from: FrozenSet[CheckinStatus]
    on_break: bool
    checkout_time: Optional[time] = None
    daily_minutes: Optional[int] = None

    @property
    def is_finish(self) -> bool:
        return self.target == CheckinStatus.CHECKOUT


def parse_transition(value: Any) -> CheckinStatus:
    try:
        return CheckinStatus(value)
    except ValueError:
        raise ValidationError("Invalid status type", [{"field": "type", "message": "must be checkin, break or checkout"}])


def elapsed_minutes(start: time, end: time) -> int:
    """Whole minutes from ``start`` to ``end`` on the same calendar day (never negative)."""
    start_s = start.hour * 3600 + start.minute * 60 + start.second
    end_s = end.hour * 3600 + end.minute * 60 + end.second
    return max(0, (end_s - start_s) // 60)


def plan_transition(record: CheckinRecord, target: CheckinStatus, now: datetime) -> TransitionPlan:
    if record.is_closed:
        raise ConflictError("You have already checked out today")
    if record.checkin_date != now.date():
        raise ConflictError("No open check-in for today")

    allowed = _ALLOWED_FROM[target]
    if record.status not in allowed:
        if target == CheckinStatus.BREAK:
            raise ConflictError("You are already on a break")
        raise ConflictError("You are not on a break")

    if target == CheckinStatus.CHECKOUT:
        checkout_time = now.time().replace(microsecond=0)
        return TransitionPlan(
            checkin_id=record.checkin_id,
            target=target,
            expected_from=allowed,
            on_break=False,
            checkout_time=checkout_time,
            daily_minutes=elapsed_minutes(record.checkin_time, checkout_time),
        )

    return TransitionPlan(
        checkin_id=record.checkin_id,
        target=target,
        expected_from=allowed,
        on_break=target == CheckinStatus.BREAK,
    )
