from __future__ import annotations

from datetime import date, datetime, time

import pytest

from src.hr_backend.hr_backend.checkins.model import CheckinRecord
from src.hr_backend.hr_backend.checkins.transitions import (
    OPEN_STATUSES,
    elapsed_minutes,
    parse_transition,
    plan_transition,
)
from src.hr_backend.hr_backend.core.enums import CheckinStatus
from src.hr_backend.hr_backend.core.exceptions import ConflictError, ValidationError

TODAY = date(2026, 2, 2)


def _record(status: CheckinStatus, **kw) -> CheckinRecord:
    return CheckinRecord(
        checkin_id=1,
        user_id=7,
        checkin_date=kw.pop("checkin_date", TODAY),
        checkin_time=kw.pop("checkin_time", time(9, 0)),
        checkout_time=None,
        status=status,
        on_break=status == CheckinStatus.BREAK,
        **kw,
    )


@pytest.mark.parametrize("value", ["lunch", "", None, "CHECKOUT", 1])
def test_parse_transition_rejects_unknown(value):
    with pytest.raises(ValidationError):
        parse_transition(value)


def test_break_plan_expects_checkin():
    plan = plan_transition(_record(CheckinStatus.CHECKIN), CheckinStatus.BREAK, datetime(2026, 2, 2, 12, 0))

    assert plan.on_break is True
    assert plan.expected_from == frozenset({CheckinStatus.CHECKIN})
    assert not plan.is_finish
    assert plan.checkout_time is None


def test_checkout_plan_accepts_both_open_states():
    plan = plan_transition(_record(CheckinStatus.BREAK), CheckinStatus.CHECKOUT, datetime(2026, 2, 2, 17, 30, 45, 999))

    assert plan.expected_from == OPEN_STATUSES
    assert plan.on_break is False
    assert plan.checkout_time == time(17, 30, 45)
    assert plan.daily_minutes == 510


def test_resume_requires_break():
    with pytest.raises(ConflictError, match="not on a break"):
        plan_transition(_record(CheckinStatus.CHECKIN), CheckinStatus.CHECKIN, datetime(2026, 2, 2, 12, 0))


def test_elapsed_minutes_floors_and_clamps():
    assert elapsed_minutes(time(9, 0, 30), time(9, 1, 29)) == 0
    assert elapsed_minutes(time(9, 0, 0), time(17, 30, 59)) == 510
    assert elapsed_minutes(time(17, 0), time(9, 0)) == 0
