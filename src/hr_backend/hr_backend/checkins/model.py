from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..common.timefmt import format_minutes
from ..core.enums import CheckinStatus


@dataclass(frozen=True)
class CheckinRecord:
    """Domain entity: one employee's attendance for one calendar day.

    The ``*_hours`` display values are derived from the minute counters on every
    access, so they cannot drift from them.
    """

    checkin_id: int
    user_id: int
    checkin_date: date
    checkin_time: time
    checkout_time: Optional[time]
    status: CheckinStatus
    on_break: bool = False
    working_minutes: int = 0
    break_minutes: int = 0
    daily_minutes: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def working_hours(self) -> str:
        return format_minutes(self.working_minutes)

    @property
    def break_hours(self) -> str:
        return format_minutes(self.break_minutes)

    @property
    def daily_hours(self) -> str:
        return format_minutes(self.daily_minutes)

    @property
    def is_closed(self) -> bool:
        return self.status == CheckinStatus.CHECKOUT

    def to_dict(self) -> dict:
        return {
            "id": self.checkin_id,
            "user_id": self.user_id,
            "checkin_date": self.checkin_date.isoformat(),
            "checkin_time": self.checkin_time.strftime("%H:%M:%S"),
            "checkout_time": self.checkout_time.strftime("%H:%M:%S") if self.checkout_time else None,
            "status": self.status.value,
            "on_break": self.on_break,
            "total_working_minutes": self.working_minutes,
            "total_break_minutes": self.break_minutes,
            "total_daily_minutes": self.daily_minutes,
            "total_working_hours": self.working_hours,
            "total_break_hours": self.break_hours,
            "total_daily_hours": self.daily_hours,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class CheckinListRow:
    """Read-model for the paginated admin listing (record + employee name)."""

    record: CheckinRecord
    employee: str

    def to_dict(self) -> dict:
        out = self.record.to_dict()
        out["employee"] = self.employee
        return out
