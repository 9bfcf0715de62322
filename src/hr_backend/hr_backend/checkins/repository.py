from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from .model import CheckinListRow, CheckinRecord
from .transitions import TransitionPlan


class CheckinRepository(Protocol):
    """Record Store contract used by the attendance ledger."""

    def insert_open_day(self, *, user_id: int, checkin_date: date, checkin_time: time) -> Optional[int]:
        """Create the day's record; ``None`` when (user_id, checkin_date) already exists."""

        raise NotImplementedError

    def get_by_id(self, checkin_id: int) -> Optional[CheckinRecord]:
        raise NotImplementedError

    def apply_transition(self, plan: TransitionPlan) -> bool:
        """Conditional update; ``False`` when the record is no longer in ``plan.expected_from``."""

        raise NotImplementedError

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[CheckinRecord]:
        raise NotImplementedError

    def count(self, *, user_id: Optional[int] = None) -> int:
        raise NotImplementedError

    def list_page(self, *, limit: int, offset: int, user_id: Optional[int] = None) -> Sequence[CheckinListRow]:
        raise NotImplementedError
