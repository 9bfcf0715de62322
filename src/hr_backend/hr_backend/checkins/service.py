from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.pagination import Page, PageRequest
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import CheckinStatus
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError
from .model import CheckinListRow, CheckinRecord
from .repository import CheckinRepository
from .transitions import parse_transition, plan_transition

logger = logging.getLogger(__name__)


class CheckinService:
    """Attendance ledger: opens the day, applies transitions, reads history.

    All authority over current state lives in the repository; this class keeps
    no attendance state between calls.
    """

    def __init__(self, checkins: CheckinRepository):
        self._checkins = checkins

    def open_day(self, employee_id: int, *, now: datetime | None = None) -> CheckinRecord:
        now = (now or now_local()).replace(microsecond=0)
        today = now.date()

        new_id = self._checkins.insert_open_day(user_id=employee_id, checkin_date=today, checkin_time=now.time())
        if new_id is None:
            raise ConflictError("You have already checked in today")

        logger.info("checkin opened", extra={"user_id": employee_id})
        return CheckinRecord(
            checkin_id=new_id,
            user_id=employee_id,
            checkin_date=today,
            checkin_time=now.time(),
            checkout_time=None,
            status=CheckinStatus.CHECKIN,
        )

    def apply_transition(
        self,
        checkin_id: int,
        requested: Any,
        *,
        employee_id: Optional[int] = None,
        now: datetime | None = None,
    ) -> CheckinRecord:
        target = parse_transition(requested)
        now = now or now_local()

        record = self._checkins.get_by_id(checkin_id)
        if not record:
            raise NotFoundError("Check-in not found")
        if employee_id is not None and record.user_id != employee_id:
            raise AuthorizationError("You can only update your own check-in")

        plan = plan_transition(record, target, now)
        if not self._checkins.apply_transition(plan):
            # Lost a race with another request for the same record.
            current = self._checkins.get_by_id(checkin_id)
            if current is None:
                raise NotFoundError("Check-in not found")
            plan_transition(current, target, now)
            raise ConflictError("Check-in was modified concurrently, please retry")

        updated = self._checkins.get_by_id(checkin_id)
        if updated is None:
            raise NotFoundError("Check-in not found")
        logger.info("checkin transition %s -> %s", record.status.value, target.value, extra={"user_id": record.user_id})
        return updated

    def history_for_employee(self, employee_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[CheckinRecord]:
        return list(self._checkins.get_recent_for_user(employee_id, limit))

    def list_checkins(self, page: PageRequest, *, user_id: Optional[int] = None) -> Page[CheckinListRow]:
        total = self._checkins.count(user_id=user_id)
        rows = self._checkins.list_page(limit=page.per_page, offset=page.offset, user_id=user_id)
        return Page(items=list(rows), total=total, request=page)
