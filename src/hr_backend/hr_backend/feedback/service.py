from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..common.pagination import Page, PageRequest
from ..common.validators import optional_text, require_bool, require_choice, require_int, require_non_empty
from ..core.constants import MAX_FEEDBACK_LENGTH, MAX_FEEDBACK_TOPIC_LENGTH
from ..core.enums import FeedbackStatus, FeedbackType
from ..core.exceptions import NotFoundError
from .model import Feedback, FeedbackScope, NewFeedback
from .repository import FeedbackRepository

logger = logging.getLogger(__name__)


def scope_for(employee_id: int, feedback_type: Optional[FeedbackType]) -> FeedbackScope:
    """Self requests and given feedback belong to the requester; other requests to the addressee."""
    if feedback_type is None:
        return FeedbackScope()
    if feedback_type is FeedbackType.OTHER_FEEDBACK_REQUEST:
        return FeedbackScope(type=feedback_type, requested_to=employee_id)
    return FeedbackScope(type=feedback_type, requested_by=employee_id)


def _employee_ref(value: Any, field_name: str) -> int:
    return require_int(value, field_name, min_value=1)


def parse_new_feedback(employee_id: int, payload: Mapping[str, Any]) -> NewFeedback:
    feedback_type = require_choice(payload.get("type"), FeedbackType, "type")
    raw_check = payload.get("feedback_check")
    check = require_bool(raw_check, "feedback_check") if raw_check not in (None, "") else False

    if feedback_type is FeedbackType.SELF_FEEDBACK_REQUEST:
        return NewFeedback(
            requested_by=employee_id,
            type=feedback_type,
            requested_to=_employee_ref(payload.get("requested_to"), "requested_to"),
            requested_for=employee_id,
            feedback_topic=optional_text(payload.get("feedback_topic"), "feedback_topic", max_len=MAX_FEEDBACK_TOPIC_LENGTH),
            feedback_check=check,
        )
    if feedback_type is FeedbackType.OTHER_FEEDBACK_REQUEST:
        return NewFeedback(
            requested_by=employee_id,
            type=feedback_type,
            requested_to=_employee_ref(payload.get("requested_to"), "requested_to"),
            requested_for=_employee_ref(payload.get("requested_for"), "requested_for"),
            feedback_check=check,
        )
    return NewFeedback(
        requested_by=employee_id,
        type=feedback_type,
        status=FeedbackStatus.COMPLETED,
        requested_for=_employee_ref(payload.get("requested_for"), "requested_for"),
        feedback=require_non_empty(payload.get("feedback"), "feedback", max_len=MAX_FEEDBACK_LENGTH),
        feedback_check=check,
    )


class FeedbackService:
    def __init__(self, feedbacks: FeedbackRepository):
        self._feedbacks = feedbacks

    def list_feedbacks(self, employee_id: int, page: PageRequest, *, type: Any = None) -> Page[Feedback]:
        feedback_type = require_choice(type, FeedbackType, "type") if type not in (None, "") else None
        scope = scope_for(employee_id, feedback_type)
        total = self._feedbacks.count(scope)
        items = self._feedbacks.list_page(scope, limit=page.per_page, offset=page.offset)
        return Page(items=list(items), total=total, request=page)

    def create(self, employee_id: int, payload: Mapping[str, Any]) -> int:
        new = parse_new_feedback(employee_id, payload)
        feedback_id = self._feedbacks.insert(new)
        logger.info("feedback created id=%s type=%s", feedback_id, new.type.value)
        return feedback_id

    def get(self, feedback_id: int) -> Feedback:
        feedback = self._feedbacks.get_by_id(feedback_id)
        if not feedback:
            raise NotFoundError("Feedback not found")
        return feedback

    def complete(self, feedback_id: int, payload: Mapping[str, Any]) -> None:
        text = optional_text(payload.get("feedback_given"), "feedback_given", max_len=MAX_FEEDBACK_LENGTH)
        raw_check = payload.get("feedback_check")
        check = require_bool(raw_check, "feedback_check") if raw_check not in (None, "") else False
        if not self._feedbacks.complete(feedback_id, feedback=text, feedback_check=check):
            raise NotFoundError("Feedback not found")

    def delete(self, feedback_id: int, employee_id: int) -> None:
        if not self._feedbacks.delete_requested_by(feedback_id, employee_id):
            raise NotFoundError("Feedback not found or not authorized")
        logger.info("feedback deleted id=%s by=%s", feedback_id, employee_id)
