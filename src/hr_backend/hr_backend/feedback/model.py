from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import FeedbackStatus, FeedbackType


@dataclass(frozen=True)
class Feedback:
    feedback_id: int
    type: FeedbackType
    status: FeedbackStatus
    requested_by: Optional[int] = None
    requested_to: Optional[int] = None
    requested_for: Optional[int] = None
    feedback_topic: Optional[str] = None
    feedback: Optional[str] = None
    feedback_check: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    requested_by_user: Optional[str] = None
    requested_to_user: Optional[str] = None
    requested_for_user: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.feedback_id,
            "requested_by": self.requested_by,
            "requested_to": self.requested_to,
            "requested_for": self.requested_for,
            "feedback_topic": self.feedback_topic,
            "feedback": self.feedback,
            "type": self.type.value,
            "status": self.status.value,
            "feedback_check": self.feedback_check,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "requested_by_user": self.requested_by_user,
            "requested_to_user": self.requested_to_user,
            "requested_for_user": self.requested_for_user,
        }


@dataclass(frozen=True)
class NewFeedback:
    """A row ready for insertion; fields already shaped for its type."""

    requested_by: int
    type: FeedbackType
    status: FeedbackStatus = FeedbackStatus.PENDING
    requested_to: Optional[int] = None
    requested_for: Optional[int] = None
    feedback_topic: Optional[str] = None
    feedback: Optional[str] = None
    feedback_check: bool = False


@dataclass(frozen=True)
class FeedbackScope:
    """List filter: the type plus which column must equal the caller."""

    type: Optional[FeedbackType] = None
    requested_by: Optional[int] = None
    requested_to: Optional[int] = None
