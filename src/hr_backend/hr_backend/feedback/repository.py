from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Feedback, FeedbackScope, NewFeedback


class FeedbackRepository(Protocol):
    def count(self, scope: FeedbackScope) -> int:
        raise NotImplementedError

    def list_page(self, scope: FeedbackScope, *, limit: int, offset: int) -> Sequence[Feedback]:
        raise NotImplementedError

    def get_by_id(self, feedback_id: int) -> Optional[Feedback]:
        raise NotImplementedError

    def insert(self, new: NewFeedback) -> int:
        raise NotImplementedError

    def complete(self, feedback_id: int, *, feedback: Optional[str], feedback_check: bool) -> bool:
        raise NotImplementedError

    def delete_requested_by(self, feedback_id: int, requested_by: int) -> bool:
        raise NotImplementedError
