from __future__ import annotations

from enum import Enum


class CheckinStatus(str, Enum):
    """State of a day's check-in record."""

    CHECKIN = "checkin"
    BREAK = "break"
    CHECKOUT = "checkout"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    TERMINATED = "terminated"


class EmploymentType(str, Enum):
    INTERN = "intern"
    EXTERN = "extern"
    INTERNSHIP = "internship"
    TRAINEE = "trainee"
    WORKING_STUDENT = "working_student"
    PERMANENT = "permanent"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class DocumentStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    ARCHIVED = "archived"


class FeedbackType(str, Enum):
    SELF_FEEDBACK_REQUEST = "self_feedback_request"
    OTHER_FEEDBACK_REQUEST = "other_feedback_request"
    GIVING_FEEDBACK = "giving_feedback"


class FeedbackStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
