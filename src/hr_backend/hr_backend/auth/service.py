from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash

from ..common.validators import require_email, require_non_empty
from ..core.enums import EmployeeStatus
from ..core.exceptions import AuthenticationError, AuthorizationError
from ..employees.repository import EmployeeRepository
from .tokens import decode_token, issue_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentEmployee:
    """Identity resolved from a bearer token; trusted by every feature service."""

    id: int
    email: str
    employee_status: EmployeeStatus


class AuthService:
    """Access gate: issues bearer tokens and resolves them to active employees."""

    def __init__(
        self,
        employees: EmployeeRepository,
        *,
        secret: str,
        algorithm: str = "HS256",
        expires_minutes: int = 60,
    ):
        self._employees = employees
        self._secret = secret
        self._algorithm = algorithm
        self._expires_minutes = int(expires_minutes)

    def login(self, email: str, password: str) -> str:
        email = require_email(email)
        password = require_non_empty(password, "password")

        credentials = self._employees.get_credentials(email)
        if not credentials or credentials.employee_status != EmployeeStatus.ACTIVE:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(credentials.password_hash, password)
        except ValueError:
            # e.g. hashes written by another system in an unknown format
            ok = False
        if not ok:
            raise AuthenticationError("Invalid email or password")

        logger.info("login", extra={"user_id": credentials.id})
        return issue_token(
            credentials.id,
            secret=self._secret,
            algorithm=self._algorithm,
            expires_minutes=self._expires_minutes,
        )

    def resolve(self, token: Optional[str]) -> CurrentEmployee:
        if not token:
            raise AuthenticationError("Access token required")

        payload = decode_token(token, secret=self._secret, algorithm=self._algorithm)
        try:
            employee_id = int(payload["userId"])
        except (TypeError, ValueError):
            raise AuthorizationError("Invalid token")

        credentials = self._employees.get_active_identity(employee_id)
        if not credentials:
            raise AuthenticationError("Invalid token or user deactivated")
        return CurrentEmployee(
            id=credentials.id,
            email=credentials.email,
            employee_status=credentials.employee_status,
        )


def bearer_token(authorization_header: Optional[str]) -> Optional[str]:
    header = (authorization_header or "").strip()
    if not header.lower().startswith("bearer "):
        return None
    token = header.split(" ", 1)[1].strip()
    return token or None
