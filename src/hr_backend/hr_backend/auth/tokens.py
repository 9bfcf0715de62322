from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import JWTError, jwt

from ..core.exceptions import AuthorizationError


def issue_token(employee_id: int, *, secret: str, algorithm: str = "HS256", expires_minutes: int = 60) -> str:
    now = datetime.now(timezone.utc)
    claims = {
        "userId": int(employee_id),
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=expires_minutes)).timestamp()),
    }
    return jwt.encode(claims, secret, algorithm=algorithm)


def decode_token(token: str, *, secret: str, algorithm: str = "HS256") -> Dict[str, Any]:
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError as exc:
        raise AuthorizationError("Invalid token") from exc
    if "userId" not in payload:
        raise AuthorizationError("Invalid token")
    return payload
