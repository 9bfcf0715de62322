from __future__ import annotations

import pytest
from jose import jwt

from src.hr_backend.hr_backend.auth.service import AuthService, bearer_token
from src.hr_backend.hr_backend.auth.tokens import decode_token, issue_token
from src.hr_backend.hr_backend.core.enums import EmployeeStatus
from src.hr_backend.hr_backend.core.exceptions import AuthenticationError, AuthorizationError, ValidationError

SECRET = "unit-test-secret"


@pytest.fixture
def auth(employees_repo) -> AuthService:
    employees_repo.add(1, "admin@kistr.com", password="s3cret")
    employees_repo.add(2, "gone@kistr.com", password="s3cret", status=EmployeeStatus.TERMINATED)
    return AuthService(employees_repo, secret=SECRET, expires_minutes=30)


def test_login_issues_token_with_user_id_claim(auth):
    token = auth.login("Admin@Kistr.com", "s3cret")

    claims = jwt.decode(token, SECRET, algorithms=["HS256"])
    assert claims["userId"] == 1
    assert claims["exp"] > claims["iat"]


@pytest.mark.parametrize("email, password", [("admin@kistr.com", "wrong"), ("nobody@kistr.com", "s3cret"), ("gone@kistr.com", "s3cret")])
def test_login_rejects_bad_credentials(auth, email, password):
    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        auth.login(email, password)


def test_login_requires_fields(auth):
    with pytest.raises(ValidationError):
        auth.login("", "")


def test_resolve_returns_current_employee(auth):
    current = auth.resolve(auth.login("admin@kistr.com", "s3cret"))

    assert current.id == 1
    assert current.email == "admin@kistr.com"


def test_resolve_without_token(auth):
    with pytest.raises(AuthenticationError, match="Access token required"):
        auth.resolve(None)


def test_resolve_rejects_forged_token(auth):
    forged = issue_token(1, secret="someone-else")
    with pytest.raises(AuthorizationError, match="Invalid token"):
        auth.resolve(forged)


def test_resolve_rejects_deactivated_employee(auth):
    token = issue_token(2, secret=SECRET)
    with pytest.raises(AuthenticationError, match="deactivated"):
        auth.resolve(token)


def test_expired_token_is_invalid():
    token = issue_token(1, secret=SECRET, expires_minutes=-5)
    with pytest.raises(AuthorizationError):
        decode_token(token, secret=SECRET)


def test_token_without_user_claim_is_invalid():
    token = jwt.encode({"sub": "1"}, SECRET, algorithm="HS256")
    with pytest.raises(AuthorizationError):
        decode_token(token, secret=SECRET)


@pytest.mark.parametrize(
    "header, expected",
    [("Bearer abc", "abc"), ("bearer  abc ", "abc"), ("Basic abc", None), ("Bearer ", None), (None, None)],
)
def test_bearer_token(header, expected):
    assert bearer_token(header) == expected
