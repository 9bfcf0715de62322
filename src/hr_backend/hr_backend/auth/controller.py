from __future__ import annotations

from functools import wraps

from flask import Flask, g, request

from ..common.http import envelope, json_body
from ..container import Container
from .service import bearer_token


def token_required(container: Container):
    """View decorator: resolve the bearer token into ``g.current_user``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = bearer_token(request.headers.get("Authorization"))
            g.current_user = container.auth_service.resolve(token)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def register(app: Flask, container: Container) -> None:
    auth = token_required(container)

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        token = container.auth_service.login(data.get("email", ""), data.get("password", ""))
        return envelope(message="Login successful", body={"token": token, "token_type": "Bearer"})

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @auth
    def me():
        employee = container.employee_service.get_employee(g.current_user.id)
        return envelope(body=employee.to_dict())
