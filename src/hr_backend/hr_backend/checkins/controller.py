from __future__ import annotations

from flask import Flask, g, request

from ..auth.controller import token_required
from ..common.http import envelope, json_body
from ..common.pagination import PageRequest
from ..common.validators import require_int
from ..container import Container
from ..core.enums import CheckinStatus

_TRANSITION_MESSAGES = {
    CheckinStatus.BREAK: "Break started",
    CheckinStatus.CHECKIN: "Back to work",
    CheckinStatus.CHECKOUT: "Checked out successfully",
}


def register(app: Flask, container: Container) -> None:
    auth = token_required(container)

    @app.route("/api/employee-checkins", methods=["GET"], endpoint="checkins_list")
    @auth
    def checkins_list():
        page = PageRequest.parse(request.args.get("page"), request.args.get("per_page"))
        raw_user = request.args.get("user_id")
        user_id = require_int(raw_user, "user_id", min_value=1) if raw_user else None
        result = container.checkin_service.list_checkins(page, user_id=user_id)
        return envelope(body={"data": [row.to_dict() for row in result.items], "meta": result.meta()})

    @app.route("/api/employee-checkins", methods=["POST"], endpoint="checkins_open_day")
    @auth
    def checkins_open_day():
        record = container.checkin_service.open_day(g.current_user.id)
        data = record.to_dict()
        return envelope(
            message="Check-in successful",
            body={key: data[key] for key in ("id", "checkin_date", "checkin_time")},
            status=201,
        )

    @app.route("/api/employee-checkins/<int:checkin_id>", methods=["PUT"], endpoint="checkins_transition")
    @auth
    def checkins_transition(checkin_id: int):
        data = json_body()
        record = container.checkin_service.apply_transition(
            checkin_id, data.get("type"), employee_id=g.current_user.id
        )
        return envelope(message=_TRANSITION_MESSAGES[record.status], body=record.to_dict())

    @app.route("/api/get-employee-checkin", methods=["GET"], endpoint="checkins_history")
    @auth
    def checkins_history():
        records = container.checkin_service.history_for_employee(g.current_user.id)
        return envelope(body={"data": [r.to_dict() for r in records]})
