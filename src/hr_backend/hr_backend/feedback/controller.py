from __future__ import annotations

from flask import Flask, g, request

from ..auth.controller import token_required
from ..common.http import envelope, json_body
from ..common.pagination import PageRequest
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth = token_required(container)

    @app.route("/api/employee-feedbacks", methods=["GET"], endpoint="feedbacks_list")
    @auth
    def feedbacks_list():
        page = PageRequest.parse(request.args.get("page"), request.args.get("per_page"))
        result = container.feedback_service.list_feedbacks(g.current_user.id, page, type=request.args.get("type"))
        return envelope(body={"data": [f.to_dict() for f in result.items], "meta": result.meta()})

    @app.route("/api/employee-feedbacks", methods=["POST"], endpoint="feedbacks_create")
    @auth
    def feedbacks_create():
        feedback_id = container.feedback_service.create(g.current_user.id, json_body())
        return envelope(message="Feedback request created successfully", body={"id": feedback_id}, status=201)

    @app.route("/api/employee-feedbacks/<int:feedback_id>", methods=["GET"], endpoint="feedbacks_get")
    @auth
    def feedbacks_get(feedback_id: int):
        return envelope(body=container.feedback_service.get(feedback_id).to_dict())

    @app.route("/api/employee-feedbacks/<int:feedback_id>", methods=["PUT"], endpoint="feedbacks_complete")
    @auth
    def feedbacks_complete(feedback_id: int):
        container.feedback_service.complete(feedback_id, json_body())
        return envelope(message="Feedback updated successfully")

    @app.route("/api/employee-feedbacks/<int:feedback_id>", methods=["DELETE"], endpoint="feedbacks_delete")
    @auth
    def feedbacks_delete(feedback_id: int):
        container.feedback_service.delete(feedback_id, g.current_user.id)
        return envelope(message="Feedback deleted successfully")
