from __future__ import annotations

from flask import Flask, request

from ..auth.controller import token_required
from ..common.http import envelope
from ..common.pagination import PageRequest
from ..common.validators import require_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth = token_required(container)

    @app.route("/api/employee-docs", methods=["GET"], endpoint="documents_list")
    @auth
    def documents_list():
        page = PageRequest.parse(request.args.get("page"), request.args.get("per_page"))
        raw_user = request.args.get("user_id")
        user_id = require_int(raw_user, "user_id", min_value=1) if raw_user else None
        result = container.document_service.list_documents(page, user_id=user_id)
        return envelope(body={"data": [d.to_dict() for d in result.items], "meta": result.meta()})

    @app.route("/api/employee-docs", methods=["POST"], endpoint="documents_upload")
    @auth
    def documents_upload():
        document_id = container.document_service.upload(
            user_id=request.form.get("user_id"),
            type=request.form.get("type"),
            file=request.files.get("file"),
        )
        return envelope(message="Document uploaded successfully", body={"id": document_id}, status=201)

    @app.route("/api/employee-docs/<int:document_id>", methods=["POST"], endpoint="documents_update")
    @auth
    def documents_update(document_id: int):
        container.document_service.update(
            document_id,
            user_id=request.form.get("user_id"),
            type=request.form.get("type"),
            status=request.form.get("status"),
            file=request.files.get("file"),
        )
        return envelope(message="Document updated successfully")

    @app.route("/api/employee-docs/<int:document_id>", methods=["DELETE"], endpoint="documents_delete")
    @auth
    def documents_delete(document_id: int):
        container.document_service.delete(document_id)
        return envelope(message="Document deleted successfully")
