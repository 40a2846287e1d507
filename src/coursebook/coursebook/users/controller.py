from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.web import current_actor, error_response, json_view
from ..core.exceptions import ImportAborted, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    users = container.user_service

    def _json_body():
        data = request.get_json(silent=True)
        if data is None:
            raise ValidationError("Expected a JSON body")
        return data

    def _json_object():
        data = _json_body()
        if not isinstance(data, dict):
            raise ValidationError("Expected a JSON object")
        return data

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @json_view("Error getting users.")
    def list_users():
        actor = current_actor(users)
        return jsonify([u.to_dict() for u in users.list_users(actor)])

    @app.route("/api/users/<int:user_id>", methods=["GET"], endpoint="show_user")
    @json_view("Error getting user.")
    def show_user(user_id: int):
        actor = current_actor(users)
        return jsonify(users.show_user(actor, user_id).to_dict())

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    @json_view("Error saving user")
    def create_user():
        actor = current_actor(users)
        user = users.create_user(actor, _json_object())
        return jsonify(user.to_dict()), 201

    @app.route("/api/users/<int:user_id>", methods=["PUT"], endpoint="update_user")
    @json_view("Error saving user")
    def update_user(user_id: int):
        actor = current_actor(users)
        return jsonify(users.update_user(actor, user_id, _json_object()).to_dict())

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="remove_user")
    @json_view("Error removing user.")
    def remove_user(user_id: int):
        actor = current_actor(users)
        users.remove_user(actor, user_id)
        return jsonify({"removed": user_id})

    @app.route("/api/users/import", methods=["POST"], endpoint="import_users")
    @json_view("Error creating user.")
    def import_users():
        actor = current_actor(users)
        try:
            result = users.import_users(actor, _json_body())
        except ImportAborted as e:
            return error_response(
                "Error creating user.",
                500,
                str(e.__cause__ or e),
                created=[u.to_dict() for u in e.created],
                index=e.index,
            )

        if result.echoed is not None:
            return jsonify(list(result.echoed))
        return jsonify(
            {
                "created": [u.to_dict() for u in result.created],
                "skipped": [s.to_dict() for s in result.skipped],
            }
        )

    @app.route("/api/users/attendance", methods=["POST"], endpoint="toggle_attendance")
    @json_view("Error saving user")
    def toggle_attendance():
        actor = current_actor(users)
        data = _json_object()
        if data.get("idn") in (None, "") or not data.get("date"):
            raise ValidationError("idn and date are required")
        try:
            idn = int(data["idn"])
        except (TypeError, ValueError):
            raise ValidationError("idn must be a number")
        container.attendance_service.toggle(actor, idn=idn, when=data["date"])
        return jsonify(data)

    @app.route("/api/users/<int:user_id>/summary", methods=["GET"], endpoint="user_summary")
    @json_view("Error getting user.")
    def user_summary(user_id: int):
        actor = current_actor(users)
        return jsonify(container.report_service.build_user_summary(actor, user_id, now=now_local()))
