from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_errors, json_body
from ..container import Container
from .model import DisplayFields


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sessions/<session_id>/mark", methods=["POST"], endpoint="mark_attendance")
    @api_errors
    def mark_attendance(session_id: str):
        """Student check-in after scanning the session code."""
        data = json_body(request)
        container.admission_service.mark_attendance(
            session_id,
            data.get("rollNumber"),
            data.get("deviceId"),
            DisplayFields.from_mapping(data),
        )
        return jsonify({"success": True})
