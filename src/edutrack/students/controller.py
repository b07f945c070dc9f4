from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_errors, json_body
from ..container import Container
from ..core.exceptions import ValidationError
from .service import student_view


def register(app: Flask, container: Container) -> None:
    service = container.student_service

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    @api_errors
    def list_students():
        return jsonify(service.list_students())

    @app.route("/api/students/<roll_number>", methods=["GET"], endpoint="get_student")
    @api_errors
    def get_student(roll_number: str):
        return jsonify(student_view(service.get_student(roll_number)))

    @app.route("/api/students/<roll_number>", methods=["DELETE"], endpoint="delete_student")
    @api_errors
    def delete_student(roll_number: str):
        service.delete_student(roll_number)
        return jsonify({"success": True})

    @app.route("/api/students/<roll_number>/reset-device", methods=["POST"], endpoint="reset_student_device")
    @api_errors
    def reset_device(roll_number: str):
        service.reset_device(roll_number)
        return jsonify({"success": True})

    @app.route("/api/students/bulk", methods=["POST"], endpoint="bulk_students")
    @api_errors
    def bulk_students():
        rows = json_body(request).get("students")
        if not isinstance(rows, list):
            raise ValidationError("students must be a list.")
        result = service.bulk_import(rows)
        return jsonify({"success": True, "added": result.added, "skipped": result.skipped})
