from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_errors
from ..container import Container
from .service import staff_view


def register(app: Flask, container: Container) -> None:
    service = container.staff_service

    @app.route("/api/teachers", methods=["GET"], endpoint="list_teachers")
    @api_errors
    def list_teachers():
        return jsonify(service.list_teachers())

    @app.route("/api/teachers/<identifier>", methods=["GET"], endpoint="get_teacher")
    @api_errors
    def get_teacher(identifier: str):
        return jsonify(staff_view(service.get_teacher(identifier)))

    @app.route("/api/teachers/<identifier>", methods=["DELETE"], endpoint="delete_teacher")
    @api_errors
    def delete_teacher(identifier: str):
        service.delete_teacher(identifier)
        return jsonify({"success": True})
