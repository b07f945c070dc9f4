from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_errors, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    @api_errors
    def login():
        data = json_body(request)
        principal = container.auth_service.login(
            role=data.get("role"),
            identifier=data.get("identifier"),
            password=data.get("password"),
        )
        return jsonify(principal.to_dict())

    @app.route("/api/auth/register", methods=["POST"], endpoint="register")
    @api_errors
    def register_account():
        container.registration_service.register(json_body(request))
        return jsonify({"success": True, "message": "Account created successfully!"}), 201
