from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_errors, json_body
from ..container import Container
from .service import config_view


def register(app: Flask, container: Container) -> None:
    service = container.settings_service

    @app.route("/api/config", methods=["GET"], endpoint="get_config")
    @api_errors
    def get_config():
        return jsonify(config_view(service.get()))

    @app.route("/api/config", methods=["POST"], endpoint="replace_config")
    @api_errors
    def replace_config():
        return jsonify(config_view(service.replace(json_body(request))))
