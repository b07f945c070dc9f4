from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_errors, json_body
from ..container import Container
from .service import entry_view, session_view


def register(app: Flask, container: Container) -> None:
    lifecycle = container.session_service

    @app.route("/api/sessions", methods=["GET"], endpoint="list_sessions")
    @api_errors
    def list_sessions():
        teacher_id = request.args.get("teacherId")
        sessions = lifecycle.list_for_issuer(teacher_id) if teacher_id else lifecycle.list_sessions()
        return jsonify([session_view(s) for s in sessions])

    @app.route("/api/sessions", methods=["POST"], endpoint="open_session")
    @api_errors
    def open_session():
        data = json_body(request)
        session = lifecycle.open(issuer=data.get("teacherId"), label=data.get("courseName"))
        return jsonify(session_view(session)), 201

    @app.route("/api/sessions/<session_id>", methods=["GET"], endpoint="get_session")
    @api_errors
    def get_session(session_id: str):
        return jsonify(session_view(lifecycle.get_session(session_id)))

    @app.route("/api/sessions/<session_id>/close", methods=["POST"], endpoint="close_session")
    @api_errors
    def close_session(session_id: str):
        return jsonify(session_view(lifecycle.close(session_id)))

    @app.route("/api/sessions/<session_id>/attendance", methods=["GET"], endpoint="session_roster")
    @api_errors
    def session_roster(session_id: str):
        return jsonify([entry_view(e) for e in lifecycle.list_roster(session_id)])
