from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.login_log_service

    @app.route("/api/login-logs", methods=["GET"], endpoint="list_login_logs")
    def list_login_logs():
        logs = service.list_logs(request.args.get("employeeId"))
        return jsonify([log.to_dict() for log in logs])

    @app.route("/api/login-logs", methods=["POST"], endpoint="add_login_log")
    def add_login_log():
        body = json_body()
        log = service.record(body.get("employeeId"), body.get("action"))
        return jsonify(log.to_dict()), 201
