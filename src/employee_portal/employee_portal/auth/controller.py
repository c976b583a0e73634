from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body, message
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        body = json_body()
        employee = container.auth_service.login(body.get("email"), body.get("password"))
        return jsonify(employee.to_dict())

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        body = json_body()
        container.auth_service.logout(body.get("employeeId"))
        return message("Logged out successfully")
