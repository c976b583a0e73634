from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body, message
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.leave_service

    @app.route("/api/leave-requests", methods=["GET"], endpoint="list_leave_requests")
    def list_leave_requests():
        leaves = service.list_requests(
            employee_id=request.args.get("employeeId"),
            status=request.args.get("status"),
        )
        return jsonify([lr.to_dict() for lr in leaves])

    @app.route("/api/leave-requests/<request_id>", methods=["GET"], endpoint="get_leave_request")
    def get_leave_request(request_id: str):
        return jsonify(service.get_request(request_id).to_dict())

    @app.route("/api/leave-requests", methods=["POST"], endpoint="apply_leave")
    def apply_leave():
        leave = service.apply(json_body())
        return jsonify(leave.to_dict()), 201

    @app.route("/api/leave-requests/<request_id>/approve", methods=["PUT"], endpoint="approve_leave")
    def approve_leave(request_id: str):
        service.approve(request_id, json_body())
        return message("Leave request approved successfully")

    @app.route("/api/leave-requests/<request_id>/reject", methods=["PUT"], endpoint="reject_leave")
    def reject_leave(request_id: str):
        service.reject(request_id, json_body())
        return message("Leave request rejected successfully")
