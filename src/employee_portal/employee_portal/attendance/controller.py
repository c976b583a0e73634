from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body, message
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance", methods=["GET"], endpoint="list_attendance")
    def list_attendance():
        return jsonify([r.to_dict() for r in service.list_records()])

    @app.route("/api/attendance/<attendance_id>", methods=["GET"], endpoint="get_attendance")
    def get_attendance(attendance_id: str):
        return jsonify(service.get_record(attendance_id).to_dict())

    @app.route("/api/attendance/employee/<employee_id>", methods=["GET"], endpoint="employee_attendance")
    def employee_attendance(employee_id: str):
        return jsonify([r.to_dict() for r in service.list_for_employee(employee_id)])

    @app.route("/api/attendance", methods=["POST"], endpoint="mark_attendance")
    def mark_attendance():
        record = service.mark_attendance(json_body())
        return jsonify(record.to_dict()), 201

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="clock_in")
    def clock_in():
        record = service.clock_in(json_body().get("employeeId"))
        return jsonify(record.to_dict()), 201

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="clock_out")
    def clock_out():
        record = service.clock_out(json_body().get("employeeId"))
        return jsonify(record.to_dict())

    @app.route("/api/attendance/<attendance_id>", methods=["PUT"], endpoint="update_attendance")
    def update_attendance(attendance_id: str):
        service.update_record(attendance_id, json_body())
        return message("Attendance record updated successfully")

    @app.route("/api/attendance/<attendance_id>", methods=["DELETE"], endpoint="delete_attendance")
    def delete_attendance(attendance_id: str):
        service.delete_record(attendance_id)
        return message("Attendance record deleted successfully")
