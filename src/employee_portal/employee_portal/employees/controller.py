from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body, message
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    def list_employees():
        return jsonify([e.to_dict() for e in container.employee_service.list_employees()])

    @app.route("/api/employees/<employee_id>", methods=["GET"], endpoint="get_employee")
    def get_employee(employee_id: str):
        return jsonify(container.employee_service.get_employee(employee_id).to_dict())

    @app.route("/api/employees", methods=["POST"], endpoint="add_employee")
    def add_employee():
        employee = container.employee_service.create_employee(json_body())
        return jsonify(employee.to_dict()), 201

    @app.route("/api/employees/<employee_id>", methods=["PUT"], endpoint="update_employee")
    def update_employee(employee_id: str):
        container.employee_service.update_employee(employee_id, json_body())
        return message("Employee updated successfully")

    @app.route("/api/employees/<employee_id>", methods=["DELETE"], endpoint="delete_employee")
    def delete_employee(employee_id: str):
        container.employee_service.delete_employee(employee_id)
        return message("Employee deleted successfully")
