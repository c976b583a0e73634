from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body, message
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/tasks", methods=["GET"], endpoint="list_tasks")
    def list_tasks():
        return jsonify([t.to_dict() for t in container.task_service.list_tasks()])

    @app.route("/api/tasks/<task_id>", methods=["GET"], endpoint="get_task")
    def get_task(task_id: str):
        return jsonify(container.task_service.get_task(task_id).to_dict())

    @app.route("/api/tasks/employee/<employee_id>", methods=["GET"], endpoint="employee_tasks")
    def employee_tasks(employee_id: str):
        return jsonify([t.to_dict() for t in container.task_service.list_for_employee(employee_id)])

    @app.route("/api/tasks", methods=["POST"], endpoint="add_task")
    def add_task():
        task = container.task_service.create_task(json_body())
        return jsonify(task.to_dict()), 201

    @app.route("/api/tasks/<task_id>", methods=["PUT"], endpoint="update_task")
    def update_task(task_id: str):
        container.task_service.update_task(task_id, json_body())
        return message("Task updated successfully")

    @app.route("/api/tasks/<task_id>", methods=["DELETE"], endpoint="delete_task")
    def delete_task(task_id: str):
        container.task_service.delete_task(task_id)
        return message("Task deleted successfully")
