from __future__ import annotations

from http import HTTPStatus

from flask import Flask, jsonify, session

from ..container import Container
from ..web.guards import admin_required, current_role
from ..web.params import json_body
from ..web.serialize import to_json, to_json_list


def register(app: Flask, container: Container) -> None:
    @app.route("/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))

        session.clear()
        session["employee_id"] = s_user.employee_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value
        session["department"] = s_user.department

        return jsonify(
            {
                "success": True,
                "employee_id": s_user.employee_id,
                "full_name": s_user.full_name,
                "role": s_user.role.value,
            }
        )

    @app.route("/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/employees", methods=["POST"], endpoint="create_employee")
    @admin_required
    def create_employee():
        data = json_body()
        employee = container.employee_service.create_employee(
            full_name=data.get("full_name"),
            department=data.get("department"),
            username=data.get("username"),
            password=data.get("password"),
            role=data.get("role", "staff"),
        )
        return jsonify(to_json(employee)), HTTPStatus.CREATED

    @app.route("/employees", methods=["GET"], endpoint="list_employees")
    @admin_required
    def list_employees():
        return jsonify(to_json_list(container.employee_service.list_employees()))

    @app.route("/employees/<int:employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @admin_required
    def delete_employee(employee_id: int):
        container.employee_service.delete_employee(current_role=current_role(), employee_id=employee_id)
        return "", HTTPStatus.NO_CONTENT
