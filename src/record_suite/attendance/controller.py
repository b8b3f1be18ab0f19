from __future__ import annotations

from http import HTTPStatus

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import ValidationError
from ..web.guards import admin_required, current_employee_id, login_required
from ..web.params import date_arg
from ..web.serialize import to_json, to_json_list


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service

    @app.route("/attendance/mark", methods=["POST"], endpoint="mark_attendance")
    @login_required
    def mark_attendance():
        status = request.args.get("status")
        if not status:
            raise ValidationError("Missing query parameter status")
        record = attendance.mark_attendance(current_employee_id(), status, work_date=date_arg("date"))
        return jsonify(to_json(record)), HTTPStatus.CREATED

    @app.route("/attendance/my", methods=["GET"], endpoint="my_attendance")
    @login_required
    def my_attendance():
        return jsonify(to_json_list(attendance.attendance_for_employee(current_employee_id())))

    @app.route("/attendance/reports/department/<department>", methods=["GET"], endpoint="department_attendance")
    @admin_required
    def department_attendance(department: str):
        return jsonify(to_json_list(attendance.attendance_for_department(department)))
