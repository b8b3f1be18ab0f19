from __future__ import annotations

from http import HTTPStatus

from flask import Flask, jsonify, request

from ..container import Container
from ..web.guards import admin_required, login_required
from ..web.params import json_body
from ..web.serialize import to_json, to_json_list


def register(app: Flask, container: Container) -> None:
    students = container.student_service

    @app.route("/students", methods=["POST"], endpoint="create_student")
    @admin_required
    def create_student():
        data = json_body()
        student = students.create_student(
            name=data.get("name"),
            email=data.get("email"),
            age=data.get("age"),
            course=data.get("course"),
        )
        return jsonify(to_json(student)), HTTPStatus.CREATED

    @app.route("/students", methods=["GET"], endpoint="list_students")
    @login_required
    def list_students():
        return jsonify(to_json_list(students.list_students()))

    @app.route("/students/search", methods=["GET"], endpoint="search_students")
    @login_required
    def search_students():
        return jsonify(to_json_list(students.search_students(request.args.get("name"))))

    @app.route("/students/<int:student_id>", methods=["GET"], endpoint="get_student")
    @login_required
    def get_student(student_id: int):
        return jsonify(to_json(students.get_student(student_id)))

    @app.route("/students/<int:student_id>", methods=["PUT"], endpoint="update_student")
    @admin_required
    def update_student(student_id: int):
        data = json_body()
        student = students.update_student(
            student_id,
            name=data.get("name"),
            email=data.get("email"),
            age=data.get("age"),
            course=data.get("course"),
        )
        return jsonify(to_json(student))

    @app.route("/students/<int:student_id>", methods=["DELETE"], endpoint="delete_student")
    @admin_required
    def delete_student(student_id: int):
        students.delete_student(student_id)
        return "", HTTPStatus.NO_CONTENT
