from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body, snake_fields
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/students", methods=["GET"], endpoint="students_list")
    def students_list():
        students = container.student_service.list(
            grade=request.args.get("grade") or None,
            status=request.args.get("status") or None,
        )
        return jsonify([s.to_dict() for s in students])

    @app.route("/api/students", methods=["POST"], endpoint="students_admit")
    def students_admit():
        student = container.student_service.admit(**snake_fields(json_body()))
        return jsonify(student.to_dict()), 201

    @app.route("/api/students/<student_id>", methods=["GET"], endpoint="students_get")
    def students_get(student_id: str):
        student = container.student_service.get(student_id)
        return jsonify(student.to_dict() if student else {})

    @app.route("/api/students/<student_id>", methods=["PUT", "PATCH"], endpoint="students_update")
    def students_update(student_id: str):
        student = container.student_service.update(student_id, **snake_fields(json_body()))
        return jsonify(student.to_dict())

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="students_delete")
    def students_delete(student_id: str):
        container.student_service.delete(student_id)
        return jsonify({"deleted": student_id})

    @app.route("/api/students/<student_id>/status", methods=["POST"], endpoint="students_toggle_status")
    def students_toggle_status(student_id: str):
        status = container.student_service.toggle_status(student_id)
        return jsonify({"id": student_id, "status": status.value})

    @app.route("/api/students/<student_id>/report", methods=["GET"], endpoint="students_report")
    def students_report(student_id: str):
        report = container.exam_service.student_report(
            student_id,
            series_name=request.args.get("series") or None,
            exam_date=request.args.get("date") or None,
        )
        return jsonify(report)
