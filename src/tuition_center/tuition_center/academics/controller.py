from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/exams", methods=["GET"], endpoint="exams_list")
    def exams_list():
        exams = container.exam_service.list_exams(grade=request.args.get("grade") or None)
        return jsonify([e.to_dict() for e in exams])

    @app.route("/api/exams", methods=["POST"], endpoint="exams_create")
    def exams_create():
        body = json_body()
        subjects = body.get("subjects")
        if not isinstance(subjects, list):
            raise ValidationError("subjects must be a list of subject names")
        exam = container.exam_service.create_exam(
            name=body.get("name"),
            grade=body.get("grade"),
            exam_date=body.get("date"),
            subjects=subjects,
            max_marks=body.get("maxMarks"),
        )
        return jsonify(exam.to_dict()), 201

    @app.route("/api/exams/series", methods=["GET"], endpoint="exams_series")
    def exams_series():
        return jsonify([s.to_dict() for s in container.exam_service.series()])

    @app.route("/api/exams/<exam_id>", methods=["GET"], endpoint="exams_datasheet")
    def exams_datasheet(exam_id: str):
        datasheet = container.exam_service.datasheet(exam_id)
        return jsonify(datasheet.to_dict() if datasheet else {})

    @app.route("/api/exams/<exam_id>/marks", methods=["POST"], endpoint="exams_save_marks")
    def exams_save_marks(exam_id: str):
        body = json_body()
        marks = body.get("marks")
        if not isinstance(marks, dict):
            raise ValidationError("marks must be an object of studentId -> {subject: marks}")
        saved = container.exam_service.save_marks(exam_id, marks, exam_date=body.get("examDate"))
        return jsonify({"examId": exam_id, "saved": saved})
