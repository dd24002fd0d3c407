from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll", methods=["GET"], endpoint="payroll_list")
    def payroll_list():
        month = request.args.get("month")
        year = request.args.get("year")
        if not month or not year:
            raise ValidationError("month and year are required")
        return jsonify([s.to_dict() for s in container.payroll_service.for_period(month, year)])

    @app.route("/api/payroll/generate", methods=["POST"], endpoint="payroll_generate")
    def payroll_generate():
        body = json_body()
        month = body.get("month")
        year = body.get("year")
        if not month or not year:
            raise ValidationError("month and year are required")
        working_days = body.get("totalWorkingDays")

        if body.get("staffId"):
            salary = container.payroll_service.generate(body["staffId"], month, year, working_days)
            return jsonify(salary.to_dict()), 201

        generated = container.payroll_service.generate_for_all(month, year, working_days)
        return jsonify([s.to_dict() for s in generated]), 201

    @app.route("/api/payroll/<salary_id>/pay", methods=["POST"], endpoint="payroll_mark_paid")
    def payroll_mark_paid(salary_id: str):
        return jsonify(container.payroll_service.mark_paid(salary_id).to_dict())

    @app.route("/api/payroll/<salary_id>/slip", methods=["GET"], endpoint="payroll_slip")
    def payroll_slip(salary_id: str):
        return jsonify(container.payroll_service.salary_slip(salary_id) or {})
