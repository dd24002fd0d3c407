from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.exceptions import NotFoundError, StoreError, ValidationError
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

# Request body keys are camelCase on the wire; services take snake_case keyword args.
_SNAKE = {
    "fullName": "full_name",
    "parentName": "parent_name",
    "joiningDate": "joining_date",
    "salaryType": "salary_type",
    "basicSalary": "basic_salary",
    "studentId": "student_id",
    "feeMonth": "fee_month",
    "feeYear": "fee_year",
    "paymentDate": "payment_date",
    "receiptNumber": "receipt_number",
    "examDate": "exam_date",
    "maxMarks": "max_marks",
    "totalWorkingDays": "total_working_days",
}


def json_body() -> dict:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def snake_fields(body: dict) -> dict:
    return {_SNAKE.get(key, key): value for key, value in body.items() if key != "id"}


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation_error(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(NotFoundError)
    def _not_found(e):
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(StoreError)
    def _store_error(e):
        logger.error("Record store unavailable: %s", e)
        return jsonify({"error": "The database is not available right now. Please try again."}), 503


def date_arg(value, field_name: str):
    try:
        return parse_iso_date(str(value))
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")
