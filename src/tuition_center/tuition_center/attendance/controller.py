from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.http import date_arg, json_body
from ..common.validators import require_int
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_day")
    def attendance_day():
        raw = request.args.get("date")
        work_date = date_arg(raw, "date") if raw else date.today()
        return jsonify({"date": work_date.isoformat(), "statuses": container.attendance_service.get_day(work_date)})

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_mark")
    def attendance_mark():
        body = json_body()
        statuses = body.get("statuses")
        if not isinstance(statuses, dict):
            raise ValidationError("statuses must be an object of staffId -> status")
        work_date = date_arg(body.get("date"), "date")
        saved = container.attendance_service.mark_day(work_date, statuses)
        return jsonify({"date": work_date.isoformat(), "saved": saved})

    @app.route("/api/attendance/monthly", methods=["GET"], endpoint="attendance_monthly")
    def attendance_monthly():
        today = date.today()
        month = require_int(request.args.get("month", today.month), "month")
        year = require_int(request.args.get("year", today.year), "year")
        staff_id = request.args.get("staffId")

        if staff_id:
            records = container.attendance_service.monthly_records(staff_id, month, year)
            summary = container.attendance_service.monthly_summary(staff_id, month, year)
            return jsonify({"records": [r.to_dict() for r in records], "summary": summary.to_dict()})

        sheet = container.attendance_service.monthly_sheet(month, year)
        return jsonify({sid: {str(day): status for day, status in days.items()} for sid, days in sheet.items()})
