from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body, snake_fields
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/staff", methods=["GET"], endpoint="staff_list")
    def staff_list():
        active_only = request.args.get("active") in ("1", "true", "yes")
        return jsonify([s.to_dict() for s in container.staff_service.list(active_only=active_only)])

    @app.route("/api/staff", methods=["POST"], endpoint="staff_add")
    def staff_add():
        member = container.staff_service.add(**snake_fields(json_body()))
        return jsonify(member.to_dict()), 201

    @app.route("/api/staff/<staff_id>", methods=["GET"], endpoint="staff_get")
    def staff_get(staff_id: str):
        member = container.staff_service.get(staff_id)
        if not member:
            return jsonify({})
        payload = member.to_dict()
        payload["salaryHistory"] = [s.to_dict() for s in container.payroll_service.history(staff_id)]
        return jsonify(payload)

    @app.route("/api/staff/<staff_id>", methods=["PUT", "PATCH"], endpoint="staff_update")
    def staff_update(staff_id: str):
        member = container.staff_service.update(staff_id, **snake_fields(json_body()))
        return jsonify(member.to_dict())

    @app.route("/api/staff/<staff_id>", methods=["DELETE"], endpoint="staff_delete")
    def staff_delete(staff_id: str):
        container.staff_service.delete(staff_id)
        return jsonify({"deleted": staff_id})

    @app.route("/api/staff/<staff_id>/attendance-summary", methods=["GET"], endpoint="staff_attendance_summary")
    def staff_attendance_summary(staff_id: str):
        last_months = request.args.get("months", type=int)
        summary = container.attendance_service.staff_summary(staff_id, last_months=last_months)
        payload = summary.to_dict()
        payload["breakdown"] = summary.breakdown()
        return jsonify(payload)
