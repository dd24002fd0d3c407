from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/fees", methods=["GET"], endpoint="fees_list")
    def fees_list():
        payments = container.fee_service.list(student_id=request.args.get("studentId") or None)
        return jsonify([p.to_dict() for p in payments])

    @app.route("/api/fees", methods=["POST"], endpoint="fees_collect")
    def fees_collect():
        body = json_body()
        payment = container.fee_service.collect(
            student_id=body.get("studentId"),
            fee_month=body.get("feeMonth"),
            fee_year=body.get("feeYear"),
            amount=body.get("amount"),
            payment_date=body.get("paymentDate"),
            receipt_number=body.get("receiptNumber"),
            remarks=body.get("remarks"),
        )
        return jsonify(payment.to_dict()), 201

    @app.route("/api/fees/<payment_id>/receipt", methods=["GET"], endpoint="fees_receipt")
    def fees_receipt(payment_id: str):
        return jsonify(container.fee_service.receipt(payment_id) or {})
