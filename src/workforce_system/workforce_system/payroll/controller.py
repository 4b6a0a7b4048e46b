from __future__ import annotations

from flask import Flask

from ..common.http import json_errors, ok, parse_body, parse_query
from ..common.serialization import to_json
from ..container import Container
from .schemas import PayrollCalculateRequest, PayrollCreate, PayrollListQuery, PayrollProcessRequest, PayrollUpdate


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service

    @app.route("/api/payroll/calculate", methods=["POST"], endpoint="payroll_calculate")
    @json_errors("Failed to calculate payroll")
    def calculate():
        report = service.calculate(parse_body(PayrollCalculateRequest))
        return ok(report.payload(), message=report.message)

    @app.route("/api/payroll/process", methods=["POST"], endpoint="payroll_process")
    @json_errors("Failed to process payroll payments")
    def process():
        report = service.process(parse_body(PayrollProcessRequest))
        return ok(report.payload(), message=report.message)

    @app.route("/api/payroll", methods=["GET"], endpoint="payroll_list")
    @json_errors("Failed to fetch payroll records")
    def list_records():
        page, summary = service.list_records(parse_query(PayrollListQuery))
        return ok(list(page.items), page=page, summary=summary)

    @app.route("/api/payroll", methods=["POST"], endpoint="payroll_create")
    @json_errors("Failed to create payroll record")
    def create_record():
        record = service.create_record(parse_body(PayrollCreate))
        return ok(record, message="Payroll record created successfully", status=201)

    @app.route("/api/payroll/<int:record_id>", methods=["GET"], endpoint="payroll_get")
    @json_errors("Failed to fetch payroll record")
    def get_record(record_id: int):
        detail = service.get_detail(record_id)
        return ok({**to_json(detail.record), "attendanceRecords": list(detail.attendance_records)})

    @app.route("/api/payroll/<int:record_id>", methods=["PUT"], endpoint="payroll_update")
    @json_errors("Failed to update payroll record")
    def update_record(record_id: int):
        record = service.update_record(record_id, parse_body(PayrollUpdate))
        return ok(record, message="Payroll record updated successfully")

    @app.route("/api/payroll/<int:record_id>", methods=["DELETE"], endpoint="payroll_delete")
    @json_errors("Failed to delete payroll record")
    def delete_record(record_id: int):
        service.delete_record(record_id)
        return ok(message="Payroll record deleted successfully")
