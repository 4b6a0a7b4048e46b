from __future__ import annotations

from flask import Flask

from ..common.http import json_errors, ok, parse_body, parse_query
from ..container import Container
from ..fingerprints.schemas import FingerprintScanRequest
from .schemas import (
    AttendanceCreate,
    AttendanceListQuery,
    AttendanceUpdate,
    CheckInRequest,
    CheckOutRequest,
    ManualAttendanceQuery,
)


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _checked_in(result, message: str):
        return ok(result.record, message=message, status=201 if result.created else 200)

    def _checked_out(result, message: str):
        return ok(result.record, message=message, summary=result.summary())

    def _manual_listing(entry_type=None):
        query = parse_query(ManualAttendanceQuery)
        if entry_type is not None:
            query = query.model_copy(update={"entry_type": entry_type})
        page, summary = service.list_manual(query)
        return ok(list(page.items), page=page, summary=summary)

    # Check-in/out
    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @json_errors("Failed to process check-in")
    def check_in():
        return _checked_in(service.check_in(parse_body(CheckInRequest)), "Check-in successful")

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    @json_errors("Failed to process check-out")
    def check_out():
        return _checked_out(service.check_out(parse_body(CheckOutRequest)), "Check-out successful")

    # Manual (supervisor-entered) attendance
    @app.route("/api/attendance/manual-check-in", methods=["POST"], endpoint="attendance_manual_check_in")
    @json_errors("Failed to process manual check-in")
    def manual_check_in():
        result = service.check_in(parse_body(CheckInRequest), manual=True)
        return _checked_in(result, "Manual check-in successful")

    @app.route("/api/attendance/manual-check-in", methods=["GET"], endpoint="attendance_manual_check_in_list")
    @json_errors("Failed to fetch manual check-in records")
    def list_manual_check_ins():
        return _manual_listing()

    @app.route("/api/attendance/manual-check-out", methods=["POST"], endpoint="attendance_manual_check_out")
    @json_errors("Failed to process manual check-out")
    def manual_check_out():
        result = service.check_out(parse_body(CheckOutRequest), manual=True)
        return _checked_out(result, "Manual check-out successful")

    @app.route("/api/attendance/manual-check-out", methods=["GET"], endpoint="attendance_manual_check_out_list")
    @json_errors("Failed to fetch manual check-out records")
    def list_manual_check_outs():
        return _manual_listing("check-out")

    @app.route("/api/attendance/manual", methods=["GET"], endpoint="attendance_manual_list")
    @json_errors("Failed to fetch manual attendance records")
    def list_manual():
        return _manual_listing()

    @app.route("/api/attendance/manual/<int:record_id>", methods=["GET"], endpoint="attendance_manual_get")
    @json_errors("Failed to fetch manual attendance record")
    def get_manual(record_id: int):
        return ok(service.get_record(record_id, manual_only=True))

    @app.route("/api/attendance/manual/<int:record_id>", methods=["PUT"], endpoint="attendance_manual_update")
    @json_errors("Failed to update manual attendance record")
    def update_manual(record_id: int):
        record = service.update_record(record_id, parse_body(AttendanceUpdate), manual_only=True)
        return ok(record, message="Manual attendance record updated successfully")

    @app.route("/api/attendance/manual/<int:record_id>", methods=["DELETE"], endpoint="attendance_manual_delete")
    @json_errors("Failed to delete manual attendance record")
    def delete_manual(record_id: int):
        service.delete_record(record_id, manual_only=True)
        return ok(message="Manual attendance record deleted successfully")

    # Fingerprint-driven attendance
    @app.route("/api/attendance/fingerprint-check", methods=["POST"], endpoint="attendance_fingerprint_check")
    @json_errors("Failed to process fingerprint attendance check")
    def fingerprint_check():
        outcome = container.fingerprint_attendance_service.record(parse_body(FingerprintScanRequest))
        return ok(
            outcome.payload(),
            message=f"Fingerprint verification successful - {outcome.action.value}",
            summary=outcome.summary(),
        )

    # Record CRUD
    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @json_errors("Failed to fetch attendance records")
    def list_records():
        page = service.list_records(parse_query(AttendanceListQuery))
        return ok(list(page.items), page=page)

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_create")
    @json_errors("Failed to create attendance record")
    def create_record():
        record = service.create_record(parse_body(AttendanceCreate))
        return ok(record, message="Attendance record created successfully", status=201)

    @app.route("/api/attendance/<int:record_id>", methods=["GET"], endpoint="attendance_get")
    @json_errors("Failed to fetch attendance record")
    def get_record(record_id: int):
        return ok(service.get_record(record_id))

    @app.route("/api/attendance/<int:record_id>", methods=["PUT"], endpoint="attendance_update")
    @json_errors("Failed to update attendance record")
    def update_record(record_id: int):
        record = service.update_record(record_id, parse_body(AttendanceUpdate))
        return ok(record, message="Attendance record updated successfully")

    @app.route("/api/attendance/<int:record_id>", methods=["DELETE"], endpoint="attendance_delete")
    @json_errors("Failed to delete attendance record")
    def delete_record(record_id: int):
        service.delete_record(record_id)
        return ok(message="Attendance record deleted successfully")
