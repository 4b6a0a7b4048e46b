from __future__ import annotations

from flask import Flask

from ..common.http import json_errors, ok, parse_body, parse_query
from ..container import Container
from .schemas import (
    DeviceCreate,
    DeviceListQuery,
    DeviceUpdate,
    FingerprintScanRequest,
    LogCreate,
    LogListQuery,
    TemplateCreate,
    TemplateListQuery,
    TemplateUpdate,
    VerifyRequest,
)


def register(app: Flask, container: Container) -> None:
    service = container.fingerprint_service

    # Templates
    @app.route("/api/fingerprint", methods=["GET"], endpoint="fingerprint_templates_list")
    @json_errors("Failed to fetch fingerprint templates")
    def list_templates():
        page = service.list_templates(parse_query(TemplateListQuery))
        return ok(list(page.items), page=page)

    @app.route("/api/fingerprint", methods=["POST"], endpoint="fingerprint_templates_create")
    @json_errors("Failed to create fingerprint template")
    def create_template():
        template = service.enrol_template(parse_body(TemplateCreate))
        return ok(template, message="Fingerprint template created successfully", status=201)

    @app.route("/api/fingerprint/<int:template_id>", methods=["GET"], endpoint="fingerprint_templates_get")
    @json_errors("Failed to fetch fingerprint template")
    def get_template(template_id: int):
        return ok(service.get_template(template_id))

    @app.route("/api/fingerprint/<int:template_id>", methods=["PUT"], endpoint="fingerprint_templates_update")
    @json_errors("Failed to update fingerprint template")
    def update_template(template_id: int):
        template = service.update_template(template_id, parse_body(TemplateUpdate))
        return ok(template, message="Fingerprint template updated successfully")

    @app.route("/api/fingerprint/<int:template_id>", methods=["DELETE"], endpoint="fingerprint_templates_delete")
    @json_errors("Failed to delete fingerprint template")
    def delete_template(template_id: int):
        service.delete_template(template_id)
        return ok(message="Fingerprint template deleted successfully")

    # Devices
    @app.route("/api/fingerprint/devices", methods=["GET"], endpoint="fingerprint_devices_list")
    @json_errors("Failed to fetch fingerprint devices")
    def list_devices():
        page = service.list_devices(parse_query(DeviceListQuery))
        return ok(list(page.items), page=page)

    @app.route("/api/fingerprint/devices", methods=["POST"], endpoint="fingerprint_devices_create")
    @json_errors("Failed to create fingerprint device")
    def create_device():
        device = service.register_device(parse_body(DeviceCreate))
        return ok(device, message="Fingerprint device created successfully", status=201)

    @app.route("/api/fingerprint/devices/<int:device_pk>", methods=["GET"], endpoint="fingerprint_devices_get")
    @json_errors("Failed to fetch fingerprint device")
    def get_device(device_pk: int):
        return ok(service.get_device(device_pk))

    @app.route("/api/fingerprint/devices/<int:device_pk>", methods=["PUT"], endpoint="fingerprint_devices_update")
    @json_errors("Failed to update fingerprint device")
    def update_device(device_pk: int):
        device = service.update_device(device_pk, parse_body(DeviceUpdate))
        return ok(device, message="Fingerprint device updated successfully")

    @app.route("/api/fingerprint/devices/<int:device_pk>", methods=["DELETE"], endpoint="fingerprint_devices_delete")
    @json_errors("Failed to delete fingerprint device")
    def delete_device(device_pk: int):
        service.delete_device(device_pk)
        return ok(message="Fingerprint device deleted successfully")

    # Logs
    @app.route("/api/fingerprint/logs", methods=["GET"], endpoint="fingerprint_logs_list")
    @json_errors("Failed to fetch fingerprint logs")
    def list_logs():
        page = service.list_logs(parse_query(LogListQuery))
        return ok(list(page.items), page=page)

    @app.route("/api/fingerprint/logs", methods=["POST"], endpoint="fingerprint_logs_create")
    @json_errors("Failed to create fingerprint log")
    def create_log():
        log = service.append_log(parse_body(LogCreate))
        return ok(log, message="Fingerprint log created successfully", status=201)

    # Matching
    @app.route("/api/fingerprint/verify", methods=["POST"], endpoint="fingerprint_verify")
    @json_errors("Failed to verify fingerprint")
    def verify():
        match = service.verify(parse_body(VerifyRequest))
        return ok(match.payload(), message="Fingerprint verification successful")

    @app.route("/api/fingerprint/scan", methods=["POST"], endpoint="fingerprint_scan")
    @json_errors("Failed to process fingerprint scan")
    def scan():
        outcome = container.fingerprint_attendance_service.preview(parse_body(FingerprintScanRequest))
        return ok(outcome.payload(), message=f"Fingerprint verification successful - {outcome.action.value}")
