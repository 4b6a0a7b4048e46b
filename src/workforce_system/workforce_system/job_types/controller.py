from __future__ import annotations

from flask import Flask

from ..common.http import json_errors, ok, parse_body, parse_query
from ..container import Container
from .schemas import JobTypeCreate, JobTypeListQuery, JobTypeUpdate


def register(app: Flask, container: Container) -> None:
    @app.route("/api/job-types", methods=["GET"], endpoint="job_types_list")
    @json_errors("Failed to fetch job types")
    def list_job_types():
        page = container.job_type_service.list_job_types(parse_query(JobTypeListQuery))
        return ok([jt.to_payload() for jt in page.items], page=page)

    @app.route("/api/job-types", methods=["POST"], endpoint="job_types_create")
    @json_errors("Failed to create job type")
    def create_job_type():
        job_type = container.job_type_service.create_job_type(parse_body(JobTypeCreate))
        return ok(job_type.to_payload(), message="Job type created successfully", status=201)

    @app.route("/api/job-types/<int:job_type_id>", methods=["GET"], endpoint="job_types_get")
    @json_errors("Failed to fetch job type")
    def get_job_type(job_type_id: int):
        return ok(container.job_type_service.get_job_type(job_type_id).to_payload())

    @app.route("/api/job-types/<int:job_type_id>", methods=["PUT"], endpoint="job_types_update")
    @json_errors("Failed to update job type")
    def update_job_type(job_type_id: int):
        job_type = container.job_type_service.update_job_type(job_type_id, parse_body(JobTypeUpdate))
        return ok(job_type.to_payload(), message="Job type updated successfully")

    @app.route("/api/job-types/<int:job_type_id>", methods=["DELETE"], endpoint="job_types_delete")
    @json_errors("Failed to delete job type")
    def delete_job_type(job_type_id: int):
        container.job_type_service.delete_job_type(job_type_id)
        return ok(message="Job type deleted successfully")
