from __future__ import annotations

from flask import Flask

from ..common.http import json_errors, ok, parse_body, parse_query
from ..container import Container
from .schemas import WorkerCreate, WorkerListQuery, WorkerUpdate


def register(app: Flask, container: Container) -> None:
    @app.route("/api/workers", methods=["GET"], endpoint="workers_list")
    @json_errors("Failed to fetch workers")
    def list_workers():
        page = container.worker_service.list_workers(parse_query(WorkerListQuery))
        return ok(list(page.items), page=page)

    @app.route("/api/workers", methods=["POST"], endpoint="workers_create")
    @json_errors("Failed to create worker")
    def create_worker():
        worker = container.worker_service.create_worker(parse_body(WorkerCreate))
        return ok(worker, message="Worker created successfully", status=201)

    @app.route("/api/workers/<int:worker_id>", methods=["GET"], endpoint="workers_get")
    @json_errors("Failed to fetch worker")
    def get_worker(worker_id: int):
        return ok(container.worker_service.get_worker(worker_id))

    @app.route("/api/workers/<int:worker_id>", methods=["PUT"], endpoint="workers_update")
    @json_errors("Failed to update worker")
    def update_worker(worker_id: int):
        worker = container.worker_service.update_worker(worker_id, parse_body(WorkerUpdate))
        return ok(worker, message="Worker updated successfully")

    @app.route("/api/workers/<int:worker_id>", methods=["DELETE"], endpoint="workers_delete")
    @json_errors("Failed to delete worker")
    def delete_worker(worker_id: int):
        container.worker_service.delete_worker(worker_id)
        return ok(message="Worker deleted successfully")
