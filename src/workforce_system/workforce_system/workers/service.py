from __future__ import annotations

from typing import Any, Mapping

from ..common.pagination import Page
from ..common.validators import require, require_found
from ..core.exceptions import ConflictError
from ..job_types.repository import JobTypeRepository
from ..sites.repository import SiteRepository
from .model import Worker
from .repository import WorkerRepository
from .schemas import WorkerCreate, WorkerListQuery, WorkerUpdate


class WorkerService:
    def __init__(self, workers: WorkerRepository, sites: SiteRepository, job_types: JobTypeRepository):
        self._workers = workers
        self._sites = sites
        self._job_types = job_types

    def list_workers(self, query: WorkerListQuery) -> Page[Worker]:
        return self._workers.list(
            page=query.page_request(),
            status=query.status,
            site_id=query.site_id,
            job_type_id=query.job_type_id,
            search=query.search,
        )

    def get_worker(self, worker_id: int) -> Worker:
        return require_found(self._workers.get_by_id(worker_id), "Worker not found")

    def _check_unique_and_refs(self, values: Mapping[str, Any], *, current: Worker | None = None) -> None:
        employee_id = values.get("employee_id")
        if employee_id and (current is None or employee_id != current.employee_id):
            if self._workers.get_by_employee_id(employee_id):
                raise ConflictError("Employee ID already exists")

        national_id = values.get("national_id")
        if national_id and (current is None or national_id != current.national_id):
            if self._workers.get_by_national_id(national_id):
                raise ConflictError("National ID already exists")

        if values.get("assigned_site_id"):
            require_found(self._sites.get_by_id(values["assigned_site_id"]), "Construction site not found")
        if values.get("job_type_id"):
            require_found(self._job_types.get_by_id(values["job_type_id"]), "Job type not found")

    def create_worker(self, data: WorkerCreate) -> Worker:
        values = data.model_dump()
        self._check_unique_and_refs(values)
        new_id = self._workers.create(values)
        return self.get_worker(new_id)

    def update_worker(self, worker_id: int, data: WorkerUpdate) -> Worker:
        current = self.get_worker(worker_id)
        changes = data.changes()
        self._check_unique_and_refs(changes, current=current)
        if changes:
            self._workers.update(worker_id, changes)
        return self.get_worker(worker_id)

    def delete_worker(self, worker_id: int) -> None:
        self.get_worker(worker_id)
        require(
            self._workers.count_attendance_records(worker_id) == 0,
            "Cannot delete worker with attendance records. Consider deactivating instead.",
        )
        require(
            self._workers.count_payroll_records(worker_id) == 0,
            "Cannot delete worker with payroll records. Consider deactivating instead.",
        )
        self._workers.delete(worker_id)
