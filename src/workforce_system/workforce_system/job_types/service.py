from __future__ import annotations

from ..common.pagination import Page
from ..common.validators import require, require_found
from ..core.exceptions import ConflictError
from .model import JobType
from .repository import JobTypeRepository
from .schemas import JobTypeCreate, JobTypeListQuery, JobTypeUpdate


class JobTypeService:
    def __init__(self, job_types: JobTypeRepository):
        self._job_types = job_types

    def list_job_types(self, query: JobTypeListQuery) -> Page[JobType]:
        return self._job_types.list(
            page=query.page_request(),
            category=query.category,
            is_active=query.is_active,
            search=query.search,
        )

    def get_job_type(self, job_type_id: int) -> JobType:
        return require_found(self._job_types.get_by_id(job_type_id), "Job type not found")

    def create_job_type(self, data: JobTypeCreate) -> JobType:
        if self._job_types.get_by_code(data.job_code):
            raise ConflictError("Job code already exists")
        new_id = self._job_types.create(data.model_dump())
        return self.get_job_type(new_id)

    def update_job_type(self, job_type_id: int, data: JobTypeUpdate) -> JobType:
        current = self.get_job_type(job_type_id)
        changes = data.changes()
        code = changes.get("job_code")
        if code and code != current.job_code and self._job_types.get_by_code(code):
            raise ConflictError("Job code already exists")
        if changes:
            self._job_types.update(job_type_id, changes)
        return self.get_job_type(job_type_id)

    def delete_job_type(self, job_type_id: int) -> None:
        current = self.get_job_type(job_type_id)
        require(current.worker_count == 0, "Cannot delete job type with associated workers")
        self._job_types.delete(job_type_id)
