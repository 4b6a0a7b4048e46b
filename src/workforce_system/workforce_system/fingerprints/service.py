from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Dict, Optional

from ..common.datetime_utils import now_local
from ..common.pagination import Page
from ..common.validators import require, require_found
from ..core.constants import DEFAULT_MATCH_THRESHOLD, RECENT_TEMPLATE_LOGS
from ..core.enums import FingerPosition, Hand, MatchResult
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..sites.model import ConstructionSite
from ..sites.repository import SiteRepository
from ..workers.model import Worker
from ..workers.repository import WorkerRepository
from .matcher import FingerprintMatcher, MatchAttempt, SimulatedMatcher
from .model import FingerprintDevice, FingerprintLog, FingerprintTemplate
from .repository import FingerprintDeviceRepository, FingerprintLogRepository, FingerprintTemplateRepository
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

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identification:
    """A logged, successful match of a worker's scan."""

    worker: Worker
    attempt: MatchAttempt
    log_id: int
    site: Optional[ConstructionSite] = None
    device: Optional[FingerprintDevice] = None

    def payload(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "worker": self.worker,
            "matchScore": self.attempt.match_score,
            "scanQuality": self.attempt.scan_quality,
            "matchedTemplate": self.attempt.template,
            "logId": self.log_id,
        }
        if self.site is not None:
            data["site"] = self.site
        if self.device is not None:
            data["device"] = self.device
        return data


class FingerprintService:
    def __init__(
        self,
        templates: FingerprintTemplateRepository,
        devices: FingerprintDeviceRepository,
        logs: FingerprintLogRepository,
        workers: WorkerRepository,
        sites: SiteRepository,
        *,
        matcher: FingerprintMatcher | None = None,
        match_threshold: int = DEFAULT_MATCH_THRESHOLD,
    ):
        self._templates = templates
        self._devices = devices
        self._logs = logs
        self._workers = workers
        self._sites = sites
        self._matcher = matcher or SimulatedMatcher()
        self._threshold = match_threshold

    # ---- templates ----

    def _with_recent_logs(self, template: FingerprintTemplate) -> FingerprintTemplate:
        recent = tuple(self._logs.recent_for_template(template.id, RECENT_TEMPLATE_LOGS))
        return replace(template, recent_logs=recent)

    def list_templates(self, query: TemplateListQuery) -> Page[FingerprintTemplate]:
        page = self._templates.list(
            page=query.page_request(),
            worker_id=query.worker_id,
            finger_position=query.finger_position,
            hand=query.hand,
            is_active=query.is_active,
        )
        return replace(page, items=[self._with_recent_logs(t) for t in page.items])

    def get_template(self, template_id: int) -> FingerprintTemplate:
        template = require_found(self._templates.get_by_id(template_id), "Fingerprint template not found")
        return self._with_recent_logs(template)

    def enrol_template(self, data: TemplateCreate, *, now: datetime | None = None) -> FingerprintTemplate:
        worker = require_found(self._workers.get_by_id(data.worker_id), "Worker not found")
        require(worker.is_active, "Worker is not active")
        if self._templates.find_active(worker.id, data.finger_position, data.hand):
            raise ConflictError(
                f"Fingerprint template already exists for {data.hand.value} {data.finger_position.value}"
            )
        new_id = self._templates.create({**data.model_dump(), "enrollment_date": now or now_local()})
        logger.info("Enrolled %s %s template for worker=%s", data.hand.value, data.finger_position.value, worker.id)
        return self.get_template(new_id)

    def update_template(self, template_id: int, data: TemplateUpdate) -> FingerprintTemplate:
        current = self.get_template(template_id)
        changes = data.changes()
        if changes.get("is_active") and not current.is_active:
            active = self._templates.find_active(current.worker_id, current.finger_position, current.hand)
            if active and active.id != current.id:
                raise ConflictError(
                    f"Fingerprint template already exists for {current.hand.value} {current.finger_position.value}"
                )
        if changes:
            self._templates.update(template_id, changes)
        return self.get_template(template_id)

    def delete_template(self, template_id: int) -> None:
        self.get_template(template_id)
        require(
            self._logs.count_for_template(template_id) == 0,
            "Cannot delete template with associated logs. Consider deactivating instead.",
        )
        self._templates.delete(template_id)

    # ---- devices ----

    def list_devices(self, query: DeviceListQuery) -> Page[FingerprintDevice]:
        return self._devices.list(
            page=query.page_request(),
            site_id=query.site_id,
            is_online=query.is_online,
            is_active=query.is_active,
            search=query.search,
        )

    def get_device(self, device_pk: int) -> FingerprintDevice:
        return require_found(self._devices.get_by_id(device_pk), "Fingerprint device not found")

    def _check_device_keys(self, changes: Dict[str, Any], current: Optional[FingerprintDevice] = None) -> None:
        device_id = changes.get("device_id")
        if device_id and (current is None or device_id != current.device_id):
            if self._devices.get_by_device_id(device_id):
                raise ConflictError("Device ID already exists")
        serial = changes.get("serial_number")
        if serial and (current is None or serial != current.serial_number):
            if self._devices.get_by_serial(serial):
                raise ConflictError("Serial number already exists")
        if changes.get("site_id") is not None:
            require_found(self._sites.get_by_id(changes["site_id"]), "Site not found")

    def register_device(self, data: DeviceCreate) -> FingerprintDevice:
        values = data.model_dump()
        self._check_device_keys(values)
        new_id = self._devices.create(values)
        return self.get_device(new_id)

    def update_device(self, device_pk: int, data: DeviceUpdate) -> FingerprintDevice:
        current = self.get_device(device_pk)
        changes = data.changes()
        self._check_device_keys(changes, current)
        if changes:
            self._devices.update(device_pk, changes)
        return self.get_device(device_pk)

    def delete_device(self, device_pk: int) -> None:
        self.get_device(device_pk)
        require(
            self._logs.count_for_device(device_pk) == 0,
            "Cannot delete device with associated logs. Consider deactivating instead.",
        )
        self._devices.delete(device_pk)

    # ---- logs ----

    def list_logs(self, query: LogListQuery) -> Page[FingerprintLog]:
        return self._logs.list(
            page=query.page_request(),
            worker_id=query.worker_id,
            device_id=query.device_id,
            match_result=query.match_result,
            date_from=query.date_from,
            date_to=query.date_to,
        )

    def append_log(self, data: LogCreate, *, now: datetime | None = None) -> FingerprintLog:
        values = data.model_dump()
        values["scan_timestamp"] = values.get("scan_timestamp") or now or now_local()
        new_id = self._logs.create(values)
        return self._logs.get_by_id(new_id)

    def link_attendance(self, log_id: int, attendance_record_id: int) -> None:
        self._logs.link_attendance(log_id, attendance_record_id)

    # ---- identification ----

    def _identify(
        self,
        worker: Worker,
        scan_data: str,
        *,
        threshold: int,
        device_pk: Optional[int],
        finger_position: Optional[FingerPosition] = None,
        hand: Optional[Hand] = None,
        now: datetime | None = None,
    ) -> tuple[MatchAttempt, int]:
        when = now or now_local()
        templates = self._templates.list_active_for_worker(worker.id, finger_position=finger_position, hand=hand)
        if not templates:
            self._logs.create(
                {
                    "worker_id": worker.id,
                    "device_id": device_pk,
                    "scan_timestamp": when,
                    "match_result": MatchResult.NO_MATCH,
                    "error_message": "No fingerprint templates found for worker",
                }
            )
            raise NotFoundError(
                "No fingerprint templates found for this worker",
                data={"matchResult": MatchResult.NO_MATCH},
            )

        logged = [
            (
                attempt,
                self._logs.create(
                    {
                        "worker_id": worker.id,
                        "device_id": device_pk,
                        "match_score": attempt.match_score,
                        "matched_template_id": attempt.template.id,
                        "scan_timestamp": when,
                        "scan_quality": attempt.scan_quality,
                        "match_result": attempt.result,
                        "error_message": attempt.error_message,
                    }
                ),
            )
            for attempt in self._matcher.score_all(templates, scan_data, threshold=threshold)
        ]
        # Best score wins; max() keeps the first on ties.
        attempt, log_id = max(logged, key=lambda pair: pair[0].match_score)
        logger.info(
            "Fingerprint scan worker=%s template=%s score=%s result=%s",
            worker.id,
            attempt.template.id,
            attempt.match_score,
            attempt.result.value,
        )
        if not attempt.succeeded:
            raise ValidationError(
                attempt.error_message or "Fingerprint verification failed",
                data={
                    "matchScore": attempt.match_score,
                    "scanQuality": attempt.scan_quality,
                    "matchResult": attempt.result,
                },
            )
        return attempt, log_id

    def verify(self, data: VerifyRequest, *, now: datetime | None = None) -> Identification:
        worker = require_found(self._workers.get_by_id(data.worker_id), "Worker not found")
        require(worker.is_active, "Worker is not active")
        attempt, log_id = self._identify(
            worker,
            data.scan_data,
            threshold=data.min_match_score,
            device_pk=data.device_id,
            now=now,
        )
        return Identification(worker=worker, attempt=attempt, log_id=log_id)

    def identify_at_site(self, data: FingerprintScanRequest, *, now: datetime | None = None) -> Identification:
        """Match a scan taken on a site device; the device must be active and online."""
        worker = require_found(self._workers.get_by_id(data.worker_id), "Worker not found")
        site = require_found(self._sites.get_by_id(data.site_id), "Site not found")
        device = require_found(self._devices.get_by_id(data.device_id), "Fingerprint device not found")
        require(worker.is_active, "Worker is not active")
        require(device.is_active, "Fingerprint device is not active")
        require(device.is_online, "Fingerprint device is offline")
        require(worker.assigned_site_id == site.id, "Worker is not assigned to this site")

        attempt, log_id = self._identify(
            worker,
            data.scan_data,
            threshold=self._threshold,
            device_pk=device.id,
            finger_position=data.finger_position,
            hand=data.hand,
            now=data.scan_time or now,
        )
        return Identification(worker=worker, attempt=attempt, log_id=log_id, site=site, device=device)
