from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..common.pagination import Page, PageRequest
from ..core.enums import FingerPosition, Hand, MatchResult
from .model import FingerprintDevice, FingerprintLog, FingerprintTemplate


class FingerprintTemplateRepository(Protocol):
    def get_by_id(self, template_id: int) -> Optional[FingerprintTemplate]:
        raise NotImplementedError

    def list(
        self,
        *,
        page: PageRequest,
        worker_id: Optional[int] = None,
        finger_position: Optional[FingerPosition] = None,
        hand: Optional[Hand] = None,
        is_active: Optional[bool] = None,
    ) -> Page[FingerprintTemplate]:
        raise NotImplementedError

    def list_active_for_worker(
        self,
        worker_id: int,
        *,
        finger_position: Optional[FingerPosition] = None,
        hand: Optional[Hand] = None,
    ) -> Sequence[FingerprintTemplate]:
        """Active templates, best enrolment quality first."""

        raise NotImplementedError

    def find_active(self, worker_id: int, finger_position: FingerPosition, hand: Hand) -> Optional[FingerprintTemplate]:
        raise NotImplementedError

    def create(self, values: Mapping[str, Any]) -> int:
        raise NotImplementedError

    def update(self, template_id: int, changes: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def delete(self, template_id: int) -> bool:
        raise NotImplementedError


class FingerprintDeviceRepository(Protocol):
    def get_by_id(self, device_pk: int) -> Optional[FingerprintDevice]:
        raise NotImplementedError

    def get_by_device_id(self, device_id: str) -> Optional[FingerprintDevice]:
        raise NotImplementedError

    def get_by_serial(self, serial_number: str) -> Optional[FingerprintDevice]:
        raise NotImplementedError

    def list(
        self,
        *,
        page: PageRequest,
        site_id: Optional[int] = None,
        is_online: Optional[bool] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> Page[FingerprintDevice]:
        raise NotImplementedError

    def create(self, values: Mapping[str, Any]) -> int:
        raise NotImplementedError

    def update(self, device_pk: int, changes: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def delete(self, device_pk: int) -> bool:
        raise NotImplementedError


class FingerprintLogRepository(Protocol):
    def get_by_id(self, log_id: int) -> Optional[FingerprintLog]:
        raise NotImplementedError

    def list(
        self,
        *,
        page: PageRequest,
        worker_id: Optional[int] = None,
        device_id: Optional[int] = None,
        match_result: Optional[MatchResult] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Page[FingerprintLog]:
        raise NotImplementedError

    def recent_for_template(self, template_id: int, limit: int) -> Sequence[FingerprintLog]:
        raise NotImplementedError

    def count_for_template(self, template_id: int) -> int:
        raise NotImplementedError

    def count_for_device(self, device_pk: int) -> int:
        raise NotImplementedError

    def create(self, values: Mapping[str, Any]) -> int:
        raise NotImplementedError

    def link_attendance(self, log_id: int, attendance_record_id: int) -> bool:
        raise NotImplementedError
