from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from ..common.refs import SiteRef, WorkerRef
from ..core.enums import FingerPosition, Hand, MatchResult


@dataclass(frozen=True)
class FingerprintLog:
    """Append-only record of one scan attempt."""

    id: int
    match_result: MatchResult
    scan_timestamp: datetime
    worker_id: Optional[int] = None
    device_id: Optional[int] = None
    attendance_record_id: Optional[int] = None
    match_score: Optional[int] = None
    matched_template_id: Optional[int] = None
    scan_quality: Optional[int] = None
    error_message: Optional[str] = None
    worker: Optional[WorkerRef] = None
    device_name: Optional[str] = None


@dataclass(frozen=True)
class FingerprintTemplate:
    """Stored biometric reference for one finger of one worker."""

    id: int
    worker_id: int
    template_data: str
    finger_position: FingerPosition
    hand: Hand
    quality_score: int
    enrolled_by: Optional[str] = None
    device_used: Optional[str] = None
    enrollment_date: Optional[datetime] = None
    is_active: bool = True
    updated_at: Optional[datetime] = None
    worker: Optional[WorkerRef] = None
    recent_logs: Tuple[FingerprintLog, ...] = ()


@dataclass(frozen=True)
class FingerprintDevice:
    id: int
    device_id: str
    device_name: str
    site_id: Optional[int] = None
    ip_address: Optional[str] = None
    mac_address: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    serial_number: Optional[str] = None
    firmware_version: Optional[str] = None
    last_sync: Optional[datetime] = None
    is_online: bool = False
    is_active: bool = True
    log_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    site: Optional[SiteRef] = None
