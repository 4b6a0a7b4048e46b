from __future__ import annotations

from datetime import date
from typing import Annotated, Optional

from pydantic import Field

from ..common.schemas import ApiModel, ListQuery, LocalDateTime, PositiveId
from ..common.validators import IPV4_PATTERN, MAC_PATTERN
from ..core.constants import DEFAULT_MATCH_THRESHOLD
from ..core.enums import FingerPosition, Hand, MatchResult

ScanData = Annotated[str, Field(min_length=1, max_length=10000)]


class TemplateCreate(ApiModel):
    worker_id: PositiveId
    template_data: str = Field(min_length=1, max_length=10000)
    finger_position: FingerPosition
    hand: Hand
    quality_score: int = Field(ge=0, le=100)
    enrolled_by: Optional[str] = Field(None, max_length=100)
    device_used: Optional[str] = Field(None, max_length=100)


class TemplateUpdate(ApiModel):
    template_data: Optional[str] = Field(None, min_length=1, max_length=10000)
    quality_score: Optional[int] = Field(None, ge=0, le=100)
    is_active: Optional[bool] = None


class TemplateListQuery(ListQuery):
    worker_id: Optional[PositiveId] = None
    finger_position: Optional[FingerPosition] = None
    hand: Optional[Hand] = None
    is_active: Optional[bool] = None


class DeviceCreate(ApiModel):
    device_id: str = Field(min_length=1, max_length=50)
    device_name: str = Field(min_length=1, max_length=100)
    site_id: Optional[PositiveId] = None
    ip_address: Optional[str] = Field(None, pattern=IPV4_PATTERN)
    mac_address: Optional[str] = Field(None, pattern=MAC_PATTERN)
    manufacturer: Optional[str] = Field(None, max_length=100)
    model: Optional[str] = Field(None, max_length=100)
    serial_number: Optional[str] = Field(None, max_length=100)
    firmware_version: Optional[str] = Field(None, max_length=50)
    is_online: bool = False
    is_active: bool = True


class DeviceUpdate(ApiModel):
    device_id: Optional[str] = Field(None, min_length=1, max_length=50)
    device_name: Optional[str] = Field(None, min_length=1, max_length=100)
    site_id: Optional[PositiveId] = None
    ip_address: Optional[str] = Field(None, pattern=IPV4_PATTERN)
    mac_address: Optional[str] = Field(None, pattern=MAC_PATTERN)
    manufacturer: Optional[str] = Field(None, max_length=100)
    model: Optional[str] = Field(None, max_length=100)
    serial_number: Optional[str] = Field(None, max_length=100)
    firmware_version: Optional[str] = Field(None, max_length=50)
    last_sync: Optional[LocalDateTime] = None
    is_online: Optional[bool] = None
    is_active: Optional[bool] = None


class DeviceListQuery(ListQuery):
    site_id: Optional[PositiveId] = None
    is_online: Optional[bool] = None
    is_active: Optional[bool] = None


class LogCreate(ApiModel):
    attendance_record_id: Optional[PositiveId] = None
    worker_id: Optional[PositiveId] = None
    device_id: Optional[PositiveId] = None
    match_score: Optional[int] = Field(None, ge=0, le=100)
    matched_template_id: Optional[PositiveId] = None
    scan_timestamp: Optional[LocalDateTime] = None
    scan_quality: Optional[int] = Field(None, ge=0, le=100)
    match_result: MatchResult
    error_message: Optional[str] = Field(None, max_length=500)


class LogListQuery(ListQuery):
    worker_id: Optional[PositiveId] = None
    device_id: Optional[PositiveId] = None
    match_result: Optional[MatchResult] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None


class VerifyRequest(ApiModel):
    worker_id: PositiveId
    scan_data: ScanData
    device_id: Optional[PositiveId] = None
    min_match_score: int = Field(DEFAULT_MATCH_THRESHOLD, ge=0, le=100)


class FingerprintScanRequest(ApiModel):
    """A device scan tied to a site; used by /fingerprint/scan and /attendance/fingerprint-check."""

    worker_id: PositiveId
    site_id: PositiveId
    device_id: PositiveId
    scan_data: ScanData
    finger_position: Optional[FingerPosition] = None
    hand: Optional[Hand] = None
    scan_time: Optional[LocalDateTime] = None
