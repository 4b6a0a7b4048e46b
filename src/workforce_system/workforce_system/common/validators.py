from __future__ import annotations

from typing import Optional, TypeVar

from ..core.exceptions import NotFoundError, ValidationError

T = TypeVar("T")

# Registry codes (site code, job code, employee id).
CODE_PATTERN = r"^[A-Z0-9-]+$"
HHMM_PATTERN = r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$"
IPV4_PATTERN = (
    r"^(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}"
    r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)$"
)
MAC_PATTERN = r"^([0-9A-Fa-f]{2}[:-]){5}([0-9A-Fa-f]{2})$"


def require_found(value: Optional[T], message: str) -> T:
    if value is None:
        raise NotFoundError(message)
    return value


def require(condition: bool, message: str) -> None:
    if not condition:
        raise ValidationError(message)
