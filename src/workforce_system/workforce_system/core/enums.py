from __future__ import annotations

from enum import Enum


class WorkerStatus(str, Enum):
    """Employment status of a worker."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    TERMINATED = "TERMINATED"
    ON_LEAVE = "ON_LEAVE"


class SiteStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    COMPLETED = "COMPLETED"
    ON_HOLD = "ON_HOLD"


class JobTypeCategory(str, Enum):
    SKILLED = "SKILLED"
    UNSKILLED = "UNSKILLED"
    SUPERVISORY = "SUPERVISORY"


class AttendanceStatus(str, Enum):
    """Attendance status stored on a daily record."""

    PRESENT = "PRESENT"
    LATE = "LATE"
    ABSENT = "ABSENT"
    HALF_DAY = "HALF_DAY"
    OVERTIME = "OVERTIME"
    EARLY_DEPARTURE = "EARLY_DEPARTURE"


class CheckOutMethod(str, Enum):
    """How a record was verified. MANUAL also marks manual check-ins."""

    FINGERPRINT = "FINGERPRINT"
    MANUAL = "MANUAL"
    EMERGENCY_OVERRIDE = "EMERGENCY_OVERRIDE"


class FingerPosition(str, Enum):
    THUMB = "THUMB"
    INDEX = "INDEX"
    MIDDLE = "MIDDLE"
    RING = "RING"
    PINKY = "PINKY"


class Hand(str, Enum):
    LEFT = "LEFT"
    RIGHT = "RIGHT"


class MatchResult(str, Enum):
    """Outcome of a fingerprint scan attempt."""

    SUCCESS = "SUCCESS"
    NO_MATCH = "NO_MATCH"
    POOR_QUALITY = "POOR_QUALITY"
    DEVICE_ERROR = "DEVICE_ERROR"
    MULTIPLE_MATCHES = "MULTIPLE_MATCHES"


class PaymentStatus(str, Enum):
    """Payroll record lifecycle: CALCULATED -> APPROVED -> PAID."""

    PENDING = "PENDING"
    CALCULATED = "CALCULATED"
    APPROVED = "APPROVED"
    PAID = "PAID"
    CANCELLED = "CANCELLED"


class PaymentMethod(str, Enum):
    BANK_TRANSFER = "BANK_TRANSFER"
    CASH = "CASH"
    MOBILE_MONEY = "MOBILE_MONEY"
    AIRTEL_MONEY = "AIRTEL_MONEY"
    CHECK = "CHECK"


class MobileMoneyProvider(str, Enum):
    MTN_MOMO = "MTN_MOMO"
    AIRTEL_MONEY = "AIRTEL_MONEY"


class PayPeriodType(str, Enum):
    WEEKLY = "WEEKLY"
    BI_WEEKLY = "BI_WEEKLY"
    MONTHLY = "MONTHLY"


class AttendanceAction(str, Enum):
    """What a fingerprint scan means for today's attendance."""

    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"
    ALREADY_COMPLETED = "already-completed"
