from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ...core.enums import AttendanceStatus
from ...sites.model import ConstructionSite
from ..model import WorkedHours


@dataclass(frozen=True)
class CheckoutContext:
    check_in: datetime
    check_out: datetime
    site: ConstructionSite
    current: AttendanceStatus
    hours: WorkedHours


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status at check-out."""

    @abstractmethod
    def decide_checkout(self, ctx: CheckoutContext) -> StatusDecision:
        raise NotImplementedError
