from __future__ import annotations

from datetime import datetime

from ..common.datetime_utils import hours_between
from .model import WorkedHours


def compute_worked_hours(check_in: datetime, check_out: datetime, standard_hours: float) -> WorkedHours:
    """Split a shift into regular hours (capped at the site's standard day) and overtime."""

    total = max(hours_between(check_in, check_out), 0.0)
    regular = min(total, standard_hours)
    overtime = max(0.0, total - standard_hours)
    return WorkedHours(total=round(total, 2), regular=round(regular, 2), overtime=round(overtime, 2))
