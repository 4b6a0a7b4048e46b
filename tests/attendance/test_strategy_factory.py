from datetime import datetime

from src.workforce_system.workforce_system.attendance.factory import AttendanceStrategyFactory
from src.workforce_system.workforce_system.attendance.hours import compute_worked_hours
from src.workforce_system.workforce_system.attendance.strategies.base import CheckoutContext
from src.workforce_system.workforce_system.attendance.strategies.early_departure_strategy import EarlyDepartureStrategy
from src.workforce_system.workforce_system.attendance.strategies.late_strategy import LateStrategy
from src.workforce_system.workforce_system.attendance.strategies.normal_strategy import NormalStrategy
from src.workforce_system.workforce_system.attendance.strategies.overtime_strategy import OvertimeStrategy
from src.workforce_system.workforce_system.core.enums import AttendanceStatus
from src.workforce_system.workforce_system.sites.model import ConstructionSite


def _site(start="08:00", end="17:00", standard=8.0):
    return ConstructionSite(
        id=1,
        site_code="KGL-001",
        site_name="Kigali Heights",
        province="Kigali",
        district="Gasabo",
        sector="Kimihurura",
        cell="Rugando",
        village="Urugwiro",
        working_hours_start=start,
        working_hours_end=end,
        standard_hours_per_day=standard,
    )


def _ctx(check_in, check_out, site=None, current=AttendanceStatus.PRESENT):
    site = site or _site()
    return CheckoutContext(
        check_in=check_in,
        check_out=check_out,
        site=site,
        current=current,
        hours=compute_worked_hours(check_in, check_out, site.standard_hours_per_day),
    )


def test_factory_checkout_on_time_full_day_is_normal():
    ctx = _ctx(datetime(2025, 1, 6, 8, 0), datetime(2025, 1, 6, 16, 0))

    assert isinstance(AttendanceStrategyFactory().for_checkout(ctx), NormalStrategy)


def test_factory_checkout_late_arrival():
    ctx = _ctx(datetime(2025, 1, 6, 8, 1), datetime(2025, 1, 6, 16, 0))

    strategy = AttendanceStrategyFactory().for_checkout(ctx)

    assert isinstance(strategy, LateStrategy)
    assert strategy.decide_checkout(ctx).status == AttendanceStatus.LATE


def test_factory_checkout_overtime_wins_over_late():
    ctx = _ctx(datetime(2025, 1, 6, 8, 30), datetime(2025, 1, 6, 18, 0))

    assert isinstance(AttendanceStrategyFactory().for_checkout(ctx), OvertimeStrategy)


def test_factory_checkout_early_departure_wins_over_late():
    ctx = _ctx(datetime(2025, 1, 6, 9, 0), datetime(2025, 1, 6, 12, 0))

    assert isinstance(AttendanceStrategyFactory().for_checkout(ctx), EarlyDepartureStrategy)


def test_factory_short_day_after_site_end_is_not_early_departure():
    # Evening shift: leaves after the site's end time.
    ctx = _ctx(datetime(2025, 1, 6, 16, 0), datetime(2025, 1, 6, 18, 0), site=_site(start="16:00"))

    assert isinstance(AttendanceStrategyFactory().for_checkout(ctx), NormalStrategy)


def test_late_rule_only_applies_to_present_records():
    ctx = _ctx(datetime(2025, 1, 6, 9, 0), datetime(2025, 1, 6, 17, 0), current=AttendanceStatus.HALF_DAY)

    strategy = AttendanceStrategyFactory().for_checkout(ctx)

    assert isinstance(strategy, NormalStrategy)
    assert strategy.decide_checkout(ctx).status == AttendanceStatus.HALF_DAY


def test_worked_hours_cap_regular_at_standard_day():
    hours = compute_worked_hours(datetime(2025, 1, 6, 7, 0), datetime(2025, 1, 6, 17, 45), 8.0)

    assert (hours.total, hours.regular, hours.overtime) == (10.75, 8.0, 2.75)
