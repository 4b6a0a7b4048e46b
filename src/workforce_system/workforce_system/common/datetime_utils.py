from __future__ import annotations

from datetime import date, datetime, time, timedelta


def now_local() -> datetime:
    """Wall-clock time on the server; services take an explicit ``now`` and fall back to this."""
    return datetime.now()


def to_local_naive(value: datetime) -> datetime:
    """Drop tzinfo after converting to local time; MySQL DATETIME columns are naive."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_hhmm(value: str) -> time:
    hours, minutes = value.strip().split(":")[:2]
    return time(hour=int(hours), minute=int(minutes))


def at_hhmm(day: date, value: str) -> datetime:
    """Site working-hour string ('08:00') placed on a given day."""
    return datetime.combine(day, parse_hhmm(value))


def start_of_day(value: date | datetime) -> datetime:
    day = value.date() if isinstance(value, datetime) else value
    return datetime.combine(day, time.min)


def end_of_day(value: date | datetime) -> datetime:
    """Last whole second of the day, used for inclusive period ends."""
    return start_of_day(value) + timedelta(days=1, seconds=-1)


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600.0


def epoch_millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)
