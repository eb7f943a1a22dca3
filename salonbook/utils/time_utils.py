"""Helpers for HH:MM time-of-day values"""
import re
from datetime import date, datetime, time, timedelta

HHMM_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def parse_hhmm(value: str) -> time:
    """Parse a 24-hour HH:MM string; raises ValueError on anything else"""
    match = HHMM_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return time(int(match.group(1)), int(match.group(2)))


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def add_minutes(value: time, minutes: int) -> time:
    """Add minutes to a time of day. Results past midnight raise ValueError."""
    base = datetime.combine(date.min, value)
    result = base + timedelta(minutes=minutes)
    if result.date() != base.date():
        raise ValueError(f"{format_hhmm(value)} + {minutes} minutes runs past midnight")
    return result.time()


def weekday_name(day: date) -> str:
    return WEEKDAYS[day.weekday()]
