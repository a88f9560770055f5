# File: /docview/engine/dates.py | Version: 1.1 | Title: Evaluation clock, date parsing & relative windows
"""
Date handling shared by the filter evaluator and the sort comparator.

Both components take the same ``DateContext`` so "this week" in a filter and the
day boundaries used to compare dates in a sort agree on time zone and on the first
day of the week.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time, timedelta, tzinfo
from typing import Any, Optional, Tuple
from zoneinfo import ZoneInfo

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from docview.core.config import settings
from docview.engine.operators import FilterOperator

_WEEKDAY_INDEX = {"monday": 0, "sunday": 6}


def _now_utc() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class DateContext:
    """Evaluation-time clock plus calendar conventions."""

    now: datetime = field(default_factory=_now_utc)
    tz: tzinfo = UTC
    week_start: str = "monday"

    @classmethod
    def from_settings(cls, now: Optional[datetime] = None) -> "DateContext":
        return cls(
            now=now or _now_utc(),
            tz=ZoneInfo(settings.TIMEZONE),
            week_start=settings.WEEK_START,
        )

    @property
    def today(self) -> date:
        return self.localize(self.now).date()

    def localize(self, value: datetime) -> datetime:
        # Naive datetimes are wall-clock time in the configured zone
        if value.tzinfo is None:
            return value.replace(tzinfo=self.tz)
        return value.astimezone(self.tz)

    def start_of_week(self, day: date) -> date:
        first = _WEEKDAY_INDEX[self.week_start]
        return day - timedelta(days=(day.weekday() - first) % 7)

    def relative_window(self, operator: FilterOperator) -> Tuple[date, date]:
        """Inclusive [start, end] calendar-date window for a relative operator."""
        today = self.today
        op = FilterOperator(operator)
        if op == FilterOperator.is_today:
            return today, today
        if op == FilterOperator.is_yesterday:
            day = today - timedelta(days=1)
            return day, day
        if op == FilterOperator.is_tomorrow:
            day = today + timedelta(days=1)
            return day, day
        if op == FilterOperator.is_this_week:
            start = self.start_of_week(today)
            return start, start + timedelta(days=6)
        if op == FilterOperator.is_this_month:
            start = today.replace(day=1)
            return start, start + relativedelta(months=1) - timedelta(days=1)
        if op == FilterOperator.is_this_year:
            return date(today.year, 1, 1), date(today.year, 12, 31)
        if op == FilterOperator.is_past_week:
            return today - timedelta(days=7), today
        if op == FilterOperator.is_past_month:
            return today - relativedelta(months=1), today
        if op == FilterOperator.is_next_week:
            return today, today + timedelta(days=7)
        if op == FilterOperator.is_next_month:
            return today, today + relativedelta(months=1)
        raise ValueError(f"{op.value} is not a relative date operator")


def parse_datetime(value: Any, fmt: Optional[str] = None) -> Optional[datetime]:
    """
    Best-effort conversion of a stored value to a datetime.

    Accepts datetime/date objects, ISO-8601 strings and, when ``fmt`` is given,
    strings in that strptime format. Returns None when the value is not a date.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    if fmt:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            return None
    try:
        return date_parser.isoparse(text)
    except ValueError:
        pass
    try:
        return date_parser.parse(text)
    except (ValueError, OverflowError):
        return None


def to_local_date(value: Any, ctx: DateContext, fmt: Optional[str] = None) -> Optional[date]:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    dt = parse_datetime(value, fmt)
    if dt is None:
        return None
    # Date-only strings carry no zone and name a calendar day as-is
    if isinstance(value, str) and dt.tzinfo is None:
        return dt.date()
    return ctx.localize(dt).date()


def to_local_datetime(value: Any, ctx: DateContext, fmt: Optional[str] = None) -> Optional[datetime]:
    dt = parse_datetime(value, fmt)
    if dt is None:
        return None
    return ctx.localize(dt)
