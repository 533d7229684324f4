"""
Time-series query arguments and the durations they cover.

All calendar arithmetic is done in UTC.
"""

import calendar
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

MINUTE_SECONDS = 60
HOUR_SECONDS = 3600
DAY_SECONDS = 86400
WEEK_SECONDS = 7 * DAY_SECONDS


class TimeInterval(str, Enum):
    """Bucket size of a time-series query."""

    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class Aggregate(str, Enum):
    """Aggregation applied to the values of a bucket."""

    AVG = "avg"
    MIN = "min"
    MAX = "max"
    COUNT = "count"
    LATEST = "latest"
    RAW = "raw"


class ChartType(str, Enum):
    BAR = "Bar"
    LINE = "Line"


class TimeDurationSegment(str, Enum):
    """Duration picker choices and the interval each one is plotted with."""

    DAY = "1D"
    WEEK = "7D"
    MONTH = "4W"
    YEAR = "1Y"

    @property
    def time_interval(self) -> TimeInterval:
        return _SEGMENT_INTERVALS[self]


_SEGMENT_INTERVALS = {
    TimeDurationSegment.DAY: TimeInterval.HOUR,
    TimeDurationSegment.WEEK: TimeInterval.DAY,
    TimeDurationSegment.MONTH: TimeInterval.WEEK,
    TimeDurationSegment.YEAR: TimeInterval.MONTH,
}


def _utc(ts: float) -> datetime:
    return datetime.fromtimestamp(ts, tz=timezone.utc)


def _epoch(dt: datetime) -> int:
    return int(dt.timestamp())


def add_months(dt: datetime, months: int) -> datetime:
    """Shift by whole months, clamping the day to the target month's length."""
    index = dt.month - 1 + months
    year, month = dt.year + index // 12, index % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def _month_start(ts: float) -> datetime:
    return _utc(ts).replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def _month_last_day(month_start: datetime) -> datetime:
    # Midnight opening the last day of the month
    return add_months(month_start, 1) - timedelta(days=1)


class Duration(BaseModel):
    """Closed range of epoch seconds covered by a query."""

    start_time: int = Field(..., ge=0, description="First second of the range")
    end_time: int = Field(..., ge=0, description="Last second of the range")

    @model_validator(mode="after")
    def check_order(self) -> "Duration":
        if self.end_time < self.start_time:
            raise ValueError(f"end_time {self.end_time} is before start_time {self.start_time}")
        return self

    @classmethod
    def default(cls, now: Optional[float] = None) -> "Duration":
        """Today in UTC, from 00:00:00 to 23:59:59."""
        midnight = _utc(now if now is not None else datetime.now(timezone.utc).timestamp()).replace(
            hour=0, minute=0, second=0, microsecond=0
        )
        return cls(start_time=_epoch(midnight), end_time=_epoch(midnight) + DAY_SECONDS - 1)


class TimeSeriesArguments(BaseModel):
    """
    What to plot: aggregation, bucket interval, duration and chart type.
    
    The duration defaults to today (UTC). `set_latest_duration` moves it to
    the most recent window for the interval, and `next_duration` /
    `previous_duration` page through adjacent windows.
    """

    aggregate: Aggregate
    time_interval: TimeInterval
    duration: Duration = Field(default_factory=Duration.default)
    chart_type: ChartType = ChartType.BAR

    def set_latest_duration(self, now: Optional[float] = None) -> None:
        """
        Move the duration to the latest window for the interval.
        
        - hour: today
        - day: the 7 days ending today
        - week: the 28 days ending today
        - month: the 12 calendar months ending with the current one
        - year: the 4 years up to now
        - minute: unchanged
        """
        if now is None:
            now = datetime.now(timezone.utc).timestamp()
        today = Duration.default(now)
        interval = self.time_interval
        
        if interval is TimeInterval.HOUR:
            self.duration = today
        elif interval is TimeInterval.DAY:
            self.duration = Duration(start_time=today.end_time - WEEK_SECONDS + 1, end_time=today.end_time)
        elif interval is TimeInterval.WEEK:
            self.duration = Duration(start_time=today.end_time - 28 * DAY_SECONDS + 1, end_time=today.end_time)
        elif interval is TimeInterval.MONTH:
            month_start = _month_start(now)
            self.duration = Duration(
                start_time=_epoch(add_months(month_start, -11)),
                end_time=_epoch(_month_last_day(month_start)),
            )
        elif interval is TimeInterval.YEAR:
            current = _utc(now)
            self.duration = Duration(start_time=_epoch(add_months(current, -48)), end_time=int(now))

    def next_duration(self) -> Duration:
        """Window following the current duration."""
        start, end = self.duration.start_time, self.duration.end_time
        interval = self.time_interval
        
        if interval is TimeInterval.HOUR:
            return Duration(start_time=start + DAY_SECONDS, end_time=end + DAY_SECONDS)
        if interval is TimeInterval.DAY:
            return Duration(start_time=end + 1, end_time=end + WEEK_SECONDS)
        if interval is TimeInterval.WEEK:
            return Duration(start_time=end + 1, end_time=end + 28 * DAY_SECONDS)
        if interval is TimeInterval.MONTH:
            month_start = _month_start(end + DAY_SECONDS)
            return Duration(
                start_time=_epoch(month_start),
                end_time=_epoch(_month_last_day(add_months(month_start, 11))),
            )
        return self.duration

    def previous_duration(self) -> Duration:
        """Window preceding the current duration."""
        start, end = self.duration.start_time, self.duration.end_time
        interval = self.time_interval
        
        if interval is TimeInterval.HOUR:
            return Duration(start_time=start - DAY_SECONDS, end_time=end - DAY_SECONDS)
        if interval is TimeInterval.DAY:
            return Duration(start_time=start - WEEK_SECONDS, end_time=start - 1)
        if interval is TimeInterval.WEEK:
            return Duration(start_time=start - 28 * DAY_SECONDS, end_time=start - 1)
        if interval is TimeInterval.MONTH:
            month_start = _month_start(start - DAY_SECONDS)
            return Duration(
                start_time=_epoch(add_months(month_start, -11)),
                end_time=_epoch(_month_last_day(month_start)),
            )
        return self.duration
