"""
Chart axis generation for time-series plots.

The X axis spans a duration with ticks spaced according to the bucket
interval; tick labels are formatted for the interval, in UTC unless a
timezone name is given. The Y axis pads the plotted value range.
"""

import logging
import math
from datetime import datetime, timedelta, timezone, tzinfo
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field

from .arguments import (
    DAY_SECONDS,
    HOUR_SECONDS,
    MINUTE_SECONDS,
    WEEK_SECONDS,
    TimeInterval,
    TimeSeriesArguments,
)

logger = logging.getLogger(__name__)

# Seconds between X axis ticks per interval
TICK_SPACING = {
    TimeInterval.MINUTE: MINUTE_SECONDS,
    TimeInterval.HOUR: 6 * HOUR_SECONDS,
    TimeInterval.DAY: DAY_SECONDS,
    TimeInterval.WEEK: WEEK_SECONDS,
    TimeInterval.MONTH: 32 * DAY_SECONDS,
    TimeInterval.YEAR: WEEK_SECONDS,
}

# X axis tick label format per interval
LABEL_FORMATS = {
    TimeInterval.MINUTE: "%I:%M %p",
    TimeInterval.HOUR: "%I %p",
    TimeInterval.DAY: "%a",
    TimeInterval.WEEK: "%d/%m",
    TimeInterval.MONTH: "%b",
    TimeInterval.YEAR: "%Y",
}

# Y axis
DEFAULT_VALUE_STEP = 5.0
MAX_VALUE_TICKS = 18


class _Axis(BaseModel):
    model_config = ConfigDict(frozen=True)

    first: float = Field(..., description="First value on the axis")
    last: float = Field(..., description="Last value on the axis")
    step: float = Field(..., gt=0, description="Distance between ticks")

    def values(self) -> List[float]:
        """Multiples of the step lying on the axis."""
        values = []
        value = math.ceil(self.first / self.step) * self.step
        while value <= self.last:
            values.append(value)
            value += self.step
        return values


class TimeAxis(_Axis):
    """X axis of a time-series chart."""

    interval: TimeInterval
    title: str = ""
    timezone: Optional[str] = None

    def label(self, value: float) -> str:
        return axis_label(value, self.interval, self.timezone)

    def labels(self) -> List[Tuple[float, str]]:
        return [(value, self.label(value)) for value in self.values()]


class ValueAxis(_Axis):
    """Y axis of a time-series chart."""

    def label(self, value: float) -> str:
        return str(round(value, 2))

    def labels(self) -> List[Tuple[float, str]]:
        return [(value, self.label(value)) for value in self.values()]


def _zone(name: Optional[str]) -> tzinfo:
    if not name:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone '{name}', labelling in UTC")
        return timezone.utc


def _start_of_day(ts: float, zone: tzinfo) -> datetime:
    return datetime.fromtimestamp(ts, tz=zone).replace(hour=0, minute=0, second=0, microsecond=0)


def time_axis(
    interval: TimeInterval,
    start_time: float,
    end_time: float,
    title: str = "",
    timezone: Optional[str] = None,
) -> TimeAxis:
    """
    Build the X axis for a duration.
    
    Hourly axes always cover the whole day containing `start_time`. Daily
    axes end one day early so the last bucket is not followed by an empty
    tick.
    
    Args:
        interval: Bucket interval of the plotted data
        start_time: Start of the duration, epoch seconds
        end_time: End of the duration, epoch seconds
        title: Axis title
        timezone: IANA name of the zone used for days and labels
        
    Returns:
        TimeAxis
    """
    first, last = float(start_time), float(end_time)
    
    if interval is TimeInterval.HOUR:
        midnight = _start_of_day(start_time, _zone(timezone))
        first = midnight.timestamp()
        last = (midnight + timedelta(days=1, seconds=-1)).timestamp()
    elif interval is TimeInterval.DAY:
        last -= DAY_SECONDS
    
    return TimeAxis(
        first=first,
        last=last,
        step=TICK_SPACING[interval],
        interval=interval,
        title=title,
        timezone=timezone,
    )


def axis_label(value: float, interval: TimeInterval, timezone: Optional[str] = None) -> str:
    """
    Format an X axis tick.
    
    Args:
        value: Epoch seconds
        interval: Bucket interval of the axis
        timezone: IANA zone name; UTC when None or unknown
    """
    moment = datetime.fromtimestamp(value, tz=_zone(timezone))
    return moment.strftime(LABEL_FORMATS[interval])


def value_axis(first: float, last: float) -> ValueAxis:
    """
    Build the Y axis for a value range.
    
    Ticks are 5 apart unless that would give more than 18 ticks, in which
    case the range is split into 18 steps. The axis starts one step below
    the smallest value and ends 5 above the largest.
    """
    step = DEFAULT_VALUE_STEP
    if (last - first) / DEFAULT_VALUE_STEP > MAX_VALUE_TICKS:
        step = (last - first) / MAX_VALUE_TICKS
    return ValueAxis(first=first - step, last=last + DEFAULT_VALUE_STEP, step=step)


def time_label(args: TimeSeriesArguments) -> str:
    """
    Caption describing the plotted duration, in UTC.
    
    Returns:
        "Jan 5, 2025" for hourly charts, "30 Dec 24 - 5 Jan 25" for daily
        and weekly charts, "Feb 2024 - Jan 2025" for monthly charts and an
        empty string otherwise
    """
    start = datetime.fromtimestamp(args.duration.start_time, tz=timezone.utc)
    end = datetime.fromtimestamp(args.duration.end_time, tz=timezone.utc)
    interval = args.time_interval
    
    if interval is TimeInterval.HOUR:
        return f"{start:%b} {start.day}, {start:%Y}"
    if interval in (TimeInterval.DAY, TimeInterval.WEEK):
        return f"{start.day} {start:%b %y} - {end.day} {end:%b %y}"
    if interval is TimeInterval.MONTH:
        return f"{start:%b %Y} - {end:%b %Y}"
    return ""
