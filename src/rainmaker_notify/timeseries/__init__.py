"""
Time-series chart support: query durations, axis ticks and labels.
"""

from .arguments import (
    Aggregate,
    ChartType,
    Duration,
    TimeDurationSegment,
    TimeInterval,
    TimeSeriesArguments,
)
from .axis import TimeAxis, ValueAxis, axis_label, time_axis, time_label, value_axis

__all__ = [
    "Aggregate",
    "ChartType",
    "Duration",
    "TimeDurationSegment",
    "TimeInterval",
    "TimeSeriesArguments",
    "TimeAxis",
    "ValueAxis",
    "axis_label",
    "time_axis",
    "time_label",
    "value_axis",
]
