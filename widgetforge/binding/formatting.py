"""
Default formatting of raw data values for data-binding layers.

A raw value is one of int, float, str, bool, date, datetime or timedelta.
Floats are ratios in [0, 1] (reading and habit progress). Which rendering
applies to a datetime depends on the data type it was requested for
(currentTime shows the time, dayOfWeek the weekday, ...).

Hosts that need localized output pass their own formatter to
resolve_binding; this module only provides a sensible English default.
"""

from datetime import date, datetime, time, timedelta
from typing import Callable, Union

from ..layers import DataFormatStyle, WidgetDataType

RawValue = Union[int, float, str, bool, date, datetime, time, timedelta]

# (value, style, data type) -> display string
Formatter = Callable[[RawValue, DataFormatStyle, WidgetDataType], str]

_MONTHS = (
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
)
_WEEKDAYS = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')

# Units used by the long style for counts
_COUNT_UNITS = {
    WidgetDataType.READING_STREAK: ('day', 'days'),
    WidgetDataType.HABIT_STREAK: ('day', 'days'),
    WidgetDataType.GRATITUDE_STREAK: ('day', 'days'),
    WidgetDataType.TOTAL_PLAN_DAYS: ('day', 'days'),
    WidgetDataType.ACTIVE_PRAYER_COUNT: ('prayer', 'prayers'),
    WidgetDataType.ANSWERED_PRAYER_COUNT: ('prayer', 'prayers'),
    WidgetDataType.COMPLETED_HABITS: ('habit', 'habits'),
    WidgetDataType.TOTAL_HABITS: ('habit', 'habits'),
}


def _plural(n: int, singular: str, plural: str) -> str:
    return f'{n} {singular if abs(n) == 1 else plural}'


def _compact(n: int) -> str:
    """1234 -> '1.2K', 2500000 -> '2.5M', 999950 -> '1M'."""
    if abs(n) < 1_000:
        return str(n)
    sign = '-' if n < 0 else ''
    # Round to tenths first, then move up a unit when that reaches 1000
    for threshold, suffix in ((1_000, 'K'), (1_000_000, 'M'), (1_000_000_000, 'B')):
        tenths = (abs(n) * 10 + threshold // 2) // threshold
        if tenths < 10_000 or suffix == 'B':
            break
    whole, fraction = divmod(tenths, 10)
    return f'{sign}{whole}' + (f'.{fraction}' if fraction else '') + suffix


def format_int(value: int, style: DataFormatStyle, data_type: WidgetDataType) -> str:
    if style is DataFormatStyle.NUMERIC:
        return str(value)
    if style is DataFormatStyle.SHORT:
        return _compact(value)
    if style is DataFormatStyle.PERCENTAGE:
        return f'{value}%'
    if style is DataFormatStyle.LONG:
        if data_type is WidgetDataType.CURRENT_PLAN_DAY:
            return f'Day {value}'
        unit = _COUNT_UNITS.get(data_type)
        if unit is not None:
            return _plural(value, *unit)
    return f'{value:,}'


def format_ratio(value: float, style: DataFormatStyle, data_type: WidgetDataType) -> str:
    """Format a progress ratio (0.0-1.0)."""
    if style is DataFormatStyle.NUMERIC:
        return f'{value:.2f}'
    percent = f'{round(value * 100)}%'
    if style is DataFormatStyle.LONG:
        return f'{percent} complete'
    return percent


def _format_time(value: Union[datetime, time], style: DataFormatStyle) -> str:
    if style is DataFormatStyle.NUMERIC:
        return f'{value.hour:02d}:{value.minute:02d}'
    hour = value.hour % 12 or 12
    meridiem = 'AM' if value.hour < 12 else 'PM'
    if style is DataFormatStyle.SHORT:
        return f'{hour}:{value.minute:02d}'
    if style is DataFormatStyle.LONG:
        return f'{hour}:{value.minute:02d}:{value.second:02d} {meridiem}'
    return f'{hour}:{value.minute:02d} {meridiem}'


def format_date(value: date, style: DataFormatStyle, data_type: WidgetDataType) -> str:
    """Format a date (or the date part of a datetime) for the requested data type."""
    month = _MONTHS[value.month - 1]
    weekday = _WEEKDAYS[value.weekday()]

    if data_type is WidgetDataType.DAY_OF_WEEK:
        if style is DataFormatStyle.SHORT:
            return weekday[:3]
        if style is DataFormatStyle.NUMERIC:
            return str(value.isoweekday())
        return weekday

    if data_type is WidgetDataType.MONTH_YEAR:
        if style is DataFormatStyle.SHORT:
            return f'{month[:3]} {value.year}'
        if style is DataFormatStyle.NUMERIC:
            return f'{value.month:02d}/{value.year}'
        return f'{month} {value.year}'

    if style is DataFormatStyle.SHORT:
        return f'{month[:3]} {value.day}'
    if style is DataFormatStyle.NUMERIC:
        return value.isoformat()
    if style is DataFormatStyle.LONG:
        return f'{weekday}, {month} {value.day}, {value.year}'
    return f'{month} {value.day}, {value.year}'


def format_duration(value: timedelta, style: DataFormatStyle, data_type: WidgetDataType) -> str:
    """Format a duration in whole days (countdowns)."""
    days = value.days
    if style is DataFormatStyle.NUMERIC:
        return str(days)
    if style is DataFormatStyle.SHORT:
        return f'{days}d'
    if style is DataFormatStyle.LONG:
        hours = value.seconds // 3600
        if hours:
            return f"{_plural(days, 'day', 'days')}, {_plural(hours, 'hour', 'hours')}"
    return _plural(days, 'day', 'days')


def format_value(value: RawValue, style: DataFormatStyle, data_type: WidgetDataType) -> str:
    """
    Format a raw provider value for display.

    Args:
        value: Raw value returned by the data provider
        style: Requested format style
        data_type: Data type the value was requested for

    Returns:
        Display string (without prefix/suffix)
    """
    # bool before int, bool is an int subclass
    if isinstance(value, bool):
        return 'Yes' if value else 'No'
    if isinstance(value, int):
        return format_int(value, style, data_type)
    if isinstance(value, float):
        return format_ratio(value, style, data_type)
    if isinstance(value, timedelta):
        return format_duration(value, style, data_type)
    if isinstance(value, datetime):
        if data_type is WidgetDataType.CURRENT_TIME:
            return _format_time(value, style)
        return format_date(value, style, data_type)
    if isinstance(value, date):
        return format_date(value, style, data_type)
    if isinstance(value, time):
        return _format_time(value, style)
    return str(value)
