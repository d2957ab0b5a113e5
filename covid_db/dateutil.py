"""
Conversions between calendar dates and Julian day numbers.

Every table in the database uses the Julian day number (days since
noon, 1 January 4713 BC) as its time axis, so day arithmetic reduces to
integer arithmetic. 2015-03-14 is day 2457096.
"""
import datetime
from typing import Tuple

# date.toordinal() counts from 0001-01-01 == 1, which is Julian day 1721426
JULIAN_ORDINAL_OFFSET = 1721425

ISO_DATE_FORMAT = "%Y-%m-%d"


def nd_to_day(nd: datetime.date) -> int:
    "Convert a date to a Julian day number"
    return nd.toordinal() + JULIAN_ORDINAL_OFFSET


def day_to_nd(day: int) -> datetime.date:
    "Convert a Julian day number to a date"
    return datetime.date.fromordinal(day - JULIAN_ORDINAL_OFFSET)


def ymd_to_day(year: int, month: int, day: int) -> int:
    """Convert a year, month, day triple to a Julian day number

    Raises ValueError when the triple is not a calendar date.
    """
    return nd_to_day(datetime.date(year, month, day))


def day_to_ymd(day: int) -> Tuple[int, int, int]:
    nd = day_to_nd(day)
    return nd.year, nd.month, nd.day


def day_to_str(day: int) -> str:
    "Format a Julian day number as ``YYYY-MM-DD``"
    return day_to_nd(day).strftime(ISO_DATE_FORMAT)


def parse_date(value: str, fmt: str = ISO_DATE_FORMAT) -> datetime.date:
    """
    Parse a date string strictly

    Parameters
    ----------
    value : str
        The date as it appears in the source file
    fmt : str
        A ``strptime`` format. Defaults to ``%Y-%m-%d``

    Returns
    -------
    nd : datetime.date
        The parsed date. A ValueError is raised if `value` does not
        match `fmt`
    """
    return datetime.datetime.strptime(str(value), fmt).date()


def str_to_day(value: str, fmt: str = ISO_DATE_FORMAT) -> int:
    return nd_to_day(parse_date(value, fmt))
