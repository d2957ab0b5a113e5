import math
from typing import Any, Mapping, Optional

from covid_db import dateutil


class SourceRowError(Exception):
    """Base class for problems that make an input row unusable"""

    pass


class MissingColumnError(SourceRowError):
    """A mandatory column is absent from the row or is null"""

    def __init__(self, column: str):
        self.column = column
        super().__init__(f"Mandatory column `{column}` is missing or null")


class InvalidDateError(SourceRowError):
    """The date parts of a row do not form a calendar date"""

    pass


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


class SourceRow:
    """
    Read-only view of one input row, addressed by column name

    Every getter takes a default that is returned when the column is
    absent from the row or holds a null (``None`` or NaN). No assumption
    is made about column order.

    Parameters
    ----------
    data : Mapping[str, Any]
        The row's values keyed by column name. A SQLAlchemy ``Row``
        exposes one as ``row._mapping``
    """

    def __init__(self, data: Mapping[str, Any]):
        self._data = data

    def get(self, column: str, default: Any = None) -> Any:
        value = self._data.get(column)
        return default if _is_missing(value) else value

    def get_int(self, column: str, default: Optional[int] = None) -> Optional[int]:
        value = self.get(column)
        return default if value is None else int(value)

    def get_float(
        self, column: str, default: Optional[float] = None
    ) -> Optional[float]:
        value = self.get(column)
        return default if value is None else float(value)

    def get_str(self, column: str, default: str = "") -> str:
        value = self.get(column)
        return default if value is None else str(value)

    def require(self, column: str) -> Any:
        "Return the value of `column`, raising `MissingColumnError` if it is null"
        value = self.get(column)
        if value is None:
            raise MissingColumnError(column)
        return value

    def date_julian(self) -> int:
        """
        Julian day number of the row's ``date_year``, ``date_month`` and
        ``date_day`` columns
        """
        parts = [self.require(c) for c in ("date_year", "date_month", "date_day")]
        try:
            return dateutil.ymd_to_day(*(int(p) for p in parts))
        except (TypeError, ValueError) as e:
            ymd = "-".join(str(p) for p in parts)
            raise InvalidDateError(f"Invalid date {ymd}: {e}") from e
