import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

import numpy as np
import pandas as pd
import us
from sqlalchemy.engine.base import Engine

from covid_db import dateutil
from covid_db.db_util import fast_append_to_sql
from covid_db.models import Base

_logger = logging.getLogger(__name__)

# `us` v2.0 removed DC from the `us.STATES` list, so we are creating
# our own which includes DC.
ALL_STATES_PLUS_TERRITORIES = us.states.STATES_AND_TERRITORIES + [us.states.DC]
STATE_FIPS: Dict[str, int] = {s.abbr: int(s.fips) for s in ALL_STATES_PLUS_TERRITORIES}


class ValidateHeaderError(Exception):
    """Error raised when a source file does not have the expected header"""

    def __init__(self, name: str, expected: List[str], found: List[str]):
        self.name = name
        self.expected = expected
        self.found = found

    def __str__(self):
        out = f"{self.name}: unexpected header\n"
        out += f"expected: {', '.join(self.expected)}\n"
        out += f"found:    {', '.join(self.found)}"
        return out


class DatasetBase(ABC):
    """
    Attributes
    ----------
    table: Type[Base]
        The SQLAlchemy base table where this data should be inserted

    source: str
        A string containing a URL that points to the published file

    source_name: str
        Name of the entity publishing the dataset

    expected_columns: Optional[List[str]] = None
        When set, `fetch` refuses files whose header differs from this
        list. Used for sources that are copied column by column

    read_csv_kwargs: Dict[str, Any]
        Extra keyword arguments for `pd.read_csv`
    """

    table: Type[Base]
    source: str
    source_name: str
    expected_columns: Optional[List[str]] = None
    read_csv_kwargs: Dict[str, Any] = {}

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = path

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def fetch(self) -> pd.DataFrame:
        """
        Read the raw file, from `self.path` when one was given and from
        `self.source` otherwise

        Returns
        -------
        df : pd.DataFrame
            The raw data, one column per column of the source file
        """
        where = self.path if self.path is not None else self.source
        _logger.info("Processing %s from %s", self.name, where)
        df = pd.read_csv(where, **self.read_csv_kwargs)
        if self.expected_columns is not None:
            found = [str(c) for c in df.columns]
            if found != self.expected_columns:
                raise ValidateHeaderError(self.name, self.expected_columns, found)
        return df

    @abstractmethod
    def normalize(self, data: pd.DataFrame) -> pd.DataFrame:
        """
        The `normalize` method should take the data in its raw form
        and return a DataFrame with one column per column of `self.table`

        Parameters
        ----------
        data : pd.DataFrame
            The raw data

        Returns
        -------
        df : pd.DataFrame
            The cleaned data as a DataFrame
        """
        pass

    def put(self, engine: Engine, df: pd.DataFrame) -> int:
        "Append `df` to `self.table` in one transaction and return the row count"
        return fast_append_to_sql(df, engine, self.table)

    def load(self, engine: Engine) -> int:
        "Call `self.put(engine, self.normalize(self.fetch()))`"
        df = self.normalize(self.fetch())
        rows = self.put(engine, df)
        _logger.info(
            "%s: inserted %d rows into %s", self.name, rows, self.table.__table__.name
        )
        return rows

    def _add_date_columns(
        self,
        data: pd.DataFrame,
        date_column: str = "date",
        fmt: str = dateutil.ISO_DATE_FORMAT,
        ymd: bool = False,
    ) -> pd.DataFrame:
        """
        Parse `date_column` strictly and add a `date_julian` column

        Parameters
        ----------
        data :
            Input data
        date_column:
            Name of the column holding the date
        fmt:
            ``strptime`` format of the dates. A value that does not
            match raises, aborting the load
        ymd:
            If True also add ``date_year``, ``date_month`` and ``date_day``

        Returns
        -------
        data:
            Copy of the data with ``date`` rewritten as ``YYYY-MM-DD``
            and the new columns added
        """
        dates = pd.to_datetime(data[date_column].astype(str), format=fmt)
        out = data.assign(
            date=dates.dt.strftime(dateutil.ISO_DATE_FORMAT),
            date_julian=dates.map(dateutil.nd_to_day).astype(int),
        )
        if ymd:
            out = out.assign(
                date_year=dates.dt.year,
                date_month=dates.dt.month,
                date_day=dates.dt.day,
            )
        return out

    def _to_int(self, data: pd.DataFrame, columns: List[str]) -> pd.DataFrame:
        "Round `columns` to nullable integers, adding any that are missing"
        out = data.copy()
        for col in columns:
            if col not in out.columns:
                out[col] = np.nan
            out[col] = pd.to_numeric(out[col]).round().astype("Int64")
        return out

    def _state_fips(self, states: pd.Series) -> pd.Series:
        return states.map(STATE_FIPS).astype("Int64")
