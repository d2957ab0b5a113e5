import dataclasses
from typing import Any, Dict, Optional

from covid_db import dateutil

METRICS = ["confirmed", "deaths", "recovered", "infected"]

# Counters that keep counting days across a gap
DAY_INDEX_COLUMNS = ["day_index_0", "day_index_1"]
OPTIONAL_DAY_INDEX_COLUMNS = [
    "day_index_10",
    "day_index_100",
    "day_index_1k",
    "day_index_10k",
    "day_index_peak",
    "day_index_peak_confirmed",
    "day_index_peak_deaths",
]

DELTA_COLUMNS = [f"delta_{m}" for m in METRICS]
DELTA_PCT_COLUMNS = [f"delta_pct_{m}" for m in METRICS]
DELTA_POP100K_COLUMNS = [f"delta_pop100k_{m}" for m in METRICS]


@dataclasses.dataclass
class DailyRecord:
    "One row of ``cdataset``: a (dataset, location, day) observation"

    dataset: str
    locid: int
    date: str
    date_julian: int
    date_year: int
    date_month: int
    date_day: int
    location_lat: Optional[float] = None
    location_long: Optional[float] = None
    day_index_0: int = 0
    day_index_1: int = 0
    day_index_10: Optional[int] = None
    day_index_100: Optional[int] = None
    day_index_1k: Optional[int] = None
    day_index_10k: Optional[int] = None
    day_index_peak: Optional[int] = None
    day_index_peak_confirmed: Optional[int] = None
    day_index_peak_deaths: Optional[int] = None
    absolute_confirmed: int = 0
    absolute_deaths: int = 0
    absolute_recovered: int = 0
    absolute_infected: int = 0
    absolute_pop100k_confirmed: Optional[float] = None
    absolute_pop100k_deaths: Optional[float] = None
    absolute_pop100k_recovered: Optional[float] = None
    absolute_pop100k_infected: Optional[float] = None
    relative_deaths: Optional[float] = None
    relative_recovered: Optional[float] = None
    relative_infected: Optional[float] = None
    delta_confirmed: int = 0
    delta_deaths: int = 0
    delta_recovered: int = 0
    delta_infected: int = 0
    delta_pct_confirmed: Optional[float] = None
    delta_pct_deaths: Optional[float] = None
    delta_pct_recovered: Optional[float] = None
    delta_pct_infected: Optional[float] = None
    delta_pop100k_confirmed: Optional[float] = None
    delta_pop100k_deaths: Optional[float] = None
    delta_pop100k_recovered: Optional[float] = None
    delta_pop100k_infected: Optional[float] = None
    peak_pct_confirmed: Optional[float] = None
    peak_pct_deaths: Optional[float] = None
    peak_pct_recovered: Optional[float] = None
    peak_pct_infected: Optional[float] = None
    factbook_area: Optional[float] = None
    factbook_population: Optional[int] = None
    factbook_death_rate: Optional[float] = None
    factbook_median_age: Optional[float] = None

    @classmethod
    def for_day(cls, dataset: str, locid: int, julian: int, **kw) -> "DailyRecord":
        year, month, day = dateutil.day_to_ymd(julian)
        return cls(
            dataset=dataset,
            locid=locid,
            date=dateutil.day_to_str(julian),
            date_julian=julian,
            date_year=year,
            date_month=month,
            date_day=day,
            **kw,
        )

    def series(self):
        "The (dataset, locid) pair identifying this record's time series"
        return self.dataset, self.locid

    def set_date(self, julian: int) -> None:
        "Move the record to Julian day `julian`, keeping every date column in sync"
        self.date_julian = julian
        self.date = dateutil.day_to_str(julian)
        self.date_year, self.date_month, self.date_day = dateutil.day_to_ymd(julian)

    def dup_day(self) -> "DailyRecord":
        """
        Copy of this record that reports no change since the previous day

        Absolute deltas are 0, percentage and per 100k deltas are None.
        """
        out = dataclasses.replace(self)
        for col in DELTA_COLUMNS:
            setattr(out, col, 0)
        for col in DELTA_PCT_COLUMNS + DELTA_POP100K_COLUMNS:
            setattr(out, col, None)
        return out

    def advance_day_indexes(self, days: int) -> None:
        for col in DAY_INDEX_COLUMNS:
            setattr(self, col, getattr(self, col) + days)
        for col in OPTIONAL_DAY_INDEX_COLUMNS:
            value = getattr(self, col)
            if value is not None:
                setattr(self, col, value + days)

    def as_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)
