import pandas as pd

from covid_db.loaders.base import DatasetBase
from covid_db.models import RTLive

# The published header has changed names over time (`region`/`state`,
# `index`/`rtindex`), so columns are assigned by position
RTLIVE_COLUMNS = [
    "date",
    "state",
    "rtindex",
    "mean",
    "median",
    "lower_80",
    "upper_80",
    "infections",
    "test_adjusted_positive",
    "test_adjusted_positive_raw",
    "positive",
    "tests",
    "new_tests",
    "new_cases",
    "new_deaths",
]

ROUNDED_COLUMNS = ["positive", "tests", "new_tests", "new_cases", "new_deaths"]


class RTLiveEstimates(DatasetBase):
    source_name = "rt.live"
    source = "https://d14wlfuexuxgcm.cloudfront.net/covid/rt.csv"
    table = RTLive
    read_csv_kwargs = dict(header=0, names=RTLIVE_COLUMNS)

    def normalize(self, data: pd.DataFrame) -> pd.DataFrame:
        df = self._add_date_columns(data, "date", ymd=True)
        df = self._to_int(df, ROUNDED_COLUMNS)
        return df.assign(state_fips=self._state_fips(df["state"]))
