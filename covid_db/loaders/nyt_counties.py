import pandas as pd

from covid_db.loaders.base import DatasetBase
from covid_db.models import NYTCounties

NYTIMES_RAW_BASE_URL = "https://raw.githubusercontent.com/nytimes/covid-19-data/master/"


class NYTimesCounties(DatasetBase):
    """
    County level cumulative cases and deaths from The New York Times

    Rows without a FIPS code (New York City, "Unknown" counties) are kept
    with a null `fips`.
    """

    source_name = "The New York Times"
    source = NYTIMES_RAW_BASE_URL + "us-counties.csv"
    table = NYTCounties
    expected_columns = ["date", "county", "state", "fips", "cases", "deaths"]
    read_csv_kwargs = dict(dtype={"fips": str})

    def normalize(self, data: pd.DataFrame) -> pd.DataFrame:
        df = self._add_date_columns(data, "date")
        df = df.assign(fips=pd.to_numeric(df["fips"]))
        return self._to_int(df, ["fips", "cases", "deaths"])
