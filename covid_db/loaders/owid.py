import pandas as pd

from covid_db.loaders.base import DatasetBase
from covid_db.models import OWID, OWID_NUMERIC_COLUMNS, OWID_TEXT_COLUMNS


class OurWorldInData(DatasetBase):
    source_name = "Our World In Data"
    source = "https://covid.ourworldindata.org/data/owid-covid-data.csv"
    table = OWID

    def normalize(self, data: pd.DataFrame) -> pd.DataFrame:
        df = self._add_date_columns(data, "date")
        # columns are added to the published file over time; keep the
        # ones we know, and leave the ones that are gone empty
        columns = ["date_julian"] + OWID_TEXT_COLUMNS + OWID_NUMERIC_COLUMNS
        df = df.reindex(columns=columns)
        df[OWID_NUMERIC_COLUMNS] = df[OWID_NUMERIC_COLUMNS].apply(pd.to_numeric)
        return df
