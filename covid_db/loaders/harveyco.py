import pandas as pd

from covid_db.loaders.base import DatasetBase
from covid_db.models import HarveyCoData

COUNT_COLUMNS = [
    "kdhe_neg_results",
    "kdhe_pos_results",
    "harveyco_tot_results",
    "harveyco_pos_results",
    "harveyco_confirmed",
    "harveyco_recovered",
]


class HarveyCounty(DatasetBase):
    """
    Hand-maintained test and case counts for Harvey County, Kansas

    There is no published URL for this file, a local path is required.
    """

    source_name = "Harvey County Health Department"
    source = ""
    table = HarveyCoData
    expected_columns = ["date"] + COUNT_COLUMNS

    def fetch(self) -> pd.DataFrame:
        if not self.path:
            raise ValueError(f"{self.name} can only be loaded from a local file")
        return super().fetch()

    def normalize(self, data: pd.DataFrame) -> pd.DataFrame:
        df = self._add_date_columns(data, "date")
        return self._to_int(df, COUNT_COLUMNS)
