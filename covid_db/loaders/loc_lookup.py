from typing import Dict

import pandas as pd
from sqlalchemy.engine.base import Engine

from covid_db.loaders.base import DatasetBase
from covid_db.models import LocLookup

FipsPopulationMap = Dict[int, int]


def fips_population_map(df: pd.DataFrame) -> FipsPopulationMap:
    """Map county FIPS code to population

    Only rows that carry both a FIPS code and a population contribute.

    Args:
        df: Normalized location lookup data, as returned by
            `LocationLookup.normalize`
    Returns: Dictionary of fips -> population
    """
    have = df.dropna(subset=["fips", "population"])
    return {int(f): int(p) for f, p in zip(have["fips"], have["population"])}


class LocationLookup(DatasetBase):
    source_name = "Johns Hopkins University CSSE"
    source = (
        "https://github.com/CSSEGISandData/COVID-19/raw/master/"
        "csse_covid_19_data/UID_ISO_FIPS_LookUp_Table.csv"
    )
    table = LocLookup

    # Namibia's iso2 code is "NA"; only empty cells are missing values
    read_csv_kwargs = dict(keep_default_na=False, na_values=[""])

    rename_columns = {
        "UID": "uid",
        "FIPS": "fips",
        "Admin2": "admin2",
        "Province_State": "province_state",
        "Country_Region": "country_region",
        "Lat": "latitude",
        "Long_": "longitude",
        "Combined_Key": "combined_key",
        "Population": "population",
    }

    def normalize(self, data: pd.DataFrame) -> pd.DataFrame:
        df = data.rename(columns=self.rename_columns)
        df = self._to_int(df, ["uid", "code3", "fips", "population"])
        return df.assign(
            iso2=df["iso2"].fillna(""),
            iso3=df["iso3"].fillna(""),
            combined_key=df["combined_key"].fillna(""),
            latitude=pd.to_numeric(df["latitude"]),
            longitude=pd.to_numeric(df["longitude"]),
        )

    def load_fips_population(self, engine: Engine) -> FipsPopulationMap:
        """
        Load the lookup table and return the FIPS to population map
        built from it
        """
        df = self.normalize(self.fetch())
        self.put(engine, df)
        return fips_population_map(df)
