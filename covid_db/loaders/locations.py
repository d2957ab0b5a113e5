import csv
import logging
from typing import Dict

import numpy as np
import pandas as pd
from sqlalchemy.engine.base import Engine

from covid_db.combined.registry import LocationRecord
from covid_db.loaders.base import DatasetBase
from covid_db.loaders.loc_lookup import FipsPopulationMap
from covid_db.models import CDataSetLoc

_logger = logging.getLogger(__name__)

# The file is read by position, the header row is only skipped
LOCATIONS_DIFF_COLUMNS = [
    "key",
    "key_original",
    "type",
    "label",
    "country_code",
    "country_different",
    "country_normalized",
    "country_original",
    "province_different",
    "province_normalized",
    "province_original",
    "administrative_different",
    "administrative_normalized",
    "administrative_original",
    "region",
    "subregion",
    "us_state_code",
    "us_state_name",
    "us_county_fips",
]


class CombinedLocations(DatasetBase):
    """
    Location table of the combined multi-source dataset

    Each location key gets a sequential `locid`, starting at 1, in file
    order. The resulting key -> `LocationRecord` map seeds the
    `LocationRegistry` used while loading the combined values.
    """

    source_name = "Ciprian Dorin Craciun, covid19-datasets"
    source = (
        "https://github.com/cipriancraciun/covid19-datasets/raw/master/"
        "exports/combined/v1/locations-diff.tsv"
    )
    table = CDataSetLoc
    read_csv_kwargs = dict(
        sep="\t",
        quoting=csv.QUOTE_NONE,
        header=0,
        names=LOCATIONS_DIFF_COLUMNS,
        dtype=str,
        keep_default_na=False,
    )

    def normalize(self, data: pd.DataFrame) -> pd.DataFrame:
        fips = pd.to_numeric(data["us_county_fips"].str.strip().replace("", np.nan))
        return pd.DataFrame(
            {
                "location_key": data["key"],
                "locid": np.arange(1, data.shape[0] + 1),
                "location_type": data["type"],
                "location_label": data["label"],
                "country_code": data["country_code"],
                "country": data["country_normalized"],
                "province": data["province_normalized"],
                "administrative": data["administrative_normalized"],
                "region": data["region"],
                "subregion": data["subregion"],
                "us_state_code": data["us_state_code"],
                "us_state_name": data["us_state_name"],
                "us_county_fips": fips.astype("Int64"),
            }
        )

    def known_locations(
        self, df: pd.DataFrame, fips_population: FipsPopulationMap
    ) -> Dict[str, LocationRecord]:
        """
        Build the location key -> `LocationRecord` map from normalized data

        Population comes from `fips_population` for locations that carry a
        county FIPS code and is None for everything else.
        """
        out = {}
        rows = zip(df["location_key"], df["locid"], df["us_county_fips"])
        for key, locid, fips in rows:
            fips = None if pd.isna(fips) else int(fips)
            out[key] = LocationRecord(
                locid=int(locid),
                fips=fips,
                population=fips_population.get(fips) if fips is not None else None,
            )
        return out

    def load_known_locations(
        self, engine: Engine, fips_population: FipsPopulationMap
    ) -> Dict[str, LocationRecord]:
        df = self.normalize(self.fetch())
        rows = self.put(engine, df)
        _logger.info("%s: inserted %d location records", self.name, rows)
        return self.known_locations(df, fips_population)
