from covid_db.loaders.base import DatasetBase, ValidateHeaderError
from covid_db.loaders.covid_tracking import CovidTrackingStates
from covid_db.loaders.harveyco import HarveyCounty
from covid_db.loaders.loc_lookup import (
    FipsPopulationMap,
    LocationLookup,
    fips_population_map,
)
from covid_db.loaders.locations import CombinedLocations
from covid_db.loaders.nyt_counties import NYTimesCounties
from covid_db.loaders.owid import OurWorldInData
from covid_db.loaders.rtlive import RTLiveEstimates
from covid_db.loaders.util import RequestError, download_to, gunzip
