import sqlalchemy as sa
import pytest

from covid_db.combined.registry import LocationRegistry
from covid_db.combined.row import SourceRow
from covid_db.models import initdb

COMBINED_INPUT_DDL = """
CREATE TABLE dataset (
    dataset TEXT, location_key TEXT, location_type TEXT, location_label TEXT,
    country_code TEXT, country TEXT, province TEXT, administrative TEXT,
    region TEXT, subregion TEXT, location_lat REAL, location_long REAL,
    date TEXT, date_year INTEGER, date_month INTEGER, date_day INTEGER,
    day_index_0 INTEGER, day_index_1 INTEGER, day_index_10 INTEGER,
    absolute_confirmed INTEGER, absolute_deaths INTEGER,
    absolute_pop100k_confirmed REAL, delta_confirmed INTEGER,
    delta_deaths INTEGER, delta_pct_confirmed REAL, factbook_population INTEGER
)
"""


def _combined_row(key="US_TX_Harris", date="2020-03-01", **kw):
    """A row of the combined dataset's ``dataset`` table"""
    year, month, day = (int(x) for x in date.split("-"))
    out = dict(
        dataset="jhu-daily",
        location_key=key,
        location_type="county",
        location_label=key.replace("_", " "),
        country_code="US",
        country="United States",
        province="Texas",
        administrative="Harris",
        region="Americas",
        subregion="Northern America",
        date=date,
        date_year=year,
        date_month=month,
        date_day=day,
        day_index_0=0,
        day_index_1=0,
        absolute_confirmed=0,
        absolute_deaths=0,
    )
    out.update(kw)
    return out


class LocationWriter:
    "Collects the location rows a `LocationRegistry` writes"

    def __init__(self):
        self.rows = []

    def __call__(self, attributes):
        self.rows.append(attributes)


@pytest.fixture
def writer():
    return LocationWriter()


@pytest.fixture
def registry(writer):
    return LocationRegistry(writer)


@pytest.fixture
def combined_row():
    return _combined_row


@pytest.fixture
def make_row():
    def _make(**kw):
        return SourceRow(_combined_row(**kw))

    return _make


@pytest.fixture
def output_engine(tmp_path):
    engine = sa.create_engine(f"sqlite:///{tmp_path / 'covid19.db'}")
    initdb(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def combined_input(tmp_path):
    """
    Factory writing rows to a combined export database in `tmp_path` and
    returning an engine for it
    """
    engines = []

    def _make(rows):
        engine = sa.create_engine(f"sqlite:///{tmp_path / 'values-sqlite.db'}")
        engines.append(engine)
        with engine.begin() as con:
            con.execute(sa.text(COMBINED_INPUT_DDL))
            if rows:
                columns = sorted(set().union(*rows))
                stmt = "INSERT INTO dataset ({}) VALUES ({})".format(
                    ", ".join(columns), ", ".join(f":{c}" for c in columns)
                )
                params = [{c: r.get(c) for c in columns} for r in rows]
                con.execute(sa.text(stmt), params)
        return engine

    yield _make
    for engine in engines:
        engine.dispose()


LOC_LOOKUP_CSV = """\
UID,iso2,iso3,code3,FIPS,Admin2,Province_State,Country_Region,Lat,Long_,Combined_Key,Population
84048201,US,USA,840,48201.0,Harris,Texas,US,29.85,-95.39,"Harris, Texas, US",4713325
84048113,US,USA,840,48113.0,Dallas,Texas,US,32.77,-96.78,"Dallas, Texas, US",2635516
84000048,US,USA,840,48.0,,Texas,US,31.05,-97.56,"Texas, US",28995881
516,NA,NAM,516,,,,Namibia,-22.96,18.49,Namibia,2540916
84080048,US,USA,840,80048.0,Out of TX,Texas,US,,,"Out of TX, Texas, US",
"""


def _tsv_line(values):
    return "\t".join(values) + "\n"


def _location(key, label, type_, country, province, admin, state, fips):
    values = [key, key, type_, label, "US", "", country, country, ""]
    values += [province, province, "", admin, admin, "Americas"]
    values += ["Northern America", state, province, fips]
    return _tsv_line(values)


LOCATIONS_TSV = (
    _tsv_line(["key"] + ["column"] * 18)
    + _location(
        "US_TX_Harris",
        "Harris, Texas",
        "county",
        "United States",
        "Texas",
        "Harris",
        "TX",
        "48201",
    )
    + _location("US_TX", "Texas", "state", "United States", "Texas", "", "TX", "")
)


@pytest.fixture
def loc_lookup_csv(tmp_path):
    path = tmp_path / "UID_ISO_FIPS_LookUp_Table.csv"
    path.write_text(LOC_LOOKUP_CSV)
    return path


@pytest.fixture
def locations_tsv(tmp_path):
    path = tmp_path / "locations-diff.tsv"
    path.write_text(LOCATIONS_TSV)
    return path


TABLE_SOURCE_FILES = {
    "CovidTrackingStates": (
        "daily.csv",
        "date,state,positive,negative,deathIncrease,hospitalizedCurrently\n"
        "20200302,TX,10,100.0,1,\n"
        "20200301,PR,3,30,0,2\n",
    ),
    "OurWorldInData": (
        "owid-covid-data.csv",
        "iso_code,continent,location,date,total_cases,new_cases,tests_units\n"
        "NAM,Africa,Namibia,2020-03-14,2,2,\n"
        "OWID_WRL,,World,2020-03-14,150000,10000,\n",
    ),
    "RTLiveEstimates": (
        "rt.csv",
        "date,region,index,mean,median,lower_80,upper_80,infections,"
        "test_adjusted_positive,test_adjusted_positive_raw,positive,tests,"
        "new_tests,new_cases,new_deaths\n"
        "2020-03-02,KS,1,1.2,1.1,0.9,1.4,30.5,20.1,19.9,12.0,100.4,,3.6,0\n",
    ),
    "NYTimesCounties": (
        "us-counties.csv",
        "date,county,state,fips,cases,deaths\n"
        "2020-03-01,Harris,Texas,48201,5,0\n"
        "2020-03-01,New York City,New York,,10,\n",
    ),
    "HarveyCounty": (
        "harveyco.csv",
        "date,kdhe_neg_results,kdhe_pos_results,harveyco_tot_results,"
        "harveyco_pos_results,harveyco_confirmed,harveyco_recovered\n"
        "2020-04-01,100,5,80,4,4,\n",
    ),
}


@pytest.fixture
def table_source_files(tmp_path):
    "Loader class name -> local copy of its source file"
    out = {}
    for name, (filename, text) in TABLE_SOURCE_FILES.items():
        path = tmp_path / filename
        path.write_text(text)
        out[name] = path
    return out
