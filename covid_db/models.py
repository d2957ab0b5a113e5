from typing import Tuple

import sqlalchemy as sa
from sqlalchemy import (
    BigInteger,
    Column,
    Float,
    Integer,
    String,
    Table,
)
from sqlalchemy.engine.base import Engine
from sqlalchemy.ext import compiler
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.sql.ddl import DDLElement
from sqlalchemy.sql.expression import select
from sqlalchemy.sql.schema import PrimaryKeyConstraint
from sqlalchemy_utils.view import DropView, create_table_from_selectable

SCHEMA_VERSION = (2, 0)

Base = declarative_base()


class CreateView(DDLElement):
    def __init__(self, name, selectable, or_replace=False):
        self.name = name
        self.selectable = selectable
        self.or_replace = or_replace


@compiler.compiles(CreateView, "sqlite")
def compile_create_view_sqlite(element, compiler, **kw):
    return "CREATE VIEW {r}{n} AS {s}".format(
        r="IF NOT EXISTS " if element.or_replace else "",
        n=element.name,
        s=compiler.sql_compiler.process(element.selectable, literal_binds=True),
    )


@compiler.compiles(CreateView)
def compile_create_view(element, compiler, **kw):
    return "CREATE {r}VIEW {n} AS {s}".format(
        r="OR REPLACE " if element.or_replace else "",
        n=element.name,
        s=compiler.sql_compiler.process(element.selectable, literal_binds=True),
    )


def create_view(name, selectable, metadata, or_replace=False, cascade_on_drop=False):
    """
    Register a view on `metadata` so that it is created after, and
    dropped before, the tables it selects from.

    SQLite has no ``DROP VIEW ... CASCADE``, so `cascade_on_drop` is
    off by default.
    """
    table = create_table_from_selectable(
        name=name, selectable=selectable, metadata=None
    )
    sa.event.listen(metadata, "after_create", CreateView(name, selectable, or_replace))
    sa.event.listen(metadata, "before_drop", DropView(name, cascade=cascade_on_drop))
    return table


class SchemaVersion(Base):
    __tablename__ = "covid19schema"
    version = Column(Integer, primary_key=True)
    minorversion = Column(Integer, nullable=False)


class LocLookup(Base):
    """
    Johns Hopkins CSSE UID/ISO/FIPS lookup table

    https://github.com/CSSEGISandData/COVID-19/blob/master/csse_covid_19_data/UID_ISO_FIPS_LookUp_Table.csv
    """

    __tablename__ = "loc_lookup"
    uid = Column(BigInteger, primary_key=True)
    iso2 = Column(String, nullable=False)
    iso3 = Column(String, nullable=False)
    code3 = Column(Integer)
    fips = Column(Integer, index=True)
    admin2 = Column(String)
    province_state = Column(String)
    country_region = Column(String, nullable=False)
    latitude = Column(Float)
    longitude = Column(Float)
    combined_key = Column(String, nullable=False)
    population = Column(BigInteger)


class CDataSetLoc(Base):
    "Location attributes for the combined dataset, one row per location key"

    __tablename__ = "cdataset_loc"
    locid = Column(Integer, primary_key=True, autoincrement=False)
    location_type = Column(String, nullable=False)
    location_label = Column(String, nullable=False)
    country_code = Column(String, nullable=False)
    country = Column(String, nullable=False)
    province = Column(String, nullable=False)
    administrative = Column(String, nullable=False)
    region = Column(String, nullable=False)
    subregion = Column(String, nullable=False)
    us_state_code = Column(String, nullable=False)
    us_state_name = Column(String, nullable=False)
    us_county_fips = Column(Integer)


class CDataSet(Base):
    """
    One row per (dataset, location, day) from the combined dataset

    https://github.com/cipriancraciun/covid19-datasets
    """

    __tablename__ = "cdataset"
    dataset = Column(String, nullable=False)
    locid = Column(Integer, nullable=False)
    location_lat = Column(Float)
    location_long = Column(Float)
    date = Column(String, nullable=False)
    date_julian = Column(Integer, nullable=False)
    date_year = Column(Integer, nullable=False)
    date_month = Column(Integer, nullable=False)
    date_day = Column(Integer, nullable=False)
    day_index_0 = Column(Integer, nullable=False)
    day_index_1 = Column(Integer, nullable=False)
    day_index_10 = Column(Integer)
    day_index_100 = Column(Integer)
    day_index_1k = Column(Integer)
    day_index_10k = Column(Integer)
    day_index_peak = Column(Integer)
    day_index_peak_confirmed = Column(Integer)
    day_index_peak_deaths = Column(Integer)
    absolute_confirmed = Column(BigInteger, nullable=False)
    absolute_deaths = Column(BigInteger, nullable=False)
    absolute_recovered = Column(BigInteger, nullable=False)
    absolute_infected = Column(BigInteger, nullable=False)
    absolute_pop100k_confirmed = Column(Float)
    absolute_pop100k_deaths = Column(Float)
    absolute_pop100k_recovered = Column(Float)
    absolute_pop100k_infected = Column(Float)
    relative_deaths = Column(Float)
    relative_recovered = Column(Float)
    relative_infected = Column(Float)
    delta_confirmed = Column(BigInteger, nullable=False)
    delta_deaths = Column(BigInteger, nullable=False)
    delta_recovered = Column(BigInteger, nullable=False)
    delta_infected = Column(BigInteger, nullable=False)
    delta_pct_confirmed = Column(Float)
    delta_pct_deaths = Column(Float)
    delta_pct_recovered = Column(Float)
    delta_pct_infected = Column(Float)
    delta_pop100k_confirmed = Column(Float)
    delta_pop100k_deaths = Column(Float)
    delta_pop100k_recovered = Column(Float)
    delta_pop100k_infected = Column(Float)
    peak_pct_confirmed = Column(Float)
    peak_pct_deaths = Column(Float)
    peak_pct_recovered = Column(Float)
    peak_pct_infected = Column(Float)
    factbook_area = Column(Float)
    factbook_population = Column(BigInteger)
    factbook_death_rate = Column(Float)
    factbook_median_age = Column(Float)

    __table_args__ = (
        PrimaryKeyConstraint(
            "dataset", "locid", "date_julian", name="cdataset_uniq_idx"
        ),
    )


cdataset_view_statement = select(
    CDataSet.__table__,
    CDataSetLoc.location_type,
    CDataSetLoc.location_label,
    CDataSetLoc.country_code,
    CDataSetLoc.country,
    CDataSetLoc.province,
    CDataSetLoc.administrative,
    CDataSetLoc.region,
    CDataSetLoc.subregion,
    CDataSetLoc.us_state_code,
    CDataSetLoc.us_state_name,
    CDataSetLoc.us_county_fips,
).select_from(
    CDataSet.__table__.join(
        CDataSetLoc.__table__, CDataSet.locid == CDataSetLoc.locid, isouter=True
    )
)

cdataset_view = create_view(
    "cdataset_view", cdataset_view_statement, Base.metadata, or_replace=True
)


class CovidTracking(Base):
    "COVID Tracking Project state-level daily testing data"

    __tablename__ = "covidtracking"
    date_julian = Column(Integer, nullable=False)
    date = Column(String, nullable=False)
    state = Column(String, nullable=False)
    state_fips = Column(Integer)
    positive = Column(BigInteger)
    probable_cases = Column(BigInteger)
    negative = Column(BigInteger)
    pending = Column(BigInteger)
    total_test_results = Column(BigInteger)
    hospitalized_currently = Column(BigInteger)
    hospitalized_cumulative = Column(BigInteger)
    in_icu_currently = Column(BigInteger)
    in_icu_cumulative = Column(BigInteger)
    on_ventilator_currently = Column(BigInteger)
    on_ventilator_cumulative = Column(BigInteger)
    recovered = Column(BigInteger)
    death = Column(BigInteger)
    hospitalized = Column(BigInteger)
    total_tests_viral = Column(BigInteger)
    positive_tests_viral = Column(BigInteger)
    negative_tests_viral = Column(BigInteger)
    positive_cases_viral = Column(BigInteger)
    death_confirmed = Column(BigInteger)
    death_probable = Column(BigInteger)
    positive_increase = Column(BigInteger)
    negative_increase = Column(BigInteger)
    total_test_results_increase = Column(BigInteger)
    death_increase = Column(BigInteger)
    hospitalized_increase = Column(BigInteger)

    __table_args__ = (PrimaryKeyConstraint("state", "date_julian"),)


# Our World In Data publishes a wide, frequently growing table of
# floats. Only the columns below are kept.
OWID_TEXT_COLUMNS = ["iso_code", "continent", "location", "date", "tests_units"]
OWID_NUMERIC_COLUMNS = [
    "total_cases",
    "new_cases",
    "new_cases_smoothed",
    "total_deaths",
    "new_deaths",
    "new_deaths_smoothed",
    "total_cases_per_million",
    "new_cases_per_million",
    "new_cases_smoothed_per_million",
    "total_deaths_per_million",
    "new_deaths_per_million",
    "new_deaths_smoothed_per_million",
    "reproduction_rate",
    "icu_patients",
    "icu_patients_per_million",
    "hosp_patients",
    "hosp_patients_per_million",
    "weekly_icu_admissions",
    "weekly_icu_admissions_per_million",
    "weekly_hosp_admissions",
    "weekly_hosp_admissions_per_million",
    "new_tests",
    "total_tests",
    "total_tests_per_thousand",
    "new_tests_per_thousand",
    "new_tests_smoothed",
    "new_tests_smoothed_per_thousand",
    "positive_rate",
    "tests_per_case",
    "total_vaccinations",
    "people_vaccinated",
    "people_fully_vaccinated",
    "new_vaccinations",
    "new_vaccinations_smoothed",
    "total_vaccinations_per_hundred",
    "people_vaccinated_per_hundred",
    "people_fully_vaccinated_per_hundred",
    "new_vaccinations_smoothed_per_million",
    "stringency_index",
    "population",
    "population_density",
    "median_age",
    "aged_65_older",
    "aged_70_older",
    "gdp_per_capita",
    "extreme_poverty",
    "cardiovasc_death_rate",
    "diabetes_prevalence",
    "female_smokers",
    "male_smokers",
    "handwashing_facilities",
    "hospital_beds_per_thousand",
    "life_expectancy",
    "human_development_index",
]

owid_table = Table(
    "owid",
    Base.metadata,
    Column("date_julian", Integer, nullable=False),
    *[Column(name, String) for name in OWID_TEXT_COLUMNS],
    *[Column(name, Float) for name in OWID_NUMERIC_COLUMNS],
    PrimaryKeyConstraint("location", "date_julian"),
)


class OWID(Base):
    __table__ = owid_table


class RTLive(Base):
    "rt.live effective reproduction number estimates per state"

    __tablename__ = "rtlive"
    date = Column(String, nullable=False)
    date_julian = Column(Integer, nullable=False)
    date_year = Column(Integer, nullable=False)
    date_month = Column(Integer, nullable=False)
    date_day = Column(Integer, nullable=False)
    state = Column(String, nullable=False)
    state_fips = Column(Integer)
    rtindex = Column(Integer, nullable=False)
    mean = Column(Float, nullable=False)
    median = Column(Float, nullable=False)
    lower_80 = Column(Float, nullable=False)
    upper_80 = Column(Float, nullable=False)
    infections = Column(Float, nullable=False)
    test_adjusted_positive = Column(Float, nullable=False)
    test_adjusted_positive_raw = Column(Float, nullable=False)
    positive = Column(BigInteger, nullable=False)
    tests = Column(BigInteger, nullable=False)
    new_tests = Column(BigInteger)
    new_cases = Column(BigInteger)
    new_deaths = Column(BigInteger)

    __table_args__ = (PrimaryKeyConstraint("state", "date_julian"),)


class NYTCounties(Base):
    __tablename__ = "nytcounties_raw"
    date_julian = Column(Integer, nullable=False)
    county = Column(String, nullable=False)
    state = Column(String, nullable=False)
    fips = Column(Integer, index=True)
    cases = Column(BigInteger, nullable=False)
    deaths = Column(BigInteger)

    __table_args__ = (PrimaryKeyConstraint("date_julian", "state", "county"),)


class HarveyCoData(Base):
    "Test and case counts for Harvey County, Kansas"

    __tablename__ = "harveycodata_raw"
    date_julian = Column(Integer, primary_key=True, autoincrement=False)
    kdhe_neg_results = Column(BigInteger)
    kdhe_pos_results = Column(BigInteger)
    harveyco_tot_results = Column(BigInteger)
    harveyco_pos_results = Column(BigInteger)
    harveyco_confirmed = Column(BigInteger)
    harveyco_recovered = Column(BigInteger)


def initdb(engine: Engine) -> None:
    """Drop every table and view of this project, then re-create them

    This empties the database and readies it to receive a fresh load.
    """
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    with engine.begin() as con:
        con.execute(
            SchemaVersion.__table__.insert(),
            {"version": SCHEMA_VERSION[0], "minorversion": SCHEMA_VERSION[1]},
        )


def create_dev_engine(
    verbose: bool = True, path: str = "/:memory:"
) -> Tuple[Engine, sessionmaker]:
    """Create an in memory sqlite version of the database for testing

    Args:
        verbose (bool, optional): Whether or not to print all executed
                                  SQL statements to stdout. Defaults to True.
        path (str, optional): Path or location for sqlite database.
                              Defaults to "/:memory:", which means the database
                              will live in the Python session memory

    Returns:
        Tuple[Engine, sessionmaker]: SQLAlchemy engine and sessionmaker instance
    """
    engine = sa.create_engine(f"sqlite://{path}", echo=verbose)
    Session = sessionmaker(bind=engine)
    initdb(engine)

    return engine, Session
