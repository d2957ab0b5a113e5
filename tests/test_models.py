import dataclasses

import pytest
import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError

from covid_db.combined.record import DailyRecord
from covid_db.models import (
    SCHEMA_VERSION,
    CDataSet,
    SchemaVersion,
    create_dev_engine,
    initdb,
)

engine, Session = create_dev_engine(verbose=False)


def test_schema_version():
    with Session() as sess:
        version = sess.query(SchemaVersion).one()
    assert (version.version, version.minorversion) == SCHEMA_VERSION


def test_tables_and_view():
    inspector = sa.inspect(engine)
    tables = set(inspector.get_table_names())
    assert {
        "covid19schema",
        "loc_lookup",
        "cdataset_loc",
        "cdataset",
        "covidtracking",
        "owid",
        "rtlive",
        "nytcounties_raw",
        "harveycodata_raw",
    } <= tables
    assert "cdataset_view" in inspector.get_view_names()


def test_initdb_empties_tables(tmp_path):
    eng = sa.create_engine(f"sqlite:///{tmp_path / 'covid19.db'}")
    initdb(eng)
    record = DailyRecord.for_day("jhu-daily", 1, 2458910)
    with eng.begin() as con:
        con.execute(CDataSet.__table__.insert(), record.as_dict())
    initdb(eng)
    with eng.connect() as con:
        assert con.execute(sa.text("SELECT COUNT(*) FROM cdataset")).scalar() == 0
        rows = con.execute(sa.text("SELECT COUNT(*) FROM covid19schema")).scalar()
        assert rows == 1
    eng.dispose()


def test_daily_record_matches_table():
    fields = {f.name for f in dataclasses.fields(DailyRecord)}
    assert fields == {c.name for c in CDataSet.__table__.columns}


def test_unique_day():
    record = DailyRecord.for_day("unique-test", 1, 2458910)
    with pytest.raises(IntegrityError):
        with engine.begin() as con:
            con.execute(CDataSet.__table__.insert(), [record.as_dict()] * 2)
