import sqlalchemy as sa
from click.testing import CliRunner

from covid_db import TABLE_LOADERS
from covid_db.main import main


def test_init_db(tmp_path):
    db = tmp_path / "covid19.db"
    res = CliRunner().invoke(main, ["init-db", "--db-url", f"sqlite:///{db}"])
    assert res.exit_code == 0, res.output
    assert db.exists()


def test_load_combined(
    tmp_path, combined_input, combined_row, loc_lookup_csv, locations_tsv
):
    combined_input(
        [
            combined_row("US_TX_Harris", "2020-03-01", absolute_confirmed=5),
            combined_row("US_TX_Harris", "2020-03-03", absolute_confirmed=9),
            combined_row("XX_New", "2020-03-02", absolute_confirmed=1),
        ]
    )
    db = tmp_path / "covid19.db"
    res = CliRunner().invoke(
        main,
        [
            "load-combined",
            "--db-url",
            f"sqlite:///{db}",
            "--combined-db",
            str(tmp_path / "values-sqlite.db"),
            "--loc-lookup",
            str(loc_lookup_csv),
            "--locations",
            str(locations_tsv),
        ],
    )
    assert res.exit_code == 0, res.output
    assert "Loaded 5 combined records (2 filled, 1 new locations)" in res.output

    engine = sa.create_engine(f"sqlite:///{db}")
    with engine.connect() as con:
        rows = con.execute(
            sa.text(
                "SELECT locid, date, factbook_population FROM cdataset_view "
                "ORDER BY locid, date_julian"
            )
        ).all()
    engine.dispose()
    assert rows == [
        (1, "2020-03-01", 4713325),
        (1, "2020-03-02", 4713325),
        (1, "2020-03-03", 4713325),
        (3, "2020-03-02", None),
        (3, "2020-03-03", None),
    ]


def test_load(
    tmp_path,
    monkeypatch,
    combined_input,
    combined_row,
    loc_lookup_csv,
    locations_tsv,
    table_source_files,
):
    for cls in TABLE_LOADERS:
        monkeypatch.setattr(cls, "source", str(table_source_files[cls.__name__]))
    combined_input(
        [
            combined_row("US_TX_Harris", "2020-03-01", absolute_confirmed=5),
            combined_row("US_TX_Harris", "2020-03-03", absolute_confirmed=9),
            combined_row("XX_New", "2020-03-02", absolute_confirmed=1),
        ]
    )
    db = tmp_path / "covid19.db"
    res = CliRunner().invoke(
        main,
        [
            "load",
            "--db-url",
            f"sqlite:///{db}",
            "--combined-db",
            str(tmp_path / "values-sqlite.db"),
            "--loc-lookup",
            str(loc_lookup_csv),
            "--locations",
            str(locations_tsv),
            "--harveyco",
            str(table_source_files["HarveyCounty"]),
        ],
    )
    assert res.exit_code == 0, res.output

    engine = sa.create_engine(f"sqlite:///{db}")
    with engine.connect() as con:
        counts = {
            table: con.execute(sa.text(f"SELECT COUNT(*) FROM {table}")).scalar()
            for table in [
                "covid19schema",
                "loc_lookup",
                "covidtracking",
                "owid",
                "rtlive",
                "nytcounties_raw",
                "harveycodata_raw",
                "cdataset_loc",
                "cdataset",
            ]
        }
    engine.dispose()
    assert counts == {
        "covid19schema": 1,
        "loc_lookup": 5,
        "covidtracking": 2,
        "owid": 2,
        "rtlive": 1,
        "nytcounties_raw": 2,
        "harveycodata_raw": 1,
        "cdataset_loc": 3,
        "cdataset": 5,
    }
