"""
Command line entry point: ``covid-db``
"""
import logging
import tempfile
from pathlib import Path
from typing import Optional

import click
import sqlalchemy as sa
from sqlalchemy.engine.base import Engine

from covid_db import TABLE_LOADERS, loaders
from covid_db.combined import COMBINED_SOURCE, load_combined
from covid_db.loaders.util import download_to, gunzip
from covid_db.models import initdb

_logger = logging.getLogger(__name__)

db_url_option = click.option(
    "--db-url",
    envvar="COVID_DB_URL",
    default="sqlite:///covid19.db",
    show_default=True,
    help="SQLAlchemy URL of the database to load",
)
progress_option = click.option(
    "--progress-every",
    type=int,
    default=10000,
    show_default=True,
    help="Log progress of the combined load after this many input rows",
)
chunksize_option = click.option(
    "--chunksize",
    type=int,
    default=5000,
    show_default=True,
    help="Combined dataset rows per insert batch",
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug messages")
def main(verbose: bool):
    logging.basicConfig(
        format="%(message)s", level=logging.DEBUG if verbose else logging.INFO
    )


def _housekeeping(engine: Engine) -> None:
    if engine.dialect.name != "sqlite":
        return
    _logger.info("Vacuuming and optimizing the database")
    with engine.connect().execution_options(isolation_level="AUTOCOMMIT") as con:
        con.execute(sa.text("VACUUM"))
        con.execute(sa.text("PRAGMA optimize"))


def _load_combined_steps(
    engine: Engine,
    loc_lookup: Optional[str],
    locations: Optional[str],
    combined_db: Path,
    progress_every: int,
    chunksize: int,
) -> None:
    fips_population = loaders.LocationLookup(loc_lookup).load_fips_population(engine)
    known = loaders.CombinedLocations(locations).load_known_locations(
        engine, fips_population
    )
    input_engine = sa.create_engine(f"sqlite:///{combined_db}")
    try:
        summary = load_combined(
            input_engine,
            engine,
            known,
            fips_population,
            progress_every=progress_every,
            chunksize=chunksize,
        )
    finally:
        input_engine.dispose()
    click.echo(
        f"Loaded {summary.records_written} combined records "
        f"({summary.fill_records} filled, "
        f"{summary.locations_added} new locations)"
    )


@main.command()
@db_url_option
def init_db(db_url: str):
    "Drop and recreate every table of the database"
    initdb(sa.create_engine(db_url))
    click.echo(f"Initialized {db_url}")


@main.command()
@db_url_option
@click.option(
    "--data-path",
    envvar="COVID_DB_DATAPATH",
    type=click.Path(file_okay=False),
    help="Directory for downloaded files. A temporary directory if unset",
)
@click.option("--combined-db", type=click.Path(exists=True, dir_okay=False))
@click.option("--loc-lookup", type=click.Path(exists=True, dir_okay=False))
@click.option("--locations", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--harveyco",
    type=click.Path(exists=True, dir_okay=False),
    help="Harvey County CSV. Skipped when not given",
)
@progress_option
@chunksize_option
def load(
    db_url: str,
    data_path: Optional[str],
    combined_db: Optional[str],
    loc_lookup: Optional[str],
    locations: Optional[str],
    harveyco: Optional[str],
    progress_every: int,
    chunksize: int,
):
    "Reinitialize the database and load every source into it"
    engine = sa.create_engine(db_url)
    initdb(engine)

    for cls in TABLE_LOADERS:
        cls().load(engine)
    if harveyco:
        loaders.HarveyCounty(harveyco).load(engine)

    with tempfile.TemporaryDirectory() as tmp:
        if combined_db is None:
            workdir = Path(data_path or tmp)
            workdir.mkdir(parents=True, exist_ok=True)
            gz = download_to(COMBINED_SOURCE, workdir / "values-sqlite.db.gz")
            combined_db = gunzip(gz, workdir / "values-sqlite.db")
        _load_combined_steps(
            engine, loc_lookup, locations, Path(combined_db), progress_every, chunksize
        )

    _housekeeping(engine)
    engine.dispose()


@main.command("load-combined")
@db_url_option
@click.option(
    "--combined-db", type=click.Path(exists=True, dir_okay=False), required=True
)
@click.option(
    "--loc-lookup", type=click.Path(exists=True, dir_okay=False), required=True
)
@click.option(
    "--locations", type=click.Path(exists=True, dir_okay=False), required=True
)
@progress_option
@chunksize_option
def load_combined_files(
    db_url: str,
    combined_db: str,
    loc_lookup: str,
    locations: str,
    progress_every: int,
    chunksize: int,
):
    "Reinitialize the database and load the combined dataset from local files"
    engine = sa.create_engine(db_url)
    initdb(engine)
    _load_combined_steps(
        engine, loc_lookup, locations, Path(combined_db), progress_every, chunksize
    )
    _housekeeping(engine)
    engine.dispose()


if __name__ == "__main__":
    main()
