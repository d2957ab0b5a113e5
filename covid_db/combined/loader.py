import dataclasses
import logging
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

import sqlalchemy as sa
from sqlalchemy.engine.base import Connection, Engine

from covid_db import dateutil
from covid_db.combined.gapfill import densify
from covid_db.combined.record import DailyRecord
from covid_db.combined.registry import LocationRecord, LocationRegistry
from covid_db.combined.row import SourceRow
from covid_db.combined.transform import transform
from covid_db.models import CDataSet, CDataSetLoc

_logger = logging.getLogger(__name__)

COMBINED_SOURCE = (
    "https://github.com/cipriancraciun/covid19-datasets/raw/master/"
    "exports/combined/v1/values-sqlite.db.gz"
)

INPUT_QUERY = "SELECT * FROM dataset ORDER BY dataset, location_key, date"


class CombinedSink:
    """
    Writes locations and daily records on one open connection

    Locations are inserted as soon as they are added. Daily records are
    buffered and inserted with ``executemany`` once `chunksize` of them
    are waiting, and on `flush`. Committing is left to the caller.
    """

    def __init__(self, con: Connection, chunksize: int = 5000):
        self.con = con
        self.chunksize = chunksize
        self.records_written = 0
        self._buffer: List[Dict[str, Any]] = []

    def last_locid(self) -> int:
        res = self.con.execute(sa.select(sa.func.max(CDataSetLoc.locid))).scalar()
        return res or 0

    def add_location(self, attributes: Dict[str, Any]) -> None:
        self.con.execute(CDataSetLoc.__table__.insert(), attributes)

    def add(self, record: DailyRecord) -> None:
        self._buffer.append(record.as_dict())
        if len(self._buffer) >= self.chunksize:
            self.flush()

    def flush(self) -> None:
        if not self._buffer:
            return
        self.con.execute(CDataSet.__table__.insert(), self._buffer)
        self.records_written += len(self._buffer)
        self._buffer = []


@dataclasses.dataclass(frozen=True)
class CombinedLoadSummary:
    input_records: int
    records_written: int
    locations_added: int

    @property
    def fill_records(self) -> int:
        return self.records_written - self.input_records


def run(
    rows: Iterable[Mapping[str, Any]],
    sink: CombinedSink,
    registry: LocationRegistry,
    fips_population: Dict[int, int],
    max_julian: int,
    total: Optional[int] = None,
    progress_every: int = 10000,
) -> CombinedLoadSummary:
    """
    Transform `rows`, fill the gaps in their series and write everything
    to `sink`

    `rows` must be ordered by dataset, location key and date. The sink
    is flushed before returning; any exception leaves the caller's
    transaction to be rolled back.
    """
    processed = 0

    def records() -> Iterator[DailyRecord]:
        nonlocal processed
        for row in rows:
            yield transform(SourceRow(row), registry, fips_population)
            processed += 1
            if progress_every and processed % progress_every == 0:
                _logger.info("Processed %d of %s input records", processed, total)

    for rec in densify(records(), max_julian):
        sink.add(rec)
    sink.flush()

    summary = CombinedLoadSummary(
        input_records=processed,
        records_written=sink.records_written,
        locations_added=registry.added,
    )
    _logger.info(
        "Processed %d of %s input records (%d location records also added, "
        "%d fill records)",
        summary.input_records,
        total,
        summary.locations_added,
        summary.fill_records,
    )
    return summary


def load_combined(
    input_engine: Engine,
    engine: Engine,
    known: Dict[str, LocationRecord],
    fips_population: Dict[int, int],
    progress_every: int = 10000,
    chunksize: int = 5000,
) -> CombinedLoadSummary:
    """
    Load the ``dataset`` table of the combined SQLite export into
    ``cdataset``, adding ``cdataset_loc`` rows for unknown locations

    Everything is written in a single transaction on `engine`: either
    the whole load is committed or, on any error, nothing is.

    Parameters
    ----------
    input_engine : Engine
        Engine for the decompressed combined export
    engine : Engine
        Engine for the database being loaded
    known : Dict[str, LocationRecord]
        Locations loaded from the combined locations file, by key
    fips_population : Dict[int, int]
        FIPS code to population map from the location lookup
    progress_every : int
        Log progress after this many input rows
    chunksize : int
        Number of daily records per ``executemany``

    Returns
    -------
    summary : CombinedLoadSummary
    """
    with input_engine.connect() as icon, engine.connect() as con:
        total = icon.execute(sa.text("SELECT COUNT(*) FROM dataset")).scalar()
        max_date = icon.execute(sa.text("SELECT MAX(date) FROM dataset")).scalar()
        if max_date is None:
            _logger.info("Combined dataset is empty, nothing to load")
            return CombinedLoadSummary(0, 0, 0)
        max_julian = dateutil.str_to_day(max_date)
        _logger.info("Loading %d combined records, last date %s", total, max_date)

        if engine.dialect.name == "sqlite":
            con.execute(sa.text("PRAGMA synchronous = OFF"))
            con.commit()

        with con.begin():
            sink = CombinedSink(con, chunksize=chunksize)
            registry = LocationRegistry(
                sink.add_location, known=known, last_locid=sink.last_locid()
            )
            result = icon.execution_options(stream_results=True).execute(
                sa.text(INPUT_QUERY)
            )
            rows = (row._mapping for row in result)
            summary = run(
                rows,
                sink,
                registry,
                fips_population,
                max_julian,
                total=total,
                progress_every=progress_every,
            )
            _logger.info("Committing...")

    return summary
