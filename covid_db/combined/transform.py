from typing import Dict

from covid_db.combined.rates import rate_per_100k, resolve_population
from covid_db.combined.record import (
    METRICS,
    OPTIONAL_DAY_INDEX_COLUMNS,
    DailyRecord,
)
from covid_db.combined.registry import LocationRegistry
from covid_db.combined.row import SourceRow

# Nullable columns copied as they are
PASSTHROUGH_FLOAT_COLUMNS = (
    ["location_lat", "location_long"]
    + [f"relative_{m}" for m in ("deaths", "recovered", "infected")]
    + [f"delta_pct_{m}" for m in METRICS]
    + [f"peak_pct_{m}" for m in METRICS]
    + ["factbook_area", "factbook_death_rate", "factbook_median_age"]
)


def transform(
    row: SourceRow, registry: LocationRegistry, fips_population: Dict[int, int]
) -> DailyRecord:
    """
    Turn one row of the combined dataset into a `DailyRecord`

    The location key is resolved through `registry`, which may create a
    new location. Population is the row's ``factbook_population`` when
    present and otherwise the population of the location's FIPS code.
    Per 100k rates missing from the row are computed from that one
    population.

    Raises
    ------
    SourceRowError
        When an identity column is null or the date parts are not a date
    """
    dataset = str(row.require("dataset"))
    key = str(row.require("location_key"))
    julian = row.date_julian()
    locrec = registry.resolve(key, row)

    population = resolve_population(
        row.get_int("factbook_population"), locrec.fips, fips_population
    )

    values = {
        "day_index_0": row.get_int("day_index_0", 0),
        "day_index_1": row.get_int("day_index_1", 0),
        "factbook_population": population,
    }
    for col in OPTIONAL_DAY_INDEX_COLUMNS:
        values[col] = row.get_int(col)
    for col in PASSTHROUGH_FLOAT_COLUMNS:
        values[col] = row.get_float(col)
    for family in ("absolute", "delta"):
        for m in METRICS:
            count = row.get_int(f"{family}_{m}", 0)
            values[f"{family}_{m}"] = count
            values[f"{family}_pop100k_{m}"] = rate_per_100k(
                row.get_float(f"{family}_pop100k_{m}"), count, population
            )

    return DailyRecord.for_day(dataset, locrec.locid, julian, **values)
