from covid_db.combined.gapfill import RecordOrderError, densify, fill_gap
from covid_db.combined.loader import (
    COMBINED_SOURCE,
    CombinedLoadSummary,
    CombinedSink,
    load_combined,
    run,
)
from covid_db.combined.rates import rate_per_100k, resolve_population
from covid_db.combined.record import DailyRecord
from covid_db.combined.registry import LocationRecord, LocationRegistry
from covid_db.combined.row import (
    InvalidDateError,
    MissingColumnError,
    SourceRow,
    SourceRowError,
)
from covid_db.combined.transform import transform
