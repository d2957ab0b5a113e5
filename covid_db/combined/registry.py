import dataclasses
import logging
from typing import Any, Callable, Dict, Optional

from covid_db.combined.row import SourceRow

_logger = logging.getLogger(__name__)

# Text attributes copied from the first row seen for a new location.
# cdataset_loc declares them NOT NULL, so missing values become "".
LOCATION_ATTRIBUTE_COLUMNS = [
    "location_type",
    "location_label",
    "country_code",
    "country",
    "province",
    "administrative",
    "region",
    "subregion",
]


@dataclasses.dataclass(frozen=True)
class LocationRecord:
    """
    A location of the combined dataset

    `population` is the FIPS lookup result for `fips`, kept so callers
    can report it without the lookup map. Row population is resolved
    from `fips` by the transform.
    """

    locid: int
    fips: Optional[int] = None
    population: Optional[int] = None


class LocationRegistry:
    """
    Map location keys of the combined dataset to `locid` values

    Parameters
    ----------
    writer : Callable[[Dict[str, Any]], None]
        Called once with the ``cdataset_loc`` row of every new location
    known : Dict[str, LocationRecord], optional
        Locations that already exist, keyed by location key. The
        registry adds the locations it creates to this dict
    last_locid : int
        Highest `locid` already in use. New ids continue from here
    """

    def __init__(
        self,
        writer: Callable[[Dict[str, Any]], None],
        known: Optional[Dict[str, LocationRecord]] = None,
        last_locid: int = 0,
    ):
        self.writer = writer
        self.known = known if known is not None else {}
        self.last_locid = last_locid
        self.added = 0

    def resolve(self, key: str, row: SourceRow) -> LocationRecord:
        rec = self.known.get(key)
        if rec is not None:
            return rec

        self.last_locid += 1
        attributes = {c: row.get_str(c) for c in LOCATION_ATTRIBUTE_COLUMNS}
        attributes.update(
            locid=self.last_locid,
            us_state_code="",
            us_state_name="",
            us_county_fips=None,
        )
        self.writer(attributes)
        _logger.debug("New location %s assigned locid %d", key, self.last_locid)

        # No FIPS code or population for locations first seen here
        rec = LocationRecord(locid=self.last_locid)
        self.known[key] = rec
        self.added += 1
        return rec
