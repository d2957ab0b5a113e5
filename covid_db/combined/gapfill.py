"""
Gap filling for the per-location daily series of the combined dataset

Records arrive ordered by dataset, location and date. Whenever a series
skips days, or ends before the last date of the whole dataset, the
missing days are synthesized from the last record seen: cumulative
values repeat, deltas are zeroed and the day counters keep counting.
"""
from typing import Iterable, Iterator, Optional

from covid_db.combined.record import DailyRecord


class RecordOrderError(Exception):
    """Records of one series are not in strictly increasing date order"""

    pass


def fill_gap(
    last: Optional[DailyRecord], next_: Optional[DailyRecord], max_julian: int
) -> Iterator[DailyRecord]:
    """
    Yield the records for the days between `last` and `next_`

    When `next_` continues the series of `last`, days run up to the day
    before `next_`. When it starts another series, or is None at the end
    of the input, days run up to `max_julian`. Nothing is yielded when
    `last` is None.
    """
    if last is None:
        return
    if next_ is not None and next_.series() == last.series():
        until = next_.date_julian - 1
    else:
        until = max_julian

    for days, julian in enumerate(range(last.date_julian + 1, until + 1), start=1):
        rec = last.dup_day()
        rec.set_date(julian)
        rec.advance_day_indexes(days)
        yield rec


def densify(records: Iterable[DailyRecord], max_julian: int) -> Iterator[DailyRecord]:
    """
    Yield every record of `records`, each preceded by the fill records
    for the days its series skipped, and end with the fill of the last
    series up to `max_julian`

    Raises
    ------
    RecordOrderError
        When a record does not come strictly after the previous record of
        the same series
    """
    last = None
    for rec in records:
        if (
            last is not None
            and rec.series() == last.series()
            and rec.date_julian <= last.date_julian
        ):
            raise RecordOrderError(
                f"Record for {rec.dataset} locid {rec.locid} on {rec.date} "
                f"does not follow {last.date}"
            )
        yield from fill_gap(last, rec, max_julian)
        yield rec
        last = rec
    yield from fill_gap(last, None, max_julian)
