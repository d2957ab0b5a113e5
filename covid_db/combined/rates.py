from typing import Dict, Optional

PER_100K = 100000.0


def resolve_population(
    explicit: Optional[int],
    fips: Optional[int],
    fips_population: Dict[int, int],
) -> Optional[int]:
    """Pick the population used as denominator for one row

    Args:
        explicit: Population carried by the row itself
        fips: County FIPS code of the row's location
        fips_population: Map of FIPS code to population
    Returns: `explicit` when set, else the population of `fips` when it
        is known, else None
    """
    if explicit is not None:
        return explicit
    if fips is not None:
        return fips_population.get(fips)
    return None


def rate_per_100k(
    explicit: Optional[float], count: Optional[int], population: Optional[int]
) -> Optional[float]:
    """Rate per 100,000 people

    An explicit rate wins. Otherwise the rate is computed from `count`
    (a missing count is 0) when there is a non-zero population, and is
    None when there is not.
    """
    if explicit is not None:
        return explicit
    if not population:
        return None
    return (count or 0) * PER_100K / population
