import pytest

from covid_db.combined.rates import rate_per_100k, resolve_population


def test_rate_from_count():
    assert rate_per_100k(None, 250, 500000) == 50.0


def test_explicit_rate_wins():
    assert rate_per_100k(12.5, 250, 500000) == 12.5
    assert rate_per_100k(12.5, 250, None) == 12.5
    assert rate_per_100k(0.0, 250, 500000) == 0.0


@pytest.mark.parametrize("population", [None, 0])
def test_no_population(population):
    assert rate_per_100k(None, 250, population) is None


def test_missing_count_is_zero():
    assert rate_per_100k(None, None, 1000) == 0.0


def test_rate_is_not_rounded():
    assert rate_per_100k(None, 1, 3) == pytest.approx(33333.333333)


def test_population_from_fips():
    assert resolve_population(None, 48201, {48201: 4713325}) == 4713325


def test_explicit_population_wins():
    assert resolve_population(1000, 48201, {48201: 4713325}) == 1000


@pytest.mark.parametrize("fips", [None, 1001])
def test_unknown_population(fips):
    assert resolve_population(None, fips, {48201: 4713325}) is None
