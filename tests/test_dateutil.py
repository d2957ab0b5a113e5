import datetime

import pytest

from covid_db import dateutil


@pytest.mark.parametrize(
    "nd,day",
    [
        (datetime.date(2015, 3, 14), 2457096),
        (datetime.date(2020, 1, 1), 2458850),
        (datetime.date(2020, 3, 1), 2458910),
    ],
)
def test_nd_to_day(nd, day):
    assert dateutil.nd_to_day(nd) == day
    assert dateutil.day_to_nd(day) == nd


def test_leap_day():
    day = dateutil.ymd_to_day(2020, 2, 29)
    assert dateutil.day_to_ymd(day + 1) == (2020, 3, 1)
    assert dateutil.day_to_str(day) == "2020-02-29"


def test_invalid_ymd():
    with pytest.raises(ValueError):
        dateutil.ymd_to_day(2020, 2, 30)


def test_str_to_day():
    assert dateutil.str_to_day("2015-03-14") == 2457096
    assert dateutil.str_to_day("20150314", "%Y%m%d") == 2457096
    with pytest.raises(ValueError):
        dateutil.str_to_day("2015-14-03")
