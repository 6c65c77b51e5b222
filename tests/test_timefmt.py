import pytest

from pedestal.timefmt import time_spent


def test_zero_duration():
    assert time_spent(1000, 1000) == "0秒"


def test_all_parts():
    assert time_spent(0, 3661) == "1时1分1秒"


def test_whole_minutes_omit_seconds():
    assert time_spent(100, 220) == "2分"


@pytest.mark.parametrize("start,stop", [(0, 59), (10, 7300), (5, 90000)])
def test_order_does_not_matter(start, stop):
    assert time_spent(start, stop) == time_spent(stop, start)


def test_zero_time_gives_empty():
    assert time_spent(-62135596800, 100) == ""
    assert time_spent(100, -62135596800) == ""