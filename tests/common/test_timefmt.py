from __future__ import annotations

import pytest

from src.hr_backend.hr_backend.common.timefmt import format_minutes, parse_hhmm


@pytest.mark.parametrize(
    "minutes, expected",
    [(0, "00:00"), (5, "00:05"), (59, "00:59"), (60, "01:00"), (510, "08:30"), (1439, "23:59"), (6000, "100:00")],
)
def test_format_minutes(minutes, expected):
    assert format_minutes(minutes) == expected


def test_format_and_parse_are_inverse():
    for m in range(0, 10000):
        assert parse_hhmm(format_minutes(m)) == m


@pytest.mark.parametrize("bad", [-1, 1.5, "60", None, True])
def test_format_minutes_rejects_non_counts(bad):
    with pytest.raises(ValueError):
        format_minutes(bad)


@pytest.mark.parametrize("bad", ["", "8", "08:60", "ab:cd", "08:30:00", "-1:00"])
def test_parse_hhmm_rejects_malformed(bad):
    with pytest.raises(ValueError):
        parse_hhmm(bad)
