import math

import pytest

from targetdash.models.enums import ProgressMode
from targetdash.utils.decimal_math import money, whole
from targetdash.utils.series import cumulative, decumulate, has_twelve, observed, sum_observed, sum_present


def test_observed_treats_nan_as_missing() -> None:
    assert observed(None) is None
    assert observed(math.nan) is None
    assert observed(3) == 3.0


def test_sums_never_fold_missing_into_zero() -> None:
    assert sum_observed([1.0, 2.0]) == 3
    assert sum_observed([1.0, None]) is None
    assert sum_observed([]) is None
    assert sum_present([1.0, None, math.nan, 2.0]) == 3


def test_cumulative_and_back() -> None:
    running = cumulative([1.0, 2.0, None, 4.0])
    assert running == [1.0, 3.0, None, None]
    assert decumulate(running) == [1.0, 2.0, None, None]


def test_has_twelve() -> None:
    assert has_twelve([0] * 12) is True
    assert has_twelve([0] * 11) is False
    assert has_twelve(None) is False


@pytest.mark.parametrize(
    ("value", "expected_money", "expected_whole"),
    [
        (2.675, 2.68, 3.0),
        ("0.005", 0.01, 0.0),
        (-1.5, -1.5, -2.0),
    ],
)
def test_half_up_rounding(value, expected_money: float, expected_whole: float) -> None:
    assert money(value) == expected_money
    assert whole(value) == expected_whole


def test_progress_mode_aliases() -> None:
    assert ProgressMode("2025-actual") is ProgressMode.prior_year_actual
    assert ProgressMode("actual2025") is ProgressMode.prior_year_actual
    with pytest.raises(ValueError):
        ProgressMode("quarterly")
