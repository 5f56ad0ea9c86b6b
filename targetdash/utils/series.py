"""Observed-versus-unobserved helpers.

A ``None`` entry means "not yet observed" and is never folded into a sum as 0.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

MONTHS = 12


def observed(value: float | int | None) -> float | None:
    if value is None:
        return None
    number = float(value)
    if math.isnan(number):
        return None
    return number


def empty_series(length: int = MONTHS) -> list[float | None]:
    return [None] * length


def sum_observed(values: Iterable[float | None]) -> float | None:
    total = 0.0
    seen = False
    for value in values:
        number = observed(value)
        if number is None:
            return None
        total += number
        seen = True
    return total if seen else None


def sum_present(values: Iterable[float | None]) -> float:
    return sum(number for number in (observed(value) for value in values) if number is not None)


def cumulative(values: Sequence[float | None]) -> list[float | None]:
    out: list[float | None] = []
    running = 0.0
    broken = False
    for value in values:
        number = observed(value)
        if broken or number is None:
            broken = True
            out.append(None)
            continue
        running += number
        out.append(running)
    return out


def decumulate(values: Sequence[float | None]) -> list[float | None]:
    out: list[float | None] = []
    for index, value in enumerate(values):
        previous = values[index - 1] if index > 0 else 0.0
        if value is None or previous is None:
            out.append(None)
        else:
            out.append(value - previous)
    return out


def has_twelve(values: Sequence[object] | None) -> bool:
    return values is not None and len(values) == MONTHS


def length(values: Sequence[object] | None) -> int:
    return 0 if values is None else len(values)
