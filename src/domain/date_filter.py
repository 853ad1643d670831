from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable

from domain.errors import ConfigurationError
from domain.reward import Quarter, RewardRecord

_QUARTER_ALIASES = {
    "q1": Quarter.Q1,
    "1": Quarter.Q1,
    "q2": Quarter.Q2,
    "2": Quarter.Q2,
    "q3": Quarter.Q3,
    "3": Quarter.Q3,
    "q4": Quarter.Q4,
    "4": Quarter.Q4,
    "all": Quarter.ALL,
}

# Inclusive (month, day) bounds.
_QUARTER_BOUNDS = {
    Quarter.Q1: ((1, 1), (3, 31)),
    Quarter.Q2: ((4, 1), (6, 30)),
    Quarter.Q3: ((7, 1), (9, 30)),
    Quarter.Q4: ((10, 1), (12, 31)),
    Quarter.ALL: ((1, 1), (12, 31)),
}


def parse_quarter(raw: str | int | Quarter) -> Quarter:
    if isinstance(raw, Quarter):
        return raw
    quarter = _QUARTER_ALIASES.get(str(raw).strip().lower())
    if quarter is None:
        raise ConfigurationError(f"Invalid quarter: {raw!r} (expected q1-q4 or all)")
    return quarter


@dataclass(frozen=True)
class DateScope:
    """Year/quarter window a reward must fall into.

    A scope without a year only makes sense for the whole year selector and
    then matches everything.
    """

    year: int | None = None
    quarter: Quarter = Quarter.ALL

    def __post_init__(self) -> None:
        if self.year is None and self.quarter != Quarter.ALL:
            raise ConfigurationError(f"A year is required when filtering by quarter {self.quarter}")
        if self.year is not None and not 1000 <= self.year <= 9999:
            raise ConfigurationError(f"Invalid year: {self.year}")

    @property
    def start(self) -> date | None:
        if self.year is None:
            return None
        month, day = _QUARTER_BOUNDS[self.quarter][0]
        return date(self.year, month, day)

    @property
    def end(self) -> date | None:
        if self.year is None:
            return None
        month, day = _QUARTER_BOUNDS[self.quarter][1]
        return date(self.year, month, day)

    def contains(self, timestamp: datetime) -> bool:
        if self.start is None or self.end is None:
            return True
        return self.start <= timestamp.date() <= self.end


def in_scope(year: int | None, quarter: str | int | Quarter, timestamp: datetime) -> bool:
    return DateScope(year=year, quarter=parse_quarter(quarter)).contains(timestamp)


def filter_records(records: Iterable[RewardRecord], scope: DateScope) -> list[RewardRecord]:
    return [record for record in records if scope.contains(record.timestamp)]
