"""Shared data models used across the shift calendar workflow."""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Iterator, Optional, Tuple

from . import ShiftParseError

WEEKDAY_NAMES = {
    0: "Monday",
    1: "Tuesday",
    2: "Wednesday",
    3: "Thursday",
    4: "Friday",
    5: "Saturday",
    6: "Sunday",
}

# Half-open [start, end) character range into the parsed text
Span = Tuple[int, int]


@dataclass(frozen=True)
class ShiftMatch:
    """One shift unit found in the text, before interpretation."""

    day_code: str
    start_code: str
    span: Span
    start_meridiem: Optional[str] = None
    end_code: Optional[str] = None
    end_meridiem: Optional[str] = None

    @property
    def has_end(self) -> bool:
        return self.end_code is not None


@dataclass(frozen=True)
class InformalShift:
    """A day of the week and two times of day, not yet tied to a date."""

    day_of_week: int
    start_time: time
    end_time: time


@dataclass(frozen=True)
class ShiftOutcome:
    """Result of interpreting a single shift unit: a shift or an error."""

    match: ShiftMatch
    shift: Optional[InformalShift] = None
    error: Optional[ShiftParseError] = None

    @property
    def ok(self) -> bool:
        return self.shift is not None

    @property
    def span(self) -> Span:
        return self.match.span


@dataclass(frozen=True)
class ScheduleEntry:
    """A concrete, dated shift."""

    start: datetime
    end: datetime

    def __post_init__(self):
        if self.end <= self.start:
            raise ValueError(f"Shift must end after it starts: {self.start} - {self.end}")

    @property
    def work_date(self) -> date:
        return self.start.date()

    @property
    def overnight(self) -> bool:
        return self.start.date() != self.end.date()

    @property
    def day_name(self) -> str:
        return WEEKDAY_NAMES[self.start.weekday()]


@dataclass(frozen=True)
class Schedule:
    """Schedule entries in the order the shifts were written."""

    entries: Tuple[ScheduleEntry, ...] = ()

    def __iter__(self) -> Iterator[ScheduleEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> ScheduleEntry:
        return self.entries[index]

    @property
    def is_empty(self) -> bool:
        return not self.entries


EMPTY_SCHEDULE = Schedule()


@dataclass(frozen=True)
class ParseOutcome:
    """Everything one parse call produces."""

    schedule: Schedule = EMPTY_SCHEDULE
    found_errors: bool = False
    outcomes: Tuple[ShiftOutcome, ...] = field(default=(), compare=False)

    @property
    def invalid(self) -> Tuple[ShiftOutcome, ...]:
        return tuple(o for o in self.outcomes if not o.ok)
