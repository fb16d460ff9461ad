#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os
import re
import sys
import json
from datetime import date, datetime, time, timedelta
from typing import Callable, Iterable, List, Optional, Tuple

from dateutil import parser
from dateutil.relativedelta import relativedelta

from . import (
    DAY_CODES,
    ConflictingMeridiem,
    InvalidDayCode,
    OutOfRangeTimeComponent,
    ShiftParseError,
    build_shift_pattern,
    clean_time_code,
    decode_time_code,
)
from .config import Settings, as_int, get_testing_mode, load_settings
from .logger import setup_logger
from .models import (
    InformalShift,
    ParseOutcome,
    Schedule,
    ScheduleEntry,
    ShiftMatch,
    ShiftOutcome,
    Span,
)
from .preview import SchedulePreview, format_schedule

# Get logger
logger = setup_logger('schedule_nlp', testing=get_testing_mode())

Flagger = Callable[[Span, bool], None]

MINUTES_PER_DAY = 24 * 60
HALF_DAY = 12 * 60
DAWN = 7 * 60
NOON = HALF_DAY


def _plus_half_day(minutes: int) -> int:
    return (minutes + HALF_DAY) % MINUTES_PER_DAY


def _to_time(minutes: int) -> time:
    return time(minutes // 60, minutes % 60)


def interpret_shift(match: ShiftMatch, default_duration: int, assume_daytime: bool) -> InformalShift:
    """Turn a matched shift unit into a day of the week with start and end times.

    Raises a ShiftParseError subclass when the unit can't be read.
    """
    day = DAY_CODES.get(match.day_code.lower())
    if day is None:
        raise InvalidDayCode(f"Invalid day code: {match.day_code}")

    start_hour, start_minute = decode_time_code(clean_time_code(match.start_code))
    if match.has_end:
        end_hour, end_minute = decode_time_code(clean_time_code(match.end_code))
    else:
        end_hour, end_minute = (start_hour + default_duration) % 24, start_minute

    start_period = match.start_meridiem.lower() if match.start_meridiem else None
    end_period = match.end_meridiem.lower() if match.end_meridiem else None

    if not 0 <= start_hour <= 24:
        raise OutOfRangeTimeComponent(f"Start hour not in [0,24]: {start_hour}")
    elif not 0 <= end_hour <= 24:
        raise OutOfRangeTimeComponent(f"End hour not in [0,24]: {end_hour}")
    elif not 0 <= start_minute <= 59:
        raise OutOfRangeTimeComponent(f"Start minute not in [0,59]: {start_minute}")
    elif not 0 <= end_minute <= 59:
        raise OutOfRangeTimeComponent(f"End minute not in [0,59]: {end_minute}")
    elif start_hour > 12 and start_period is not None:
        raise ConflictingMeridiem(f"'{start_period}' on 24h start time {start_hour}")
    elif end_hour > 12 and end_period is not None:
        raise ConflictingMeridiem(f"'{end_period}' on 24h end time {end_hour}")

    # Hour 24 is midnight
    start = (start_hour % 24) * 60 + start_minute
    end = (end_hour % 24) * 60 + end_minute

    if start_period == 'pm':
        start = _plus_half_day(start)
    if end_period == 'pm':
        end = _plus_half_day(end)

    if assume_daytime:
        if start_period is None and start < DAWN:
            start = _plus_half_day(start)
        if (end_period is None
                and end < start
                and _plus_half_day(end) > start
                and end < NOON):
            end = _plus_half_day(end)

    return InformalShift(day, _to_time(start), _to_time(end))


def next_work_day(anchor: date, day_of_week: int) -> date:
    """First date strictly after anchor that falls on day_of_week"""
    return anchor + relativedelta(days=+1, weekday=day_of_week)


def place_shift(anchor: date, shift: InformalShift) -> Tuple[ScheduleEntry, date]:
    """Date a single shift, returning the entry and the anchor for the next shift"""
    work_day = next_work_day(anchor, shift.day_of_week)
    start = datetime.combine(work_day, shift.start_time)

    # A shift ending at or before its start time runs into the next day
    if shift.end_time > shift.start_time:
        end = datetime.combine(work_day, shift.end_time)
    else:
        end = datetime.combine(work_day + timedelta(days=1), shift.end_time)

    return ScheduleEntry(start, end), work_day


def shifts_to_schedule(shifts: Iterable[InformalShift], starting_date: date) -> Schedule:
    """Date each shift in turn, never reusing a date for the same weekday"""
    anchor = starting_date
    entries = []
    for shift in shifts:
        entry, anchor = place_shift(anchor, shift)
        entries.append(entry)
    return Schedule(tuple(entries))


def report_spans(outcomes: Iterable[ShiftOutcome], flagger: Optional[Flagger]) -> None:
    """Tell the caller which spans of the text were understood"""
    if flagger is None:
        return
    for outcome in outcomes:
        start, end = outcome.span
        if end > start:
            flagger(outcome.span, outcome.ok)


class ScheduleProcessor:
    """Parses shift shorthand such as 'm8-4 t9am-5pm w10-6' into a dated schedule.

    Holds the result of the most recent parse. Each call to parse_text
    replaces it wholesale.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings if settings is not None else load_settings()
        self.shift_regex = re.compile(build_shift_pattern(), re.IGNORECASE)
        self.outcome = ParseOutcome()

    @property
    def schedule(self) -> Schedule:
        return self.outcome.schedule

    @property
    def found_errors(self) -> bool:
        return self.outcome.found_errors

    def clear(self) -> None:
        self.outcome = ParseOutcome()

    def find_matches(self, text: str) -> List[ShiftMatch]:
        """Find every shift unit in the text, left to right"""
        return [
            ShiftMatch(
                day_code=m.group('day'),
                start_code=m.group('code1'),
                start_meridiem=m.group('meridiem1'),
                end_code=m.group('code2'),
                end_meridiem=m.group('meridiem2'),
                span=m.span(),
            )
            for m in self.shift_regex.finditer(text)
        ]

    def is_fully_readable(self, text: str, matches: Optional[List[ShiftMatch]] = None) -> bool:
        """True when the text is nothing but shift units and whitespace"""
        if matches is None:
            matches = self.find_matches(text)

        position = 0
        for match in matches:
            start, end = match.span
            if text[position:start].strip():
                return False
            position = end
        return not text[position:].strip()

    def match_to_shift(self, match: ShiftMatch) -> ShiftOutcome:
        logger.debug(f"Interpreting {match}")
        try:
            shift = interpret_shift(match,
                                    self.settings.default_duration,
                                    self.settings.assume_daytime)
        except ShiftParseError as e:
            logger.info(f"Could not read shift at {match.span}: {e}")
            return ShiftOutcome(match, error=e)
        return ShiftOutcome(match, shift=shift)

    def parse_text(self, text: str, day_offset: int = 0, flagger: Optional[Flagger] = None,
                   today: Optional[date] = None) -> ParseOutcome:
        """Converts text into a Schedule.

        Shift units that can't be read are left out of the schedule and
        flagged invalid; any of them, or any text outside a shift unit,
        sets found_errors.
        """
        if not text.strip():
            self.clear()
            return self.outcome

        matches = self.find_matches(text)
        outcomes = [self.match_to_shift(m) for m in matches]
        report_spans(outcomes, flagger)

        starting_date = (today or date.today()) + timedelta(days=day_offset)
        schedule = shifts_to_schedule((o.shift for o in outcomes if o.ok), starting_date)

        found_errors = (not self.is_fully_readable(text, matches)
                        or any(not o.ok for o in outcomes))
        if found_errors:
            logger.info("There were matching errors.")

        self.outcome = ParseOutcome(schedule, found_errors, tuple(outcomes))
        return self.outcome

    def generate_preview(self) -> str:
        return format_schedule(self.schedule)


def parse_start_date(text: Optional[str]) -> Optional[date]:
    """Parse an anchor date override such as '2024-05-06' or 'May 6'"""
    if not text:
        return None
    try:
        return parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        logger.warning(f"Ignoring start_date {text!r}: {e}")
        return None


def main():
    query = " ".join(sys.argv[1:])

    settings = load_settings()
    day_offset = as_int(os.getenv('day_offset'), settings.day_offset)
    today = parse_start_date(os.getenv('start_date'))

    preview = SchedulePreview(ScheduleProcessor(settings))
    items = preview.generate_items(query, day_offset, today=today)
    print(json.dumps({"items": items}))


if __name__ == "__main__":
    main()
