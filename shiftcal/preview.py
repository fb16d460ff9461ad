#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from datetime import date
from typing import List, Optional

from .models import ParseOutcome, Schedule, ScheduleEntry
from .logger import setup_logger
from .config import get_testing_mode

# Get logger
logger = setup_logger('preview', testing=get_testing_mode())

REVIEW_HEADER = "Review"
HINT_TITLE = "Type your shifts..."
HINT_SUBTITLE = "e.g. m8-4 t9am-5pm w10-6 f10pm-6am"
ICON = {"path": "icon.png"}


def format_time(value) -> str:
    return value.strftime('%-I:%M %p')


def format_entry(entry: ScheduleEntry) -> str:
    """Render one entry as 'Monday 8:00 AM to 4:00 PM (May 6, 2024)'"""
    text = (f"{entry.day_name} {format_time(entry.start)} to {format_time(entry.end)}"
            f" ({entry.start.strftime('%b %-d, %Y')})")
    if entry.overnight:
        text += " (overnight)"
    return text


def format_schedule(schedule: Schedule) -> str:
    """Render the whole schedule, one entry per line, in the order written"""
    lines = [REVIEW_HEADER]
    lines.extend(format_entry(entry) for entry in schedule)
    return "\n".join(lines)


class SchedulePreview:
    """Builds Alfred script filter items for a schedule text."""

    def __init__(self, processor):
        self.processor = processor

    def summary_title(self, outcome: ParseOutcome) -> str:
        count = len(outcome.schedule)
        if count == 0:
            return "No shifts found"
        return f"{count} shift{'s' if count != 1 else ''}"

    def summary_subtitle(self, outcome: ParseOutcome) -> str:
        if outcome.found_errors:
            return "Some of the text couldn't be read"
        if outcome.schedule.is_empty:
            return HINT_SUBTITLE
        first, last = outcome.schedule[0], outcome.schedule[-1]
        return f"{first.start.strftime('%a %b %-d')} to {last.end.strftime('%a %b %-d')}"

    def generate_items(self, text: str, day_offset: int = 0, today: Optional[date] = None) -> List[dict]:
        """Generate preview items"""
        logger.debug(f"Generating preview for: {text}")

        if not text.strip():
            self.processor.clear()
            return [{
                "title": HINT_TITLE,
                "subtitle": HINT_SUBTITLE,
                "valid": False,
                "icon": ICON,
            }]

        outcome = self.processor.parse_text(text, day_offset, today=today)
        valid = not outcome.found_errors and not outcome.schedule.is_empty

        items = [{
            "title": self.summary_title(outcome),
            "subtitle": self.summary_subtitle(outcome),
            "arg": text,
            "valid": valid,
            "icon": ICON,
        }]

        for entry in outcome.schedule:
            items.append({
                "title": format_entry(entry),
                "subtitle": f"{entry.start.isoformat()} → {entry.end.isoformat()}",
                "arg": text,
                "valid": valid,
                "icon": ICON,
            })

        for failed in outcome.invalid:
            start, end = failed.span
            items.append({
                "title": f"Couldn't read \"{text[start:end]}\"",
                "subtitle": str(failed.error),
                "valid": False,
                "icon": ICON,
            })

        return items
