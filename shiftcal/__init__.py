from typing import Tuple

# Day codes: Thursday is 'r' so it can't be confused with Tuesday
DAY_CODES = {
    'm': 0,     # Monday
    't': 1,     # Tuesday
    'w': 2,     # Wednesday
    'r': 3,     # Thursday
    'f': 4,     # Friday
    'sa': 5,    # Saturday
    'su': 6,    # Sunday
}

# Time pattern components
TIME_COMPONENTS = {
    'day': r'(?P<day>m|t|w|r|f|sa|su)',
    'code': r'(?P<code{n}>\d{{1,2}}[:.]\d{{2}}|\d{{1,4}})',   # 8, 830, 0830, 8:30, 8.30
    'meridiem': r'(?:\s*(?P<meridiem{n}>am|pm))?',           # am/pm
    'separator': r'\s*(?:-|to)?\s*',                         # "-", "to" or nothing
    'spaces': r'\s*',                                        # Optional spaces
}

TIME_CODE_SEPARATORS = ':.'


class ShiftParseError(ValueError):
    """A single shift unit could not be interpreted"""


class MalformedTimeCode(ShiftParseError):
    pass


class InvalidDayCode(ShiftParseError):
    pass


class OutOfRangeTimeComponent(ShiftParseError):
    pass


class ConflictingMeridiem(ShiftParseError):
    pass


# Build time patterns
def build_time_pattern(n: int) -> str:
    """Build the pattern for the n-th time code of a shift"""
    return (TIME_COMPONENTS['code'].format(n=n)
            + TIME_COMPONENTS['meridiem'].format(n=n))


def build_shift_pattern() -> str:
    """Build shift pattern from components: day, start time, optional end time"""
    return (f"{TIME_COMPONENTS['day']}"
            f"{TIME_COMPONENTS['spaces']}"
            f"{build_time_pattern(1)}"
            f"(?:{TIME_COMPONENTS['separator']}{build_time_pattern(2)})?")


def clean_time_code(code: str) -> str:
    """Strip whitespace and the ':'/'.' separator from a time code"""
    return ''.join(c for c in code if c not in TIME_CODE_SEPARATORS and not c.isspace())


# Shared time code decoding
def decode_time_code(code: str) -> Tuple[int, int]:
    """Split a 1-4 digit time code into (hour, minute).

    One or two digits are hours only, three digits are H+MM and four
    digits are HH+MM. No range checking happens here.
    """
    if not code.isdecimal():
        raise MalformedTimeCode(f"Time code is not all digits: {code!r}")

    if len(code) <= 2:
        return int(code), 0
    elif len(code) == 3:
        return int(code[:1]), int(code[1:])
    elif len(code) == 4:
        return int(code[:2]), int(code[2:])

    raise MalformedTimeCode(f"Too many digits in time code: {code}")
