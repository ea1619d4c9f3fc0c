"""Text helpers for ClassCard schedule exports.

Each function takes a raw string from the export and returns the parsed value,
or ``None`` when the text does not match. None of them raise on bad input.
"""
from collections import namedtuple
import re

TimeRange = namedtuple('TimeRange', ['start', 'end'])

# 0 = Sunday, matching the ClassSchedule.day_of_week column
DAY_NUMBERS = {
    'sunday': 0,
    'monday': 1,
    'tuesday': 2,
    'wednesday': 3,
    'thursday': 4,
    'friday': 5,
    'saturday': 6,
}
DAY_ABBREVIATIONS = {name[:3]: number for name, number in DAY_NUMBERS.items()}

# "04:00 pm-05:00 pm (Asia/Dubai)"; the timezone suffix is optional and ignored
TIME_RANGE_PATTERN = re.compile(
    r'^\s*(\d{1,2}):(\d{2})\s*(am|pm)\s*-\s*(\d{1,2}):(\d{2})\s*(am|pm)\s*(?:\([^)]*\))?\s*$',
    re.IGNORECASE
)
YEAR_GROUP_PATTERN = re.compile(r'\bY(?:ear)?\s*(\d{1,2})\b', re.IGNORECASE)
GROUP_SUFFIX_PATTERN = re.compile(r'\s+-\s+|\s*\(')


def day_name_to_number(day_name):
    """'Monday', 'mon' or 'MONDAY' -> 1. Unknown names give None."""
    if not day_name:
        return None
    key = day_name.strip().lower()
    if key in DAY_NUMBERS:
        return DAY_NUMBERS[key]
    return DAY_ABBREVIATIONS.get(key)


def convert_to_24hr(hour, minute, ampm):
    if not 1 <= hour <= 12 or minute > 59:
        return None
    ampm = ampm.lower()
    if ampm == 'pm' and hour != 12:
        hour += 12
    elif ampm == 'am' and hour == 12:
        hour = 0
    return f'{hour:02d}:{minute:02d}'


def parse_time_range(text):
    """Parse a ClassCard time cell into 24-hour start and end strings.

    >>> parse_time_range('04:00 pm-05:00 pm (Asia/Dubai)')
    TimeRange(start='16:00', end='17:00')
    >>> parse_time_range('4-5pm') is None
    True
    """
    if not text:
        return None
    match = TIME_RANGE_PATTERN.match(text)
    if not match:
        return None
    start_hour, start_minute, start_ampm, end_hour, end_minute, end_ampm = match.groups()
    start = convert_to_24hr(int(start_hour), int(start_minute), start_ampm)
    end = convert_to_24hr(int(end_hour), int(end_minute), end_ampm)
    if start is None or end is None:
        return None
    return TimeRange(start, end)


def extract_year_group(text):
    """Pull a year group out of free text in the compact 'Year N' form.

    'Y10 Maths', 'Year 10' and 'y 10' all give 'Year 10'.
    """
    if not text:
        return None
    match = YEAR_GROUP_PATTERN.search(text)
    if not match:
        return None
    return f'Year {int(match.group(1))}'


def extract_subject(class_title, class_subject=None):
    """Subject name for a ClassCard class.

    The export's Class Subject column wins when filled in. Otherwise the
    subject is read from the title by dropping the year token and anything
    after a group separator, so 'Y10 Maths - Group A' gives 'Maths'.
    """
    if class_subject and class_subject.strip():
        return class_subject.strip()
    title = (class_title or '').strip()
    subject = YEAR_GROUP_PATTERN.sub(' ', title)
    subject = GROUP_SUFFIX_PATTERN.split(subject, maxsplit=1)[0]
    subject = ' '.join(subject.split()).strip(' -:')
    return subject or title


def split_student_names(cell):
    """Names from a Students cell, which joins them with commas."""
    if not cell:
        return []
    return [name.strip() for name in cell.split(',') if name.strip()]
