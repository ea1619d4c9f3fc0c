from datetime import datetime
import pytz
from config import Config

SCHOOL_TZ = pytz.timezone(Config.SCHOOL_TIMEZONE)


def get_school_now():
    """Current time as an aware datetime in the school's timezone."""
    return datetime.now(SCHOOL_TZ)


def school_now_naive():
    """Current school-local time without tzinfo, for DateTime column defaults."""
    return get_school_now().replace(tzinfo=None)
