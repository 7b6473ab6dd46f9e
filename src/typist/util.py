import datetime
import math

from dateutil.tz import tzlocal


def now():
    return datetime.datetime.now(tzlocal())


def round_half_up(val: float) -> int:
    "Round to the nearest integer, with halves going up (towards positive infinity)."
    return math.floor(val + 0.5)
