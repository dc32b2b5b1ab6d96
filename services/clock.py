"""
Clock

"Today" is a local calendar date. Every service asks an injected clock
instead of reading the wall clock itself, so tests can pin the date.
"""

from datetime import datetime, timedelta, time


DATE_FORMAT = '%Y-%m-%d'


class SystemClock:
    """Local wall-clock time."""

    def now(self):
        return datetime.now()

    def today(self):
        return self.now().strftime(DATE_FORMAT)

    def day_window(self):
        """(start, end) of the current local calendar day; end is exclusive."""
        start = datetime.combine(self.now().date(), time.min)
        return start, start + timedelta(days=1)


class FixedClock(SystemClock):
    """A clock that stays where it is put."""

    def __init__(self, current):
        self.current = current

    def now(self):
        return self.current

    def advance(self, **kwargs):
        self.current = self.current + timedelta(**kwargs)


def parse_date(value):
    """Parse a YYYY-MM-DD string, returning None when it is not one."""
    if not isinstance(value, str) or len(value) != 10:
        return None
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        return None
