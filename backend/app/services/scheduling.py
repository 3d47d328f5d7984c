"""Date arithmetic and due-state classification for care reminders.

Both functions are pure: callers supply "today" from a Clock rather than
reading the system date here.
"""
from datetime import date, timedelta
from enum import Enum

from app.core.exceptions import InvalidFrequency

# A century; anything longer is a typo rather than a care schedule
MAX_FREQUENCY_DAYS = 36500


class ReminderStatus(str, Enum):
    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    SCHEDULED = "scheduled"


def validate_frequency(frequency_days) -> int:
    """Reject anything but a positive whole number of days."""
    # bool is an int subclass; True must not pass as "every 1 day"
    if isinstance(frequency_days, bool) or not isinstance(frequency_days, int):
        raise InvalidFrequency(frequency_days)
    if frequency_days <= 0 or frequency_days > MAX_FREQUENCY_DAYS:
        raise InvalidFrequency(frequency_days)
    return frequency_days


def compute_next_due(base_date: date, frequency_days: int) -> date:
    """Return base_date moved forward by frequency_days calendar days."""
    return base_date + timedelta(days=frequency_days)


def classify(next_due: date, today: date) -> ReminderStatus:
    if next_due < today:
        return ReminderStatus.OVERDUE
    if next_due == today:
        return ReminderStatus.DUE_TODAY
    return ReminderStatus.SCHEDULED

