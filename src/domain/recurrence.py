"""Recurrence Calculations

Pure date arithmetic for recurring invoice schedules. No I/O.
"""

from calendar import monthrange
from datetime import date, timedelta
from typing import Optional, Union
from dateutil.relativedelta import relativedelta
from src.domain.recurring_template import RecurrenceFrequency

WEEK_BASED_STEP_DAYS = {
    RecurrenceFrequency.WEEKLY: 7,
    RecurrenceFrequency.BIWEEKLY: 14,
}

MONTH_BASED_STEP_MONTHS = {
    RecurrenceFrequency.MONTHLY: 1,
    RecurrenceFrequency.QUARTERLY: 3,
    RecurrenceFrequency.YEARLY: 12,
}


def clamp_day_of_month(value: date, day_of_month: int) -> date:
    """Move value to day_of_month, or to the last day of its month if shorter"""
    _, last_day = monthrange(value.year, value.month)
    return value.replace(day=min(day_of_month, last_day))


def advance_issue_date(
    frequency: Union[RecurrenceFrequency, str],
    current: date,
    day_of_month: Optional[int] = None,
) -> date:
    """
    Advance a schedule by exactly one period

    Month-based frequencies use calendar-month addition, which lands on the
    last day of the target month when the source day does not exist there
    (Jan 31 + 1 month = Feb 28). When day_of_month is set the result is then
    moved to min(day_of_month, last day of that month).

    Args:
        frequency: Recurrence frequency
        current: Date to advance from
        day_of_month: Optional preferred day (month-based frequencies only)

    Returns:
        The next occurrence after current
    """
    frequency = RecurrenceFrequency(frequency)

    if frequency.is_week_based:
        return current + timedelta(days=WEEK_BASED_STEP_DAYS[frequency])

    next_date = current + relativedelta(months=MONTH_BASED_STEP_MONTHS[frequency])
    if day_of_month:
        next_date = clamp_day_of_month(next_date, day_of_month)
    return next_date


def compute_next_issue_date(
    frequency: Union[RecurrenceFrequency, str],
    anchor_date: date,
    day_of_month: Optional[int] = None,
    today: Optional[date] = None,
) -> date:
    """
    Compute the first occurrence strictly after today

    Starting from anchor_date, the schedule is advanced period by period
    until it passes today. An anchor already in the future is returned
    unchanged.

    Week-based schedules are solved in closed form. Month-based schedules
    are stepped one period at a time so the clamping of each step carries
    over exactly as repeated calendar-month additions would; the number of
    steps is bounded by the months between anchor_date and today.

    Args:
        frequency: Recurrence frequency
        anchor_date: Start date or current next_issue_date
        day_of_month: Optional preferred day (month-based frequencies only)
        today: Reference date (defaults to date.today())

    Returns:
        Date strictly greater than today
    """
    frequency = RecurrenceFrequency(frequency)
    today = today or date.today()

    if anchor_date > today:
        return anchor_date

    if frequency.is_week_based:
        step = WEEK_BASED_STEP_DAYS[frequency]
        periods = (today - anchor_date).days // step + 1
        return anchor_date + timedelta(days=periods * step)

    next_date = anchor_date
    while next_date <= today:
        next_date = advance_issue_date(frequency, next_date, day_of_month)
    return next_date
