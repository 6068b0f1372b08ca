"""Unit tests for recurrence date arithmetic"""

import pytest
from datetime import date

from src.domain.recurrence import advance_issue_date, clamp_day_of_month, compute_next_issue_date
from src.domain.recurring_template import RecurrenceFrequency


class TestClampDayOfMonth:
    """Test moving a date to a preferred day of month"""

    def test_day_exists_in_month(self):
        """Test preferred day that exists is used as is"""
        assert clamp_day_of_month(date(2025, 3, 1), 15) == date(2025, 3, 15)

    def test_day_clamped_to_last_day(self):
        """Test day 31 in a 30-day month lands on the 30th"""
        assert clamp_day_of_month(date(2025, 4, 10), 31) == date(2025, 4, 30)

    def test_day_clamped_in_leap_february(self):
        """Test day 31 in February of a leap year lands on the 29th"""
        assert clamp_day_of_month(date(2024, 2, 1), 31) == date(2024, 2, 29)


class TestAdvanceIssueDate:
    """Test advancing a schedule by one period"""

    def test_weekly_adds_seven_days(self):
        """Test weekly keeps the weekday"""
        monday = date(2025, 1, 6)

        result = advance_issue_date(RecurrenceFrequency.WEEKLY, monday)

        assert result == date(2025, 1, 13)
        assert result.weekday() == monday.weekday()

    def test_biweekly_adds_fourteen_days(self):
        """Test biweekly steps two weeks"""
        assert advance_issue_date(RecurrenceFrequency.BIWEEKLY, date(2025, 1, 6)) == date(2025, 1, 20)

    def test_monthly_from_january_31_lands_on_february_28(self):
        """Test calendar-month addition clamps to the end of a shorter month"""
        assert advance_issue_date(RecurrenceFrequency.MONTHLY, date(2025, 1, 31)) == date(2025, 2, 28)

    def test_monthly_with_day_of_month_recovers_after_short_month(self):
        """Test day_of_month=31 moves back to the 31st after February"""
        result = advance_issue_date(RecurrenceFrequency.MONTHLY, date(2025, 2, 28), day_of_month=31)

        assert result == date(2025, 3, 31)

    def test_monthly_without_day_of_month_keeps_clamped_day(self):
        """Test without day_of_month the clamped day carries over"""
        assert advance_issue_date(RecurrenceFrequency.MONTHLY, date(2025, 2, 28)) == date(2025, 3, 28)

    def test_quarterly_adds_three_months(self):
        """Test quarterly frequency"""
        assert advance_issue_date(RecurrenceFrequency.QUARTERLY, date(2025, 1, 15)) == date(2025, 4, 15)

    def test_yearly_from_leap_day(self):
        """Test Feb 29 + 1 year lands on Feb 28"""
        assert advance_issue_date(RecurrenceFrequency.YEARLY, date(2024, 2, 29)) == date(2025, 2, 28)

    def test_accepts_string_frequency(self):
        """Test raw frequency values are accepted"""
        assert advance_issue_date("monthly", date(2025, 5, 10)) == date(2025, 6, 10)

    def test_unknown_frequency_raises(self):
        """Test unknown frequency is rejected"""
        with pytest.raises(ValueError):
            advance_issue_date("daily", date(2025, 5, 10))

    @pytest.mark.parametrize("frequency", list(RecurrenceFrequency))
    def test_always_moves_forward(self, frequency):
        """Test every frequency strictly increases the date, 100 steps in a row"""
        current = date(2024, 1, 31)

        for _ in range(100):
            next_date = advance_issue_date(frequency, current, day_of_month=31 if frequency.is_month_based else None)
            assert next_date > current
            current = next_date


class TestComputeNextIssueDate:
    """Test computing the first occurrence after today"""

    def test_future_anchor_is_returned_unchanged(self):
        """Test start date in the future is the first issue date"""
        result = compute_next_issue_date(
            RecurrenceFrequency.MONTHLY, date(2025, 3, 1), today=date(2025, 1, 15)
        )

        assert result == date(2025, 3, 1)

    def test_anchor_equal_to_today_moves_one_period(self):
        """Test result is strictly after today"""
        result = compute_next_issue_date(
            RecurrenceFrequency.MONTHLY, date(2025, 1, 31), day_of_month=31, today=date(2025, 1, 31)
        )

        assert result == date(2025, 2, 28)

    def test_weekly_lands_on_same_weekday(self):
        """Test weekly schedule stays on Mondays"""
        result = compute_next_issue_date(
            RecurrenceFrequency.WEEKLY, date(2025, 1, 6), today=date(2025, 1, 10)
        )

        assert result == date(2025, 1, 13)
        assert result.weekday() == 0

    def test_biweekly_catches_up_in_whole_periods(self):
        """Test biweekly skips to the next period boundary"""
        result = compute_next_issue_date(
            RecurrenceFrequency.BIWEEKLY, date(2025, 1, 6), today=date(2025, 1, 20)
        )

        assert result == date(2025, 2, 3)

    def test_far_past_anchor_monthly(self):
        """Test an anchor decades in the past yields the next month after today"""
        result = compute_next_issue_date(
            RecurrenceFrequency.MONTHLY, date(2000, 1, 15), day_of_month=15, today=date(2025, 6, 15)
        )

        assert result == date(2025, 7, 15)

    def test_far_past_anchor_weekly(self):
        """Test closed-form weekly catch-up is strictly after today"""
        today = date(2025, 6, 15)

        result = compute_next_issue_date(RecurrenceFrequency.WEEKLY, date(1990, 1, 1), today=today)

        assert today < result <= date(2025, 6, 22)
        assert result.weekday() == date(1990, 1, 1).weekday()

    def test_yearly_from_leap_day_with_preferred_day(self):
        """Test yearly schedule anchored on Feb 29 clamps in common years"""
        result = compute_next_issue_date(
            RecurrenceFrequency.YEARLY, date(2024, 2, 29), day_of_month=29, today=date(2025, 1, 1)
        )

        assert result == date(2025, 2, 28)

    @pytest.mark.parametrize("frequency", list(RecurrenceFrequency))
    def test_result_is_after_today(self, frequency):
        """Test the result is strictly after today for every frequency"""
        today = date(2025, 12, 31)

        result = compute_next_issue_date(frequency, date(2023, 1, 31), today=today)

        assert result > today
