"""Validation rules shared by template create and update"""

from typing import List, Optional
from libs.result import Error
from src.app.errors import validation_error
from src.domain.recurring_line import RecurringLine
from src.domain.recurring_template import RecurrenceFrequency
from .dtos import RecurringTemplateCommandDTO


def validate_template_command(command: RecurringTemplateCommandDTO) -> Optional[Error]:
    """
    Check the rules pydantic field constraints cannot express

    Returns:
        VALIDATION_ERROR describing the first violation, or None
    """
    if not command.lines:
        return validation_error("At least one line is required", reason="lines is empty")

    frequency = RecurrenceFrequency(command.frequency)

    if command.day_of_month is not None and frequency.is_week_based:
        return validation_error(
            f"day_of_month cannot be used with {frequency.value} templates",
            reason="day_of_month is only valid for monthly, quarterly and yearly",
        )

    if command.day_of_week is not None and frequency.is_month_based:
        return validation_error(
            f"day_of_week cannot be used with {frequency.value} templates",
            reason="day_of_week is only valid for weekly and biweekly",
        )

    return None


def build_lines(
    command: RecurringTemplateCommandDTO, template_id: str, company_id: str
) -> List[RecurringLine]:
    """Create line entities numbered 1..N in input order"""
    return [
        RecurringLine(
            template_id=template_id,
            company_id=company_id,
            line_number=index,
            description=line.description,
            quantity=line.quantity,
            unit=line.unit,
            unit_price=line.unit_price,
            tax_rate=line.tax_rate,
            project_id=line.project_id,
        )
        for index, line in enumerate(command.lines, start=1)
    ]
