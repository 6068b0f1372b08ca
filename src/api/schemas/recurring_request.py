"""Request schemas for the Recurring Invoices API

Pydantic models for validating incoming HTTP requests.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from src.domain.recurring_line import TaxRate
from src.domain.recurring_template import RecurrenceFrequency


class RecurringLineRequestSchema(BaseModel):
    """One template line"""

    description: str = Field(
        ...,
        min_length=1,
        description="Line description (required, non-empty)"
    )

    quantity: Decimal = Field(
        ...,
        gt=0,
        description="Quantity (must be > 0)"
    )

    unit: str = Field(
        default="pcs",
        description="Unit label"
    )

    unit_price: Decimal = Field(
        ...,
        ge=0,
        description="Net unit price (must be >= 0)"
    )

    tax_rate: TaxRate = Field(
        default=TaxRate.STANDARD_20,
        description="standard_20, reduced_10 or zero"
    )

    project_id: Optional[str] = Field(default=None)

    @field_validator('project_id')
    @classmethod
    def empty_project_is_none(cls, v):
        """Forms send an empty string for "no project" """
        return v or None


class RecurringTemplateRequestSchema(BaseModel):
    """
    Request schema for creating or replacing a template

    Used for POST /recurring-invoices and PUT /recurring-invoices/{id}.
    """

    customer_id: str = Field(
        ...,
        min_length=1,
        description="Customer identifier (required, non-empty)"
    )

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Template name"
    )

    description: Optional[str] = Field(default=None)

    frequency: RecurrenceFrequency = Field(
        default=RecurrenceFrequency.MONTHLY,
        description="weekly, biweekly, monthly, quarterly or yearly"
    )

    day_of_month: Optional[int] = Field(
        default=None,
        ge=1,
        le=31,
        description="Day of month for monthly/quarterly/yearly (1-31, clamped to month end)"
    )

    day_of_week: Optional[int] = Field(
        default=None,
        ge=0,
        le=6,
        description="Day of week for weekly/biweekly (0=Sunday)"
    )

    payment_terms_days: int = Field(
        default=14,
        ge=0,
        description="Payment terms in days"
    )

    notes: Optional[str] = Field(default=None)

    start_date: date = Field(
        ...,
        description="Schedule anchor (YYYY-MM-DD)"
    )

    lines: List[RecurringLineRequestSchema] = Field(
        default_factory=list,
        description="Template lines (at least one)"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "customer_id": "3f1c2a9e-0c1d-4d7a-9d6a-1f0b5e2c7a11",
                "name": "Monthly retainer",
                "frequency": "monthly",
                "day_of_month": 31,
                "payment_terms_days": 14,
                "start_date": "2025-01-31",
                "lines": [
                    {"description": "Consulting", "quantity": "10", "unit": "h", "unit_price": "100.00", "tax_rate": "standard_20"},
                    {"description": "Hosting", "quantity": "1", "unit_price": "50.00", "tax_rate": "standard_20"}
                ]
            }
        }
    )


class ToggleActiveRequestSchema(BaseModel):
    """Request schema for PATCH /recurring-invoices/{id}/active"""

    is_active: bool = Field(
        ...,
        description="New value of is_active"
    )
