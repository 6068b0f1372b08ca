"""Data Transfer Objects for Recurring Invoice Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from src.domain.recurring_line import TaxRate
from src.domain.recurring_template import RecurrenceFrequency


class RecurringLineInputDTO(BaseModel):
    """
    One line of a template as supplied by the caller

    Line numbers are not part of the input; they follow list order.
    """

    description: str = Field(
        ...,
        min_length=1,
        description="Line description"
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
        description="Tax rate category"
    )

    project_id: Optional[str] = Field(
        default=None,
        description="Optional project the line is booked on"
    )


class RecurringTemplateCommandDTO(BaseModel):
    """
    Command DTO for creating or replacing a recurring template

    Used as input to CreateRecurringTemplate and UpdateRecurringTemplate.
    The line list fully replaces any existing lines.
    """

    customer_id: str = Field(
        ...,
        description="Customer billed by the template"
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
        description="Recurrence frequency"
    )

    day_of_month: Optional[int] = Field(
        default=None,
        ge=1,
        le=31,
        description="Preferred day of month (monthly/quarterly/yearly only)"
    )

    day_of_week: Optional[int] = Field(
        default=None,
        ge=0,
        le=6,
        description="Preferred day of week, 0=Sunday (weekly/biweekly only)"
    )

    payment_terms_days: int = Field(
        default=14,
        ge=0,
        description="Payment terms in days"
    )

    notes: Optional[str] = Field(default=None)

    start_date: date = Field(
        ...,
        description="Anchor date of the schedule"
    )

    lines: List[RecurringLineInputDTO] = Field(
        default_factory=list,
        description="Template lines (at least one)"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "customer_id": "3f1c2a9e-0c1d-4d7a-9d6a-1f0b5e2c7a11",
                "name": "Monthly maintenance",
                "frequency": "monthly",
                "day_of_month": 1,
                "payment_terms_days": 14,
                "start_date": "2025-01-01",
                "lines": [
                    {
                        "description": "Hosting",
                        "quantity": "1",
                        "unit": "pcs",
                        "unit_price": "49.00",
                        "tax_rate": "standard_20"
                    }
                ]
            }
        }
    )


class RecurringLineDTO(BaseModel):
    """Stored template line"""

    id: str
    line_number: int
    description: str
    quantity: Decimal
    unit: str
    unit_price: Decimal
    tax_rate: TaxRate
    project_id: Optional[str] = None


class RecurringTemplateResponseDTO(BaseModel):
    """
    Response DTO for a recurring template with its lines

    customer_name is resolved from the customer record when available.
    """

    id: str
    company_id: str
    customer_id: str
    customer_name: Optional[str] = None
    name: str
    description: Optional[str] = None
    frequency: RecurrenceFrequency
    day_of_month: Optional[int] = None
    day_of_week: Optional[int] = None
    payment_terms_days: int
    notes: Optional[str] = None
    next_issue_date: date
    is_active: bool
    last_issued_at: Optional[datetime] = None
    created_by: str
    created_at: datetime
    updated_at: datetime
    lines: List[RecurringLineDTO] = Field(default_factory=list)


class ListRecurringTemplatesResponseDTO(BaseModel):
    """Response DTO for listing a company's templates (newest first)"""

    templates: List[RecurringTemplateResponseDTO]
    total: int


class DeleteRecurringTemplateResponseDTO(BaseModel):
    """
    Response DTO for template deletion

    A template already referenced by a generated invoice is deactivated
    instead of deleted.
    """

    template_id: str
    deleted: bool
    deactivated: bool


class DocumentLineDTO(BaseModel):
    """Line of a generated invoice"""

    line_number: int
    description: str
    quantity: Decimal
    unit: str
    unit_price: Decimal
    tax_rate: TaxRate
    project_id: Optional[str] = None


class GeneratedInvoiceResponseDTO(BaseModel):
    """Response DTO for an invoice generated from a template"""

    document_id: str
    template_id: str
    company_id: str
    customer_id: str
    document_type: str
    status: str
    payment_terms_days: int
    notes: Optional[str] = None
    created_at: datetime
    lines: List[DocumentLineDTO]


class RecurringRunItemDTO(BaseModel):
    """Outcome for one template in a scheduler run"""

    template_id: str
    document_id: Optional[str] = None
    status: str = Field(
        ...,
        description="created, error or skipped"
    )
    error: Optional[str] = None


class RecurringRunResultDTO(BaseModel):
    """
    Summary of a scheduler run

    skipped counts templates another run advanced first; they are part of
    processed but neither successful nor failed.
    """

    processed: int = 0
    successful: int = 0
    failed: int = 0
    skipped: int = 0
    results: List[RecurringRunItemDTO] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "processed": 3,
                "successful": 2,
                "failed": 1,
                "skipped": 0,
                "results": [
                    {"template_id": "t-1", "document_id": "d-1", "status": "created", "error": None},
                    {"template_id": "t-2", "document_id": None, "status": "error", "error": "Template has no lines"},
                    {"template_id": "t-3", "document_id": "d-3", "status": "created", "error": None},
                ]
            }
        }
    )


def to_template_response(template, lines, customer_name: Optional[str] = None) -> RecurringTemplateResponseDTO:
    """Build the response DTO from a template entity and its line entities"""
    return RecurringTemplateResponseDTO(
        id=template.id,
        company_id=template.company_id,
        customer_id=template.customer_id,
        customer_name=customer_name,
        name=template.name,
        description=template.description,
        frequency=template.frequency,
        day_of_month=template.day_of_month,
        day_of_week=template.day_of_week,
        payment_terms_days=template.payment_terms_days,
        notes=template.notes,
        next_issue_date=template.next_issue_date,
        is_active=template.is_active,
        last_issued_at=template.last_issued_at,
        created_by=template.created_by,
        created_at=template.created_at,
        updated_at=template.updated_at,
        lines=[
            RecurringLineDTO(
                id=line.id,
                line_number=line.line_number,
                description=line.description,
                quantity=line.quantity,
                unit=line.unit,
                unit_price=line.unit_price,
                tax_rate=line.tax_rate,
                project_id=line.project_id,
            )
            for line in sorted(lines, key=lambda line: line.line_number)
        ],
    )


def to_invoice_response(document, lines) -> GeneratedInvoiceResponseDTO:
    """Build the response DTO for a generated invoice"""
    return GeneratedInvoiceResponseDTO(
        document_id=document.id,
        template_id=document.recurring_template_id,
        company_id=document.company_id,
        customer_id=document.customer_id,
        document_type=getattr(document.document_type, "value", document.document_type),
        status=getattr(document.status, "value", document.status),
        payment_terms_days=document.payment_terms_days,
        notes=document.notes,
        created_at=document.created_at,
        lines=[
            DocumentLineDTO(
                line_number=line.line_number,
                description=line.description,
                quantity=line.quantity,
                unit=line.unit,
                unit_price=line.unit_price,
                tax_rate=line.tax_rate,
                project_id=line.project_id,
            )
            for line in sorted(lines, key=lambda line: line.line_number)
        ],
    )
