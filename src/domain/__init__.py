from .base import BaseModel, generate_uuid
from .company_member import CompanyMember, MemberRole
from .customer import Customer
from .recurring_template import RecurringTemplate, RecurrenceFrequency
from .recurring_line import RecurringLine, TaxRate
from .document import Document, DocumentType, DocumentStatus
from .document_line import DocumentLine
from .revolut import (
    RevolutConnection,
    RevolutAccount,
    RevolutTransaction,
    RevolutSyncLog,
    ConnectionStatus,
    SyncStatus,
)

__all__ = [
    "BaseModel",
    "generate_uuid",
    "CompanyMember",
    "MemberRole",
    "Customer",
    "RecurringTemplate",
    "RecurrenceFrequency",
    "RecurringLine",
    "TaxRate",
    "Document",
    "DocumentType",
    "DocumentStatus",
    "DocumentLine",
    "RevolutConnection",
    "RevolutAccount",
    "RevolutTransaction",
    "RevolutSyncLog",
    "ConnectionStatus",
    "SyncStatus",
]
