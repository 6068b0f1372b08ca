from .company_member_repository import CompanyMemberRepository
from .customer_repository import CustomerRepository
from .recurring_template_repository import RecurringTemplateRepository
from .recurring_line_repository import RecurringLineRepository
from .document_repository import DocumentRepository
from .document_line_repository import DocumentLineRepository
from .revolut_repository import (
    RevolutConnectionRepository,
    RevolutAccountRepository,
    RevolutTransactionRepository,
    RevolutSyncLogRepository,
)

__all__ = [
    "CompanyMemberRepository",
    "CustomerRepository",
    "RecurringTemplateRepository",
    "RecurringLineRepository",
    "DocumentRepository",
    "DocumentLineRepository",
    "RevolutConnectionRepository",
    "RevolutAccountRepository",
    "RevolutTransactionRepository",
    "RevolutSyncLogRepository",
]
