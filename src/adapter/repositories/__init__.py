from .company_member_repository import SqlAlchemyCompanyMemberRepository
from .customer_repository import SqlAlchemyCustomerRepository
from .recurring_template_repository import SqlAlchemyRecurringTemplateRepository
from .recurring_line_repository import SqlAlchemyRecurringLineRepository
from .document_repository import SqlAlchemyDocumentRepository
from .document_line_repository import SqlAlchemyDocumentLineRepository
from .revolut_repository import (
    SqlAlchemyRevolutConnectionRepository,
    SqlAlchemyRevolutAccountRepository,
    SqlAlchemyRevolutTransactionRepository,
    SqlAlchemyRevolutSyncLogRepository,
)

__all__ = [
    "SqlAlchemyCompanyMemberRepository",
    "SqlAlchemyCustomerRepository",
    "SqlAlchemyRecurringTemplateRepository",
    "SqlAlchemyRecurringLineRepository",
    "SqlAlchemyDocumentRepository",
    "SqlAlchemyDocumentLineRepository",
    "SqlAlchemyRevolutConnectionRepository",
    "SqlAlchemyRevolutAccountRepository",
    "SqlAlchemyRevolutTransactionRepository",
    "SqlAlchemyRevolutSyncLogRepository",
]
