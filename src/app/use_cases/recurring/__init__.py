"""Recurring invoice use cases"""
from .create_recurring_template import CreateRecurringTemplate
from .update_recurring_template import UpdateRecurringTemplate
from .toggle_recurring_template import ToggleRecurringTemplate
from .delete_recurring_template import DeleteRecurringTemplate
from .list_recurring_templates import ListRecurringTemplates
from .get_recurring_template import GetRecurringTemplate
from .generate_invoice_from_template import GenerateInvoiceFromTemplate
from .process_recurring_invoices import ProcessRecurringInvoices
from .dtos import (
    RecurringLineInputDTO,
    RecurringTemplateCommandDTO,
    RecurringLineDTO,
    RecurringTemplateResponseDTO,
    ListRecurringTemplatesResponseDTO,
    DeleteRecurringTemplateResponseDTO,
    DocumentLineDTO,
    GeneratedInvoiceResponseDTO,
    RecurringRunItemDTO,
    RecurringRunResultDTO,
)

__all__ = [
    "CreateRecurringTemplate",
    "UpdateRecurringTemplate",
    "ToggleRecurringTemplate",
    "DeleteRecurringTemplate",
    "ListRecurringTemplates",
    "GetRecurringTemplate",
    "GenerateInvoiceFromTemplate",
    "ProcessRecurringInvoices",
    "RecurringLineInputDTO",
    "RecurringTemplateCommandDTO",
    "RecurringLineDTO",
    "RecurringTemplateResponseDTO",
    "ListRecurringTemplatesResponseDTO",
    "DeleteRecurringTemplateResponseDTO",
    "DocumentLineDTO",
    "GeneratedInvoiceResponseDTO",
    "RecurringRunItemDTO",
    "RecurringRunResultDTO",
]
