"""Background workers for recurring invoicing and bank sync"""
from .recurring_invoices import RecurringInvoiceWorker
from .revolut_sync import RevolutSyncWorker

__all__ = ["RecurringInvoiceWorker", "RevolutSyncWorker"]
