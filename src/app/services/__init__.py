from .unit_of_work import UnitOfWork
from .token_cipher import TokenCipher, TokenDecryptionError
from .banking_client import BankingClient, BankingApiError
from .invoice_materializer import InvoiceMaterializer

__all__ = [
    "UnitOfWork",
    "TokenCipher",
    "TokenDecryptionError",
    "BankingClient",
    "BankingApiError",
    "InvoiceMaterializer",
]
