"""Revolut Business banking use cases"""
from .start_revolut_authorization import StartRevolutAuthorization
from .complete_revolut_authorization import CompleteRevolutAuthorization
from .disconnect_revolut import DisconnectRevolut
from .get_revolut_status import GetRevolutStatus
from .list_revolut_transactions import ListRevolutTransactions
from .sync_revolut_connection import SyncRevolutConnection, AccessTokenExpiredError
from .sync_revolut_transactions import SyncRevolutTransactions
from .dtos import (
    AuthorizationStartDTO,
    CompleteAuthorizationCommandDTO,
    RevolutConnectionDTO,
    RevolutAccountDTO,
    RevolutStatusResponseDTO,
    DisconnectResponseDTO,
    ConnectionSyncResultDTO,
    RevolutSyncRunResultDTO,
    RevolutTransactionDTO,
    ListRevolutTransactionsResponseDTO,
)

__all__ = [
    "StartRevolutAuthorization",
    "CompleteRevolutAuthorization",
    "DisconnectRevolut",
    "GetRevolutStatus",
    "ListRevolutTransactions",
    "SyncRevolutConnection",
    "AccessTokenExpiredError",
    "SyncRevolutTransactions",
    "AuthorizationStartDTO",
    "CompleteAuthorizationCommandDTO",
    "RevolutConnectionDTO",
    "RevolutAccountDTO",
    "RevolutStatusResponseDTO",
    "DisconnectResponseDTO",
    "ConnectionSyncResultDTO",
    "RevolutSyncRunResultDTO",
    "RevolutTransactionDTO",
    "ListRevolutTransactionsResponseDTO",
]
