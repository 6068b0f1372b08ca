"""ListRevolutTransactions Use Case"""

from libs.result import Result, Return
from src.app.errors import forbidden, persistence_error
from src.app.repositories.revolut_repository import RevolutTransactionRepository
from src.app.use_cases.access import AuthContext
from src.domain.company_member import MemberRole
from .dtos import ListRevolutTransactionsResponseDTO, RevolutTransactionDTO


class ListRevolutTransactions:
    """
    Use Case: Page through the mirrored transactions of the caller's company

    Superadmins and accountants may read transactions.
    """

    def __init__(self, transaction_repo: RevolutTransactionRepository):
        self.transaction_repo = transaction_repo

    async def execute(
        self, context: AuthContext, limit: int = 50, offset: int = 0
    ) -> Result[ListRevolutTransactionsResponseDTO]:
        if context.role not in (MemberRole.SUPERADMIN, MemberRole.ACCOUNTANT):
            return Return.err(forbidden("Insufficient permissions to view bank transactions"))

        try:
            transactions = await self.transaction_repo.list_by_company(
                context.company_id, limit=limit, offset=offset
            )
            total = await self.transaction_repo.count_by_company(context.company_id)
        except Exception as e:
            return Return.err(persistence_error("Failed to list Revolut transactions", e))

        return Return.ok(
            ListRevolutTransactionsResponseDTO(
                transactions=[
                    RevolutTransactionDTO(
                        id=tx.id,
                        account_id=tx.account_id,
                        revolut_transaction_id=tx.revolut_transaction_id,
                        type=tx.type,
                        state=tx.state,
                        amount=tx.amount,
                        currency=tx.currency,
                        balance_after=tx.balance_after,
                        counterparty_name=tx.counterparty_name,
                        reference=tx.reference,
                        description=tx.description,
                        merchant_name=tx.merchant_name,
                        card_last_four=tx.card_last_four,
                        transaction_date=tx.transaction_date,
                        completed_at_revolut=tx.completed_at_revolut,
                    )
                    for tx in transactions
                ],
                total=total,
                limit=limit,
                offset=offset,
            )
        )
