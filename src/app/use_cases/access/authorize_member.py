"""AuthorizeMember Use Case

Resolves the caller's company membership into an AuthContext.
"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.errors import ErrorCode, forbidden, persistence_error
from src.app.repositories.company_member_repository import CompanyMemberRepository
from .dtos import AuthContext

logger = logging.getLogger(__name__)


class AuthorizeMember:
    """
    Use Case: Look up who is calling and for which company

    Business Rules:
    1. A request without a user is UNAUTHORIZED
    2. A user without an active membership is FORBIDDEN
    3. Role checks are left to the operation being called
    """

    def __init__(self, member_repo: CompanyMemberRepository):
        self.member_repo = member_repo

    async def execute(self, user_id: Optional[str]) -> Result[AuthContext]:
        if not user_id:
            return Return.err(
                Error(
                    code=ErrorCode.UNAUTHORIZED,
                    message="Not authenticated",
                    reason="No user supplied with the request",
                )
            )

        try:
            membership = await self.member_repo.get_active_membership(user_id)
        except Exception as e:
            logger.error(f"Membership lookup failed for user {user_id}: {e}")
            return Return.err(persistence_error("Failed to look up company membership", e))

        if not membership:
            return Return.err(forbidden("No company membership found"))

        return Return.ok(
            AuthContext(
                user_id=user_id,
                company_id=membership.company_id,
                role=membership.role,
            )
        )


def require_superadmin(context: AuthContext) -> Optional[Error]:
    """Return a FORBIDDEN error unless the caller is a superadmin"""
    if not context.is_superadmin:
        return forbidden("Only superadmins can perform this action")
    return None
