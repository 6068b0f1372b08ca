"""Data Transfer Objects for caller authorization"""

from pydantic import BaseModel
from src.domain.company_member import MemberRole


class AuthContext(BaseModel):
    """
    Verified caller of an admin operation

    Produced by AuthorizeMember and passed explicitly to every company-scoped
    use case; scheduler and sync jobs run without one.
    """

    user_id: str
    company_id: str
    role: MemberRole

    @property
    def is_superadmin(self) -> bool:
        return self.role == MemberRole.SUPERADMIN
