"""Company Member Repository Interface

Authorization lookup: which company a user belongs to, and with which role.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.company_member import CompanyMember


class CompanyMemberRepository(ABC):
    """Repository interface for CompanyMember lookups"""

    @abstractmethod
    async def get_active_membership(self, user_id: str) -> Optional[CompanyMember]:
        """
        Retrieve the active membership of a user

        Args:
            user_id: Authenticated user identifier

        Returns:
            CompanyMember if the user has an active membership, None otherwise
        """
        pass
