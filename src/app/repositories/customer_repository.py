"""Customer Repository Interface"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from src.domain.customer import Customer


class CustomerRepository(ABC):
    """Read access to customers, always scoped to a company"""

    @abstractmethod
    async def get_by_id(self, customer_id: str, company_id: str) -> Optional[Customer]:
        """
        Retrieve a customer of a company

        Returns:
            Customer if it exists and belongs to company_id, None otherwise
        """
        pass

    @abstractmethod
    async def get_names(self, customer_ids: List[str]) -> Dict[str, str]:
        """
        Map customer ids to display names

        Unknown ids are omitted from the result.
        """
        pass
