"""Recurring Line Repository Interface"""

from abc import ABC, abstractmethod
from typing import Dict, List
from src.domain.recurring_line import RecurringLine


class RecurringLineRepository(ABC):
    """
    Repository interface for RecurringLine persistence

    Lines are only ever written as a full set per template.
    """

    @abstractmethod
    async def get_by_template_id(self, template_id: str) -> List[RecurringLine]:
        """
        Retrieve the lines of a template ordered by line_number

        Args:
            template_id: Template ID

        Returns:
            List of RecurringLine
        """
        pass

    @abstractmethod
    async def get_by_template_ids(self, template_ids: List[str]) -> Dict[str, List[RecurringLine]]:
        """
        Retrieve lines for several templates at once

        Returns:
            Mapping of template_id to its lines ordered by line_number
        """
        pass

    @abstractmethod
    async def create_many(self, lines: List[RecurringLine]) -> List[RecurringLine]:
        """
        Persist a batch of lines

        Args:
            lines: Lines to insert

        Returns:
            Created lines
        """
        pass

    @abstractmethod
    async def delete_by_template_id(self, template_id: str) -> int:
        """
        Delete every line of a template

        Returns:
            Number of deleted lines
        """
        pass
