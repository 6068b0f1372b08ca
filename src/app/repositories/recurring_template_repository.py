"""Recurring Template Repository Interface

Defines the contract for recurring invoice template persistence.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import List, Optional
from src.domain.recurring_template import RecurringTemplate


class RecurringTemplateRepository(ABC):
    """
    Repository interface for RecurringTemplate persistence

    Company-scoped lookups take a company_id; the scheduler uses the
    unscoped ones (get_due, advance_schedule).
    """

    @abstractmethod
    async def create(self, template: RecurringTemplate) -> RecurringTemplate:
        """
        Create a new template

        Args:
            template: RecurringTemplate entity to persist

        Returns:
            Created RecurringTemplate
        """
        pass

    @abstractmethod
    async def get_by_id(
        self, template_id: str, company_id: Optional[str] = None
    ) -> Optional[RecurringTemplate]:
        """
        Retrieve a template by ID

        Args:
            template_id: Template ID
            company_id: When given, only a template of this company is returned

        Returns:
            RecurringTemplate if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_by_company(self, company_id: str) -> List[RecurringTemplate]:
        """
        List the templates of a company, newest first

        Args:
            company_id: Company identifier

        Returns:
            List of templates ordered by created_at descending
        """
        pass

    @abstractmethod
    async def update(self, template: RecurringTemplate) -> RecurringTemplate:
        """
        Update an existing template

        Args:
            template: RecurringTemplate with updated values

        Returns:
            Updated RecurringTemplate
        """
        pass

    @abstractmethod
    async def delete(self, template_id: str) -> None:
        """
        Hard-delete a template (its lines are removed with it)

        Args:
            template_id: Template ID
        """
        pass

    @abstractmethod
    async def get_due(self, today: date) -> List[RecurringTemplate]:
        """
        Retrieve all active templates with next_issue_date <= today

        Args:
            today: Reference date

        Returns:
            List of due templates
        """
        pass

    @abstractmethod
    async def advance_schedule(
        self,
        template_id: str,
        expected_next_issue_date: date,
        next_issue_date: date,
        issued_at: datetime,
    ) -> bool:
        """
        Move a template's schedule forward if nobody else already did

        The update only applies while the template is active and the stored
        next_issue_date still equals expected_next_issue_date.

        Args:
            template_id: Template ID
            expected_next_issue_date: Value read when the template was selected
            next_issue_date: New next_issue_date
            issued_at: Value for last_issued_at

        Returns:
            True if the row was updated, False if the schedule had moved or
            the template was deactivated
        """
        pass
