"""UpdateRecurringTemplate Use Case

Replaces a template's header and its complete line set.
"""

import logging
from datetime import date, datetime
from typing import Optional
from libs.result import Result, Return
from src.app.errors import not_found, persistence_error
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.recurring_line_repository import RecurringLineRepository
from src.app.repositories.recurring_template_repository import RecurringTemplateRepository
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import AuthContext, require_superadmin
from src.domain.recurrence import compute_next_issue_date
from .dtos import RecurringTemplateCommandDTO, RecurringTemplateResponseDTO, to_template_response
from .validation import build_lines, validate_template_command

logger = logging.getLogger(__name__)


class UpdateRecurringTemplate:
    """
    Use Case: Update a recurring invoice template

    Business Rules:
    1. Only superadmins of the owning company may update
    2. Same validation as create
    3. next_issue_date is recomputed from the new settings and start_date
    4. Lines are replaced as a whole: all old lines deleted, new lines numbered 1..N

    Flow:
    1. Check role and validate command
    2. Load template scoped to the caller's company
    3. Check customer
    4. Update header, delete old lines, insert new lines
    5. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        template_repo: RecurringTemplateRepository,
        line_repo: RecurringLineRepository,
        customer_repo: CustomerRepository,
    ):
        self.uow = uow
        self.template_repo = template_repo
        self.line_repo = line_repo
        self.customer_repo = customer_repo

    async def execute(
        self,
        context: AuthContext,
        template_id: str,
        command: RecurringTemplateCommandDTO,
        today: Optional[date] = None,
    ) -> Result[RecurringTemplateResponseDTO]:
        error = require_superadmin(context)
        if error:
            return Return.err(error)

        error = validate_template_command(command)
        if error:
            return Return.err(error)

        try:
            template = await self.template_repo.get_by_id(template_id, context.company_id)
            if not template:
                return Return.err(not_found(f"Recurring template {template_id} not found"))

            customer = await self.customer_repo.get_by_id(command.customer_id, context.company_id)
            if not customer:
                return Return.err(not_found(f"Customer {command.customer_id} not found"))

            template.customer_id = command.customer_id
            template.name = command.name
            template.description = command.description
            template.frequency = command.frequency
            template.day_of_month = command.day_of_month
            template.day_of_week = command.day_of_week
            template.payment_terms_days = command.payment_terms_days
            template.notes = command.notes
            template.next_issue_date = compute_next_issue_date(
                command.frequency,
                command.start_date,
                day_of_month=command.day_of_month,
                today=today,
            )
            template.updated_at = datetime.utcnow()
            template = await self.template_repo.update(template)

            removed = await self.line_repo.delete_by_template_id(template.id)
            lines = await self.line_repo.create_many(
                build_lines(command, template.id, context.company_id)
            )

            await self.uow.commit()

            logger.info(
                f"Updated recurring template {template.id}: replaced {removed} lines "
                f"with {len(lines)}, next issue {template.next_issue_date}"
            )

            return Return.ok(to_template_response(template, lines, customer.name))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to update recurring template {template_id}: {e}")
            return Return.err(persistence_error("Failed to update recurring template", e))
