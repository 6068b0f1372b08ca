"""CreateRecurringTemplate Use Case

Creates a recurring invoice template together with its lines.
"""

import logging
from datetime import date
from typing import List, Optional
from libs.result import Result, Return
from src.app.errors import not_found, persistence_error
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.recurring_line_repository import RecurringLineRepository
from src.app.repositories.recurring_template_repository import RecurringTemplateRepository
from src.app.services.compensation import create_with_children
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import AuthContext, require_superadmin
from src.domain.recurrence import compute_next_issue_date
from src.domain.recurring_line import RecurringLine
from src.domain.recurring_template import RecurringTemplate
from .dtos import RecurringTemplateCommandDTO, RecurringTemplateResponseDTO, to_template_response
from .validation import build_lines, validate_template_command

logger = logging.getLogger(__name__)


class CreateRecurringTemplate:
    """
    Use Case: Create a recurring invoice template

    Business Rules:
    1. Only superadmins of the company may create templates
    2. At least one line; day settings must match the frequency
    3. Customer must belong to the caller's company
    4. next_issue_date is the first occurrence after today, anchored on start_date
    5. Lines are numbered 1..N in input order
    6. If the lines cannot be stored the template is removed again

    Flow:
    1. Check role and validate command
    2. Check customer
    3. Create template, then lines (compensating delete on failure)
    4. Commit transaction
    5. Return template with lines
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
        command: RecurringTemplateCommandDTO,
        today: Optional[date] = None,
    ) -> Result[RecurringTemplateResponseDTO]:
        """
        Execute template creation

        Args:
            context: Verified caller
            command: Template header and lines
            today: Reference date for the schedule (defaults to date.today())

        Returns:
            Result[RecurringTemplateResponseDTO]: Created template or error
        """
        error = require_superadmin(context)
        if error:
            return Return.err(error)

        error = validate_template_command(command)
        if error:
            return Return.err(error)

        try:
            # Step 1: Customer must be in the caller's company
            customer = await self.customer_repo.get_by_id(command.customer_id, context.company_id)
            if not customer:
                return Return.err(not_found(f"Customer {command.customer_id} not found"))

            # Step 2: Initial schedule
            next_issue_date = compute_next_issue_date(
                command.frequency,
                command.start_date,
                day_of_month=command.day_of_month,
                today=today,
            )

            # Step 3: Template, then lines
            async def create_template() -> RecurringTemplate:
                template = RecurringTemplate(
                    company_id=context.company_id,
                    customer_id=command.customer_id,
                    name=command.name,
                    description=command.description,
                    frequency=command.frequency,
                    day_of_month=command.day_of_month,
                    day_of_week=command.day_of_week,
                    payment_terms_days=command.payment_terms_days,
                    notes=command.notes,
                    next_issue_date=next_issue_date,
                    is_active=True,
                    created_by=context.user_id,
                )
                return await self.template_repo.create(template)

            async def create_lines(template: RecurringTemplate) -> List[RecurringLine]:
                lines = build_lines(command, template.id, context.company_id)
                return await self.line_repo.create_many(lines)

            async def remove_template(template_id: str) -> None:
                logger.warning(f"Removing template {template_id} after failed line insert")
                await self.template_repo.delete(template_id)

            template, lines = await create_with_children(
                self.uow, create_template, create_lines, remove_template
            )

            # Step 4: Commit
            await self.uow.commit()

            logger.info(
                f"Created recurring template {template.id} for company {context.company_id} "
                f"({template.frequency.value}, next issue {template.next_issue_date})"
            )

            return Return.ok(to_template_response(template, lines, customer.name))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to create recurring template: {e}")
            return Return.err(persistence_error("Failed to create recurring template", e))
