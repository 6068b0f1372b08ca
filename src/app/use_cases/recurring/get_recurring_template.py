"""GetRecurringTemplate Use Case"""

from libs.result import Result, Return
from src.app.errors import not_found, persistence_error
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.recurring_line_repository import RecurringLineRepository
from src.app.repositories.recurring_template_repository import RecurringTemplateRepository
from src.app.use_cases.access import AuthContext, require_superadmin
from .dtos import RecurringTemplateResponseDTO, to_template_response


class GetRecurringTemplate:
    """Use Case: Fetch one template of the caller's company with customer name and lines"""

    def __init__(
        self,
        template_repo: RecurringTemplateRepository,
        line_repo: RecurringLineRepository,
        customer_repo: CustomerRepository,
    ):
        self.template_repo = template_repo
        self.line_repo = line_repo
        self.customer_repo = customer_repo

    async def execute(self, context: AuthContext, template_id: str) -> Result[RecurringTemplateResponseDTO]:
        error = require_superadmin(context)
        if error:
            return Return.err(error)

        try:
            template = await self.template_repo.get_by_id(template_id, context.company_id)
            if not template:
                return Return.err(not_found(f"Recurring template {template_id} not found"))

            lines = await self.line_repo.get_by_template_id(template.id)
            customer = await self.customer_repo.get_by_id(template.customer_id, context.company_id)

            return Return.ok(
                to_template_response(template, lines, customer.name if customer else None)
            )

        except Exception as e:
            return Return.err(persistence_error("Failed to load recurring template", e))
