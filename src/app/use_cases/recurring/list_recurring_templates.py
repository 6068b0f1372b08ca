"""ListRecurringTemplates Use Case"""

from libs.result import Result, Return
from src.app.errors import persistence_error
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.recurring_line_repository import RecurringLineRepository
from src.app.repositories.recurring_template_repository import RecurringTemplateRepository
from src.app.use_cases.access import AuthContext, require_superadmin
from .dtos import ListRecurringTemplatesResponseDTO, to_template_response


class ListRecurringTemplates:
    """
    Use Case: List the caller's company templates, newest first

    Each template carries its customer name and its lines. Reading is
    restricted to superadmins like every other template operation.
    """

    def __init__(
        self,
        template_repo: RecurringTemplateRepository,
        line_repo: RecurringLineRepository,
        customer_repo: CustomerRepository,
    ):
        self.template_repo = template_repo
        self.line_repo = line_repo
        self.customer_repo = customer_repo

    async def execute(self, context: AuthContext) -> Result[ListRecurringTemplatesResponseDTO]:
        error = require_superadmin(context)
        if error:
            return Return.err(error)

        try:
            templates = await self.template_repo.list_by_company(context.company_id)
            template_ids = [template.id for template in templates]
            lines_by_template = await self.line_repo.get_by_template_ids(template_ids)
            customer_names = await self.customer_repo.get_names(
                list({template.customer_id for template in templates})
            )

            return Return.ok(
                ListRecurringTemplatesResponseDTO(
                    templates=[
                        to_template_response(
                            template,
                            lines_by_template.get(template.id, []),
                            customer_names.get(template.customer_id),
                        )
                        for template in templates
                    ],
                    total=len(templates),
                )
            )

        except Exception as e:
            return Return.err(persistence_error("Failed to list recurring templates", e))
