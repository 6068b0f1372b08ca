"""GenerateInvoiceFromTemplate Use Case

Admin action: issue a draft invoice from a template right now.
"""

import logging
from datetime import datetime
from libs.result import Result, Return
from src.app.errors import not_found, persistence_error, validation_error
from src.app.repositories.recurring_line_repository import RecurringLineRepository
from src.app.repositories.recurring_template_repository import RecurringTemplateRepository
from src.app.services.invoice_materializer import InvoiceMaterializer
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import AuthContext, require_superadmin
from .dtos import GeneratedInvoiceResponseDTO, to_invoice_response

logger = logging.getLogger(__name__)


class GenerateInvoiceFromTemplate:
    """
    Use Case: Materialize a template into a draft invoice on demand

    Business Rules:
    1. Only superadmins of the owning company may generate
    2. A template without lines cannot be materialized
    3. last_issued_at is stamped; next_issue_date is left unchanged
    4. On failure no document remains and the template is untouched

    Flow:
    1. Check role
    2. Load template and lines
    3. Materialize document + lines
    4. Stamp last_issued_at
    5. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        template_repo: RecurringTemplateRepository,
        line_repo: RecurringLineRepository,
        materializer: InvoiceMaterializer,
    ):
        self.uow = uow
        self.template_repo = template_repo
        self.line_repo = line_repo
        self.materializer = materializer

    async def execute(self, context: AuthContext, template_id: str) -> Result[GeneratedInvoiceResponseDTO]:
        error = require_superadmin(context)
        if error:
            return Return.err(error)

        try:
            template = await self.template_repo.get_by_id(template_id, context.company_id)
            if not template:
                return Return.err(not_found(f"Recurring template {template_id} not found"))

            lines = await self.line_repo.get_by_template_id(template.id)
            if not lines:
                return Return.err(
                    validation_error(
                        f"Recurring template {template_id} has no lines",
                        reason="Nothing to invoice",
                    )
                )

            document, document_lines = await self.materializer.materialize(template, lines)

            template.last_issued_at = datetime.utcnow()
            await self.template_repo.update(template)

            await self.uow.commit()

            logger.info(f"Generated invoice {document.id} from template {template_id} on demand")
            return Return.ok(to_invoice_response(document, document_lines))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to generate invoice from template {template_id}: {e}")
            return Return.err(persistence_error("Failed to generate invoice from template", e))
