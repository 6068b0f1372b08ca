"""DeleteRecurringTemplate Use Case

Deletes a template, or deactivates it once invoices were generated from it.
"""

import logging
from datetime import datetime
from libs.result import Result, Return
from src.app.errors import not_found, persistence_error
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.recurring_template_repository import RecurringTemplateRepository
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import AuthContext, require_superadmin
from .dtos import DeleteRecurringTemplateResponseDTO

logger = logging.getLogger(__name__)


class DeleteRecurringTemplate:
    """
    Use Case: Remove a template of the caller's company

    Business Rules:
    1. Only superadmins may delete
    2. Never-referenced templates are hard-deleted with their lines
    3. Templates referenced by a generated document are soft-disabled
       (is_active=false) so the back-reference stays valid
    """

    def __init__(
        self,
        uow: UnitOfWork,
        template_repo: RecurringTemplateRepository,
        document_repo: DocumentRepository,
    ):
        self.uow = uow
        self.template_repo = template_repo
        self.document_repo = document_repo

    async def execute(
        self, context: AuthContext, template_id: str
    ) -> Result[DeleteRecurringTemplateResponseDTO]:
        error = require_superadmin(context)
        if error:
            return Return.err(error)

        try:
            template = await self.template_repo.get_by_id(template_id, context.company_id)
            if not template:
                return Return.err(not_found(f"Recurring template {template_id} not found"))

            if await self.document_repo.exists_for_template(template.id):
                template.is_active = False
                template.updated_at = datetime.utcnow()
                await self.template_repo.update(template)
                await self.uow.commit()

                logger.info(f"Deactivated recurring template {template_id} (has generated invoices)")
                return Return.ok(
                    DeleteRecurringTemplateResponseDTO(
                        template_id=template_id, deleted=False, deactivated=True
                    )
                )

            await self.template_repo.delete(template.id)
            await self.uow.commit()

            logger.info(f"Deleted recurring template {template_id}")
            return Return.ok(
                DeleteRecurringTemplateResponseDTO(
                    template_id=template_id, deleted=True, deactivated=False
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to delete recurring template {template_id}: {e}")
            return Return.err(persistence_error("Failed to delete recurring template", e))
