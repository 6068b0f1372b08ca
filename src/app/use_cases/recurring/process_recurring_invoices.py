"""ProcessRecurringInvoices Use Case

Daily sweep that issues an invoice for every due template.
"""

import logging
from datetime import date, datetime
from typing import Optional
from libs.result import Result, Return
from src.app.errors import persistence_error
from src.app.repositories.recurring_line_repository import RecurringLineRepository
from src.app.repositories.recurring_template_repository import RecurringTemplateRepository
from src.app.services.invoice_materializer import InvoiceMaterializer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.recurrence import compute_next_issue_date
from .dtos import RecurringRunItemDTO, RecurringRunResultDTO

logger = logging.getLogger(__name__)

STATUS_CREATED = "created"
STATUS_ERROR = "error"
STATUS_SKIPPED = "skipped"


class ProcessRecurringInvoices:
    """
    Use Case: Issue invoices for all due templates

    Runs with service privileges; there is no caller to authorize.

    Business Rules:
    1. Due means is_active and next_issue_date <= today
    2. Templates are processed one after another
    3. Document creation happens before the schedule advance, in one transaction
    4. The new next_issue_date is computed from the current one, so missed
       periods are skipped rather than issued one by one
    5. A failing template is recorded and the sweep continues
    6. If another run already advanced the template, or it was deactivated
       meanwhile, the document is rolled back and the template is reported
       as skipped

    Flow (per template):
    1. Reload template, fetch lines
    2. Materialize document + lines
    3. Conditionally advance next_issue_date and stamp last_issued_at
    4. Commit, or roll back and record the outcome
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

    async def execute(self, today: Optional[date] = None) -> Result[RecurringRunResultDTO]:
        """
        Execute the sweep

        Args:
            today: Reference date (defaults to date.today())

        Returns:
            Result[RecurringRunResultDTO]: Run summary, or error if the due
            templates could not be selected
        """
        today = today or date.today()

        try:
            due_templates = await self.template_repo.get_due(today)
        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to select due recurring templates: {e}")
            return Return.err(persistence_error("Failed to select due recurring templates", e))

        # Rollbacks expire loaded entities, so only ids are carried into the loop
        template_ids = [template.id for template in due_templates]
        logger.info(f"Processing {len(template_ids)} due recurring templates for {today}")

        summary = RecurringRunResultDTO()

        for template_id in template_ids:
            item = await self._issue(template_id, today)
            summary.processed += 1
            if item.status == STATUS_CREATED:
                summary.successful += 1
            elif item.status == STATUS_ERROR:
                summary.failed += 1
            else:
                summary.skipped += 1
            summary.results.append(item)

        logger.info(
            f"Recurring run finished: processed={summary.processed}, "
            f"successful={summary.successful}, failed={summary.failed}, "
            f"skipped={summary.skipped}"
        )

        return Return.ok(summary)

    async def _issue(self, template_id: str, today: date) -> RecurringRunItemDTO:
        try:
            template = await self.template_repo.get_by_id(template_id)
            if not template or not template.is_active or template.next_issue_date > today:
                return RecurringRunItemDTO(template_id=template_id, status=STATUS_SKIPPED)

            lines = await self.line_repo.get_by_template_id(template.id)
            if not lines:
                raise ValueError("Template has no lines")

            document, _ = await self.materializer.materialize(template, lines)

            expected_next_issue_date = template.next_issue_date
            next_issue_date = compute_next_issue_date(
                template.frequency,
                expected_next_issue_date,
                day_of_month=template.day_of_month,
                today=today,
            )

            advanced = await self.template_repo.advance_schedule(
                template.id,
                expected_next_issue_date,
                next_issue_date,
                datetime.utcnow(),
            )
            if not advanced:
                await self.uow.rollback()
                logger.warning(f"Template {template_id} was advanced or deactivated meanwhile; skipped")
                return RecurringRunItemDTO(
                    template_id=template_id,
                    status=STATUS_SKIPPED,
                    error="Schedule advanced or template deactivated by another run",
                )

            await self.uow.commit()

            logger.info(
                f"Issued invoice {document.id} for template {template_id}; "
                f"next issue {next_issue_date}"
            )
            return RecurringRunItemDTO(
                template_id=template_id,
                document_id=document.id,
                status=STATUS_CREATED,
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to issue invoice for template {template_id}: {e}")
            return RecurringRunItemDTO(
                template_id=template_id,
                status=STATUS_ERROR,
                error=str(e),
            )
