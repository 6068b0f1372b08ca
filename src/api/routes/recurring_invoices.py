"""Recurring Invoices API Routes

FastAPI routes for recurring invoice templates and the daily scheduler job.
"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.dependencies import get_auth_context, verify_cron_secret
from src.api.error import ClientError
from src.api.schemas.recurring_request import RecurringTemplateRequestSchema, ToggleActiveRequestSchema
from src.app.use_cases.access import AuthContext
from src.app.use_cases.recurring import (
    CreateRecurringTemplate,
    UpdateRecurringTemplate,
    ToggleRecurringTemplate,
    DeleteRecurringTemplate,
    ListRecurringTemplates,
    GetRecurringTemplate,
    GenerateInvoiceFromTemplate,
    ProcessRecurringInvoices,
    RecurringTemplateCommandDTO,
    RecurringTemplateResponseDTO,
    ListRecurringTemplatesResponseDTO,
    DeleteRecurringTemplateResponseDTO,
    GeneratedInvoiceResponseDTO,
    RecurringRunResultDTO,
)
from src.app.services.invoice_materializer import InvoiceMaterializer
from src.adapter.repositories import (
    SqlAlchemyCustomerRepository,
    SqlAlchemyDocumentLineRepository,
    SqlAlchemyDocumentRepository,
    SqlAlchemyRecurringLineRepository,
    SqlAlchemyRecurringTemplateRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session

router = APIRouter(prefix="/recurring-invoices", tags=["Recurring Invoices"])

FORBIDDEN_EXAMPLE = {
    "description": "Caller is not a superadmin of the company",
    "content": {
        "application/json": {
            "example": {
                "error": {
                    "code": "FORBIDDEN",
                    "message": "Only superadmins can perform this action",
                    "reason": "Caller lacks the superadmin role"
                }
            }
        }
    }
}

NOT_FOUND_EXAMPLE = {
    "description": "Template not found in the caller's company",
    "content": {
        "application/json": {
            "example": {
                "error": {
                    "code": "NOT_FOUND",
                    "message": "Recurring template 3f1c2a9e-... not found",
                    "reason": "Resource does not exist or belongs to another company"
                }
            }
        }
    }
}


def _materializer(session: AsyncSession, uow: SqlAlchemyUnitOfWork) -> InvoiceMaterializer:
    return InvoiceMaterializer(
        uow,
        SqlAlchemyDocumentRepository(session),
        SqlAlchemyDocumentLineRepository(session),
    )


@router.post(
    "/process",
    response_model=RecurringRunResultDTO,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(verify_cron_secret)],
    responses={
        401: {
            "description": "Missing or wrong bearer secret",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "UNAUTHORIZED",
                            "message": "Invalid or missing job credentials"
                        }
                    }
                }
            }
        }
    }
)
async def process_recurring_invoices(session: AsyncSession = Depends(get_session)):
    """
    Issue invoices for every due template (cron entry point).

    Requires `Authorization: Bearer <CRON_SECRET>`. No request body.

    **Returns:**
    - 200: Run summary `{processed, successful, failed, skipped, results}`
    - 401: Missing or wrong bearer secret
    """
    uow = SqlAlchemyUnitOfWork(session)

    use_case = ProcessRecurringInvoices(
        uow,
        SqlAlchemyRecurringTemplateRepository(session),
        SqlAlchemyRecurringLineRepository(session),
        _materializer(session, uow),
    )
    result = await use_case.execute()

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "",
    response_model=ListRecurringTemplatesResponseDTO,
    responses={403: FORBIDDEN_EXAMPLE},
)
async def list_recurring_templates(
    context: AuthContext = Depends(get_auth_context),
    session: AsyncSession = Depends(get_session),
):
    """
    List the company's recurring templates, newest first, with customer
    name and lines.
    """
    use_case = ListRecurringTemplates(
        SqlAlchemyRecurringTemplateRepository(session),
        SqlAlchemyRecurringLineRepository(session),
        SqlAlchemyCustomerRepository(session),
    )
    result = await use_case.execute(context)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "",
    response_model=RecurringTemplateResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        403: FORBIDDEN_EXAMPLE,
        400: {
            "description": "Validation error",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "VALIDATION_ERROR",
                            "message": "At least one line is required",
                            "reason": "lines is empty"
                        }
                    }
                }
            }
        }
    }
)
async def create_recurring_template(
    request: RecurringTemplateRequestSchema,
    context: AuthContext = Depends(get_auth_context),
    session: AsyncSession = Depends(get_session),
):
    """
    Create a recurring invoice template with its lines.

    `next_issue_date` is the first occurrence after today, counted from
    `start_date`. Lines are numbered 1..N in the given order.

    **Returns:**
    - 201: Template created
    - 400: Invalid lines or day settings for the frequency
    - 403: Caller is not a superadmin
    - 404: Customer not found
    """
    uow = SqlAlchemyUnitOfWork(session)
    command = RecurringTemplateCommandDTO(**request.model_dump())

    use_case = CreateRecurringTemplate(
        uow,
        SqlAlchemyRecurringTemplateRepository(session),
        SqlAlchemyRecurringLineRepository(session),
        SqlAlchemyCustomerRepository(session),
    )
    result = await use_case.execute(context, command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{template_id}",
    response_model=RecurringTemplateResponseDTO,
    responses={403: FORBIDDEN_EXAMPLE, 404: NOT_FOUND_EXAMPLE},
)
async def get_recurring_template(
    template_id: str,
    context: AuthContext = Depends(get_auth_context),
    session: AsyncSession = Depends(get_session),
):
    """Get one template with customer name and lines."""
    use_case = GetRecurringTemplate(
        SqlAlchemyRecurringTemplateRepository(session),
        SqlAlchemyRecurringLineRepository(session),
        SqlAlchemyCustomerRepository(session),
    )
    result = await use_case.execute(context, template_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put(
    "/{template_id}",
    response_model=RecurringTemplateResponseDTO,
    responses={403: FORBIDDEN_EXAMPLE, 404: NOT_FOUND_EXAMPLE},
)
async def update_recurring_template(
    template_id: str,
    request: RecurringTemplateRequestSchema,
    context: AuthContext = Depends(get_auth_context),
    session: AsyncSession = Depends(get_session),
):
    """
    Replace a template's header and all of its lines.

    The schedule is recomputed from the submitted settings and `start_date`.
    """
    uow = SqlAlchemyUnitOfWork(session)
    command = RecurringTemplateCommandDTO(**request.model_dump())

    use_case = UpdateRecurringTemplate(
        uow,
        SqlAlchemyRecurringTemplateRepository(session),
        SqlAlchemyRecurringLineRepository(session),
        SqlAlchemyCustomerRepository(session),
    )
    result = await use_case.execute(context, template_id, command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.patch(
    "/{template_id}/active",
    response_model=RecurringTemplateResponseDTO,
    responses={403: FORBIDDEN_EXAMPLE, 404: NOT_FOUND_EXAMPLE},
)
async def toggle_recurring_template(
    template_id: str,
    request: ToggleActiveRequestSchema,
    context: AuthContext = Depends(get_auth_context),
    session: AsyncSession = Depends(get_session),
):
    """Activate or deactivate a template."""
    use_case = ToggleRecurringTemplate(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyRecurringTemplateRepository(session),
        SqlAlchemyRecurringLineRepository(session),
        SqlAlchemyCustomerRepository(session),
    )
    result = await use_case.execute(context, template_id, request.is_active)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete(
    "/{template_id}",
    response_model=DeleteRecurringTemplateResponseDTO,
    responses={403: FORBIDDEN_EXAMPLE, 404: NOT_FOUND_EXAMPLE},
)
async def delete_recurring_template(
    template_id: str,
    context: AuthContext = Depends(get_auth_context),
    session: AsyncSession = Depends(get_session),
):
    """
    Delete a template.

    Templates that already produced invoices are deactivated instead
    (`deleted=false, deactivated=true`).
    """
    use_case = DeleteRecurringTemplate(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyRecurringTemplateRepository(session),
        SqlAlchemyDocumentRepository(session),
    )
    result = await use_case.execute(context, template_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/{template_id}/generate",
    response_model=GeneratedInvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={403: FORBIDDEN_EXAMPLE, 404: NOT_FOUND_EXAMPLE},
)
async def generate_invoice_from_template(
    template_id: str,
    context: AuthContext = Depends(get_auth_context),
    session: AsyncSession = Depends(get_session),
):
    """
    Create a draft invoice from the template now.

    Stamps `last_issued_at`; the schedule is not advanced.
    """
    uow = SqlAlchemyUnitOfWork(session)

    use_case = GenerateInvoiceFromTemplate(
        uow,
        SqlAlchemyRecurringTemplateRepository(session),
        SqlAlchemyRecurringLineRepository(session),
        _materializer(session, uow),
    )
    result = await use_case.execute(context, template_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
