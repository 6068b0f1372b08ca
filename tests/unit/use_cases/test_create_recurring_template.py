"""Unit tests for CreateRecurringTemplate use case

Tests cover:
- Successful creation with lines numbered 1..N
- Initial next_issue_date computed from start_date
- Role check before any persistence
- Validation of lines and day fields
- Compensating delete when line insert fails
"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.errors import ErrorCode
from src.app.use_cases.recurring import (
    CreateRecurringTemplate,
    RecurringRunResultDTO,
    RecurringTemplateCommandDTO,
)
from src.domain.customer import Customer
from src.domain.recurring_template import RecurrenceFrequency


@pytest.fixture
def mock_template_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=lambda template: template)
    repo.delete = AsyncMock()
    return repo


@pytest.fixture
def mock_line_repo():
    repo = MagicMock()
    repo.create_many = AsyncMock(side_effect=lambda lines: lines)
    return repo


@pytest.fixture
def mock_customer_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(
        return_value=Customer(id="customer_1", company_id="company_1", name="ACME GmbH")
    )
    return repo


@pytest.fixture
def create_use_case(mock_uow, mock_template_repo, mock_line_repo, mock_customer_repo):
    return CreateRecurringTemplate(
        uow=mock_uow,
        template_repo=mock_template_repo,
        line_repo=mock_line_repo,
        customer_repo=mock_customer_repo,
    )


@pytest.fixture
def sample_command():
    return RecurringTemplateCommandDTO(
        customer_id="customer_1",
        name="Monthly maintenance",
        frequency=RecurrenceFrequency.MONTHLY,
        day_of_month=31,
        payment_terms_days=30,
        start_date=date(2025, 1, 31),
        lines=[
            {"description": "Consulting", "quantity": "10", "unit": "h", "unit_price": "100.00"},
            {"description": "Hosting", "quantity": "1", "unit_price": "50.00", "project_id": "project_9"},
        ],
    )


@pytest.mark.asyncio
class TestCreateRecurringTemplateSuccess:
    """Test successful template creation"""

    async def test_creates_template_and_numbered_lines(
        self, create_use_case, mock_template_repo, mock_line_repo, mock_uow, superadmin_context, sample_command
    ):
        """
        Given: Superadmin and a valid command with two lines
        When: execute is called
        Then: Template and lines 1..2 are created and committed
        """
        # Act
        result = await create_use_case.execute(superadmin_context, sample_command, today=date(2025, 1, 10))

        # Assert
        assert result.is_ok()
        response = result.value
        assert response.company_id == "company_1"
        assert response.customer_name == "ACME GmbH"
        assert response.is_active is True
        assert [line.line_number for line in response.lines] == [1, 2]
        assert response.lines[1].project_id == "project_9"

        created_template = mock_template_repo.create.call_args[0][0]
        assert created_template.created_by == "user_admin"
        created_lines = mock_line_repo.create_many.call_args[0][0]
        assert all(line.template_id == created_template.id for line in created_lines)
        mock_uow.commit.assert_called_once()

    async def test_future_start_date_is_first_issue_date(
        self, create_use_case, superadmin_context, sample_command
    ):
        """
        Given: start_date after today
        When: execute is called
        Then: next_issue_date equals start_date
        """
        # Act
        result = await create_use_case.execute(superadmin_context, sample_command, today=date(2025, 1, 10))

        # Assert
        assert result.value.next_issue_date == date(2025, 1, 31)

    async def test_past_start_date_is_rolled_forward(
        self, create_use_case, superadmin_context, sample_command
    ):
        """
        Given: start_date on or before today
        When: execute is called
        Then: next_issue_date is the first occurrence after today
        """
        # Act
        result = await create_use_case.execute(superadmin_context, sample_command, today=date(2025, 1, 31))

        # Assert
        assert result.value.next_issue_date == date(2025, 2, 28)


@pytest.mark.asyncio
class TestCreateRecurringTemplateRejections:
    """Test rejected creations"""

    async def test_non_superadmin_is_forbidden_and_nothing_persisted(
        self, create_use_case, mock_template_repo, mock_line_repo, mock_uow, accountant_context, sample_command
    ):
        """
        Given: Caller is an accountant
        When: execute is called
        Then: FORBIDDEN and no repository write happens
        """
        # Act
        result = await create_use_case.execute(accountant_context, sample_command)

        # Assert
        assert result.is_err()
        assert result.error.code == ErrorCode.FORBIDDEN
        mock_template_repo.create.assert_not_called()
        mock_line_repo.create_many.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_empty_lines_is_validation_error(
        self, create_use_case, mock_template_repo, superadmin_context, sample_command
    ):
        """
        Given: Command without lines
        When: execute is called
        Then: VALIDATION_ERROR
        """
        # Arrange
        command = sample_command.model_copy(update={"lines": []})

        # Act
        result = await create_use_case.execute(superadmin_context, command)

        # Assert
        assert result.error.code == ErrorCode.VALIDATION_ERROR
        mock_template_repo.create.assert_not_called()

    async def test_day_of_month_with_weekly_is_validation_error(
        self, create_use_case, superadmin_context, sample_command
    ):
        """
        Given: Weekly frequency with day_of_month
        When: execute is called
        Then: VALIDATION_ERROR
        """
        # Arrange
        command = sample_command.model_copy(update={"frequency": RecurrenceFrequency.WEEKLY})

        # Act
        result = await create_use_case.execute(superadmin_context, command)

        # Assert
        assert result.error.code == ErrorCode.VALIDATION_ERROR

    async def test_unknown_customer_is_not_found(
        self, create_use_case, mock_customer_repo, mock_template_repo, superadmin_context, sample_command
    ):
        """
        Given: Customer not in the caller's company
        When: execute is called
        Then: NOT_FOUND
        """
        # Arrange
        mock_customer_repo.get_by_id = AsyncMock(return_value=None)

        # Act
        result = await create_use_case.execute(superadmin_context, sample_command)

        # Assert
        assert result.error.code == ErrorCode.NOT_FOUND
        mock_customer_repo.get_by_id.assert_called_once_with("customer_1", "company_1")
        mock_template_repo.create.assert_not_called()


class TestRecurringTemplateCommandValidation:
    """Test field constraints of the command DTO"""

    def test_quantity_must_be_positive(self):
        """Test line quantity of zero is rejected by the DTO"""
        with pytest.raises(ValueError):
            RecurringTemplateCommandDTO(
                customer_id="customer_1",
                name="x",
                start_date=date(2025, 1, 1),
                lines=[{"description": "Bad", "quantity": Decimal("0"), "unit_price": Decimal("1")}],
            )

    def test_documented_example_is_a_valid_command(self):
        """Test the OpenAPI example is published and accepted by the DTO"""
        # Arrange
        example = RecurringTemplateCommandDTO.model_json_schema()["example"]

        # Act
        command = RecurringTemplateCommandDTO.model_validate(example)

        # Assert
        assert command.frequency == RecurrenceFrequency.MONTHLY
        assert len(command.lines) == 1

    def test_documented_run_summary_example_is_valid(self):
        """Test the run summary example matches the summary model"""
        # Arrange
        example = RecurringRunResultDTO.model_json_schema()["example"]

        # Act
        summary = RecurringRunResultDTO.model_validate(example)

        # Assert
        assert (summary.processed, summary.successful, summary.failed) == (3, 2, 1)
        assert [item.status for item in summary.results] == ["created", "error", "created"]


@pytest.mark.asyncio
class TestCreateRecurringTemplateCompensation:
    """Test compensation when the line insert fails"""

    async def test_line_failure_deletes_template(
        self, create_use_case, mock_template_repo, mock_line_repo, mock_uow, superadmin_context, sample_command
    ):
        """
        Given: Line insert raises
        When: execute is called
        Then: Template is deleted again, PERSISTENCE_ERROR returned
        """
        # Arrange
        mock_line_repo.create_many = AsyncMock(side_effect=Exception("constraint violation"))

        # Act
        result = await create_use_case.execute(superadmin_context, sample_command)

        # Assert
        assert result.is_err()
        assert result.error.code == ErrorCode.PERSISTENCE_ERROR
        assert "constraint violation" in result.error.reason
        created_template = mock_template_repo.create.call_args[0][0]
        mock_template_repo.delete.assert_called_once_with(created_template.id)
        mock_uow.rollback.assert_called()
