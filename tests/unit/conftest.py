"""Shared fixtures for unit tests"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.access import AuthContext
from src.domain.company_member import MemberRole
from src.domain.recurring_line import RecurringLine, TaxRate
from src.domain.recurring_template import RecurringTemplate, RecurrenceFrequency


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def superadmin_context():
    """Superadmin of company_1"""
    return AuthContext(user_id="user_admin", company_id="company_1", role=MemberRole.SUPERADMIN)


@pytest.fixture
def accountant_context():
    """Accountant of company_1"""
    return AuthContext(user_id="user_accountant", company_id="company_1", role=MemberRole.ACCOUNTANT)


@pytest.fixture
def employee_context():
    """Employee of company_1"""
    return AuthContext(user_id="user_employee", company_id="company_1", role=MemberRole.EMPLOYEE)


@pytest.fixture
def sample_template():
    """Active monthly template due on 2025-01-31"""
    return RecurringTemplate(
        id="template_1",
        company_id="company_1",
        customer_id="customer_1",
        name="Monthly maintenance",
        frequency=RecurrenceFrequency.MONTHLY,
        day_of_month=31,
        payment_terms_days=30,
        notes="Thank you",
        next_issue_date=date(2025, 1, 31),
        is_active=True,
        created_by="user_admin",
    )


@pytest.fixture
def sample_lines():
    """Two lines of template_1"""
    return [
        RecurringLine(
            id="line_1",
            template_id="template_1",
            company_id="company_1",
            line_number=1,
            description="Consulting",
            quantity=Decimal("10"),
            unit="h",
            unit_price=Decimal("100.00"),
            tax_rate=TaxRate.STANDARD_20,
        ),
        RecurringLine(
            id="line_2",
            template_id="template_1",
            company_id="company_1",
            line_number=2,
            description="Hosting",
            quantity=Decimal("1"),
            unit="pcs",
            unit_price=Decimal("50.00"),
            tax_rate=TaxRate.STANDARD_20,
            project_id="project_9",
        ),
    ]
