"""Integration tests for the recurring template repositories"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from src.adapter.repositories import (
    SqlAlchemyDocumentRepository,
    SqlAlchemyRecurringLineRepository,
    SqlAlchemyRecurringTemplateRepository,
)
from src.domain.document import Document
from src.domain.recurring_line import RecurringLine
from src.domain.recurring_template import RecurringTemplate, RecurrenceFrequency


def make_template(template_id: str, next_issue_date: date, is_active: bool = True) -> RecurringTemplate:
    return RecurringTemplate(
        id=template_id,
        company_id="company_1",
        customer_id="customer_1",
        name=f"Template {template_id}",
        frequency=RecurrenceFrequency.MONTHLY,
        next_issue_date=next_issue_date,
        is_active=is_active,
        created_by="user_admin",
    )


def make_line(template_id: str, line_number: int) -> RecurringLine:
    return RecurringLine(
        template_id=template_id,
        company_id="company_1",
        line_number=line_number,
        description=f"Line {line_number}",
        quantity=Decimal("1"),
        unit_price=Decimal("10.00"),
    )


class TestRecurringTemplateRepository:
    """Integration tests for SqlAlchemyRecurringTemplateRepository"""

    @pytest.mark.asyncio
    async def test_get_due_returns_active_templates_up_to_today(self, db_session):
        """Test only active templates with next_issue_date <= today are due"""
        # Arrange
        repo = SqlAlchemyRecurringTemplateRepository(db_session)
        await repo.create(make_template("due_past", date(2025, 2, 1)))
        await repo.create(make_template("due_today", date(2025, 3, 1)))
        await repo.create(make_template("future", date(2025, 3, 2)))
        await repo.create(make_template("inactive", date(2025, 1, 1), is_active=False))
        await db_session.commit()

        # Act
        due = await repo.get_due(date(2025, 3, 1))

        # Assert
        assert [template.id for template in due] == ["due_past", "due_today"]

    @pytest.mark.asyncio
    async def test_get_by_id_is_scoped_to_company(self, db_session):
        """Test a template of another company is not visible"""
        # Arrange
        repo = SqlAlchemyRecurringTemplateRepository(db_session)
        await repo.create(make_template("t-1", date(2025, 3, 1)))
        await db_session.commit()

        # Act & Assert
        assert await repo.get_by_id("t-1", "company_1") is not None
        assert await repo.get_by_id("t-1", "company_2") is None
        assert await repo.get_by_id("t-1") is not None

    @pytest.mark.asyncio
    async def test_advance_schedule_is_conditional(self, db_session):
        """Test only the first advance from a given date succeeds"""
        # Arrange
        repo = SqlAlchemyRecurringTemplateRepository(db_session)
        await repo.create(make_template("t-1", date(2025, 3, 1)))
        await db_session.commit()
        issued_at = datetime(2025, 3, 1, 6, 0, 0)

        # Act
        first = await repo.advance_schedule("t-1", date(2025, 3, 1), date(2025, 4, 1), issued_at)
        second = await repo.advance_schedule("t-1", date(2025, 3, 1), date(2025, 4, 1), issued_at)
        await db_session.commit()

        # Assert
        assert first is True
        assert second is False
        template = await repo.get_by_id("t-1")
        assert template.next_issue_date == date(2025, 4, 1)
        assert template.last_issued_at == issued_at

    @pytest.mark.asyncio
    async def test_delete_removes_lines(self, db_session):
        """Test deleting a template deletes its lines"""
        # Arrange
        template_repo = SqlAlchemyRecurringTemplateRepository(db_session)
        line_repo = SqlAlchemyRecurringLineRepository(db_session)
        await template_repo.create(make_template("t-1", date(2025, 3, 1)))
        await line_repo.create_many([make_line("t-1", 1), make_line("t-1", 2)])
        await db_session.commit()

        # Act
        await template_repo.delete("t-1")
        await db_session.commit()

        # Assert
        assert await template_repo.get_by_id("t-1") is None
        assert await line_repo.get_by_template_id("t-1") == []


class TestRecurringLineRepository:
    """Integration tests for SqlAlchemyRecurringLineRepository"""

    @pytest.mark.asyncio
    async def test_lines_are_ordered_and_grouped(self, db_session):
        """Test lines come back by line number, grouped per template"""
        # Arrange
        template_repo = SqlAlchemyRecurringTemplateRepository(db_session)
        line_repo = SqlAlchemyRecurringLineRepository(db_session)
        await template_repo.create(make_template("t-1", date(2025, 3, 1)))
        await template_repo.create(make_template("t-2", date(2025, 3, 1)))
        await line_repo.create_many([make_line("t-1", 2), make_line("t-1", 1), make_line("t-2", 1)])
        await db_session.commit()

        # Act
        lines = await line_repo.get_by_template_id("t-1")
        grouped = await line_repo.get_by_template_ids(["t-1", "t-2", "t-3"])

        # Assert
        assert [line.line_number for line in lines] == [1, 2]
        assert len(grouped["t-1"]) == 2
        assert len(grouped["t-2"]) == 1
        assert grouped.get("t-3", []) == []

    @pytest.mark.asyncio
    async def test_delete_by_template_id_returns_count(self, db_session):
        """Test line replacement removes every old line"""
        # Arrange
        template_repo = SqlAlchemyRecurringTemplateRepository(db_session)
        line_repo = SqlAlchemyRecurringLineRepository(db_session)
        await template_repo.create(make_template("t-1", date(2025, 3, 1)))
        await line_repo.create_many([make_line("t-1", 1), make_line("t-1", 2), make_line("t-1", 3)])
        await db_session.commit()

        # Act
        removed = await line_repo.delete_by_template_id("t-1")
        await db_session.commit()

        # Assert
        assert removed == 3
        assert await line_repo.get_by_template_id("t-1") == []


class TestDocumentRepository:
    """Integration tests for SqlAlchemyDocumentRepository"""

    @pytest.mark.asyncio
    async def test_exists_for_template(self, db_session):
        """Test back-reference lookup"""
        # Arrange
        repo = SqlAlchemyDocumentRepository(db_session)
        await repo.create(
            Document(company_id="company_1", customer_id="customer_1", recurring_template_id="t-1")
        )
        await db_session.commit()

        # Act & Assert
        assert await repo.exists_for_template("t-1") is True
        assert await repo.exists_for_template("t-2") is False
