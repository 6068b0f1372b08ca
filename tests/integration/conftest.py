import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  registers all tables on SQLModel.metadata
from src.depends import get_session
from src.domain.company_member import CompanyMember, MemberRole
from src.domain.customer import Customer


@pytest_asyncio.fixture(scope="function")
async def engine():
    """Create an in-memory SQLite engine with a fresh schema per test"""
    # One shared connection, otherwise every session sees its own empty database
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def company(db_session):
    """Company with a superadmin, an accountant and one customer"""
    db_session.add_all([
        CompanyMember(id="member_admin", company_id="company_1", user_id="user_admin", role=MemberRole.SUPERADMIN),
        CompanyMember(id="member_acc", company_id="company_1", user_id="user_accountant", role=MemberRole.ACCOUNTANT),
        CompanyMember(id="member_other", company_id="company_2", user_id="user_other_admin", role=MemberRole.SUPERADMIN),
        Customer(id="customer_1", company_id="company_1", name="ACME GmbH"),
        Customer(id="customer_2", company_id="company_2", name="Other Corp"),
    ])
    await db_session.commit()
    return "company_1"


@pytest_asyncio.fixture
async def app(db_session):
    """Create the application with the session dependency overridden"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    return app


@pytest_asyncio.fixture
async def client(app):
    """Create test client for the application"""
    # Use ASGITransport for httpx AsyncClient
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
