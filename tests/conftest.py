import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, enable_sqlite_foreign_keys, get_db
from app.main import app
from app.schemas.freelancer_schema import FreelancerRequest
from app.services.freelancer_service import FreelancerService


TEST_DB_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def engine():
    """
    In-memory SQLite shared by every session of one test (StaticPool),
    tables recreated from scratch for each test.
    """
    test_engine = create_async_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(test_engine)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    """
    HTTPX AsyncClient bound to the FastAPI app; every request gets its own session.
    """

    async def _override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def create_freelancer(db):
    """
    Factory fixture creating freelancers through the service layer.
    """
    service = FreelancerService(db)

    async def _create(username: str, email: str | None = None, **kwargs):
        data = FreelancerRequest(
            username=username,
            email=email or f"{username}@example.com",
            **kwargs,
        )
        return await service.create_freelancer(data)

    return _create
