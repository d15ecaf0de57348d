"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from staffboard.db.base import Base
from staffboard.db.engine import create_db_engine, create_session_factory
# Import all models to register with Base.metadata
import staffboard.db.models  # noqa: F401
from staffboard.db.models.people import DirectorRow, EmployeeRow, ManagerRow
# configures logging at import; must happen before log capture is installed
from staffboard.main import create_app
from staffboard.security import create_access_token


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_db_engine("sqlite+aiosqlite:///")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Create a test database session."""
    session_factory = create_session_factory(db_engine)
    async with session_factory() as session:
        yield session


@pytest.fixture
async def people(db_session):
    """Seed a small org chart.

    dir_1 runs mgr_1, mgr_2 and mgr_3; emp_1 and emp_2 report to mgr_1,
    emp_3 reports to mgr_2.
    """
    db_session.add(DirectorRow(director_id="dir_1", name="Dana Director", email="dana@example.com"))
    for idx in (1, 2, 3):
        db_session.add(
            ManagerRow(
                manager_id=f"mgr_{idx}",
                name=f"Manager {idx}",
                email=f"mgr{idx}@example.com",
                director_id="dir_1",
            )
        )
    await db_session.flush()
    for idx, manager_id in ((1, "mgr_1"), (2, "mgr_1"), (3, "mgr_2")):
        db_session.add(
            EmployeeRow(
                employee_id=f"emp_{idx}",
                name=f"Employee {idx}",
                email=f"emp{idx}@example.com",
                manager_id=manager_id,
                director_id="dir_1",
            )
        )
    await db_session.commit()
    return db_session


@pytest.fixture
def app(db_engine):
    """Create a test application instance with in-memory DB."""
    _app = create_app()
    _app.state.db_engine = db_engine
    _app.state.db_session_factory = create_session_factory(db_engine)
    return _app


@pytest.fixture
async def client(app):
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def auth_headers(user_id: str, role: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id, role)}"}


@pytest.fixture
def headers():
    """``headers(user_id, role)`` -> Authorization header for that caller."""
    return auth_headers
