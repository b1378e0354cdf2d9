import pytest
from httpx import ASGITransport, AsyncClient

from attendance_api.database import Database
from attendance_api.dependencies import get_db
from attendance_api.main import app
from attendance_api.models.reference import Campus, Department, Level
from attendance_api.models.student import Student


@pytest.fixture
async def test_db(tmp_path):
    db = Database()
    await db.connect(f"sqlite+aiosqlite:///{tmp_path / 'attendance.db'}")
    await db.create_tables()
    yield db
    await db.disconnect()


@pytest.fixture
async def client(test_db):
    async def override_get_db():
        async with test_db.get_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def school(test_db):
    """Two campuses, two departments, levels and three students.

    Ids: campuses 1-2, departments 1-2, students 1 (Alice), 2 (Bob), 3 (Carol).
    """
    async with test_db.get_session() as session:
        session.add_all([
            Campus(id=1, name="Bonaberi", address="Bonaberi, Douala"),
            Campus(id=2, name="Yaounde", address="Yaounde Central"),
            Department(id=1, name="Software Engineering", category="Engineering"),
            Department(id=2, name="Nursing", category="Medical"),
            Level(id=1, level="100"),
            Level(id=2, level="200"),
        ])
        session.add_all([
            Student(id=1, matricule="CM00001", name="Alice Mbah", level="100", address="Douala",
                    contact="670000001", department_id=1, campus_id=1),
            Student(id=2, matricule="CM00002", name="Bob Nkem", level="200", address="Douala",
                    contact="670000002", department_id=1, campus_id=2),
            Student(id=3, matricule="CM00003", name="Carol Tabi", level="100", address="Yaounde",
                    contact="670000003", department_id=2, campus_id=2),
        ])
        await session.commit()
    return test_db
