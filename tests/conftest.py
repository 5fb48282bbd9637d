"""
Shared test fixtures.

Sets up an isolated test database so tests never touch
the real database. Tables are created before and dropped
after every test, so no test data persists.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from pond_ledger.auth import create_access_token
from pond_ledger.main import app
from pond_ledger.models import Base, Customer, FishType, Pond, User
from pond_ledger.models.base import get_db
from pond_ledger.models.enums import UserRole
from pond_ledger.models.pond import DEFAULT_FISH_TYPE_ID


# SQLite for tests, no external database needed.
TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop them after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db_session):
    """
    Provide a test client with the test database.

    get_db is overridden so the app, including the auth
    dependency, uses the test session.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# --- Users and tokens ---

def make_user(db_session, role, email):
    user = User(email=email, name=role.value.title(), role=role)
    db_session.add(user)
    db_session.commit()
    return user


def auth_header(user):
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def employee(db_session):
    return make_user(db_session, UserRole.EMPLOYEE, "employee@example.com")


@pytest.fixture
def owner(db_session):
    return make_user(db_session, UserRole.OWNER, "owner@example.com")


@pytest.fixture
def admin(db_session):
    return make_user(db_session, UserRole.ADMIN, "admin@example.com")


@pytest.fixture
def employee_headers(employee):
    return auth_header(employee)


@pytest.fixture
def owner_headers(owner):
    return auth_header(owner)


@pytest.fixture
def admin_headers(admin):
    return auth_header(admin)


# --- Reference data ---

@pytest.fixture
def fish_type(db_session):
    fish = FishType(id=DEFAULT_FISH_TYPE_ID, name="Ikan Nila")
    db_session.add(fish)
    db_session.commit()
    return fish


@pytest.fixture
def customer(db_session):
    customer = Customer(name="Pak Budi", phone="08123456789")
    db_session.add(customer)
    db_session.commit()
    return customer


@pytest.fixture
def pond(db_session, fish_type):
    pond = Pond(name="Kolam 1", type="production", fish_type_id=fish_type.id)
    db_session.add(pond)
    db_session.commit()
    return pond
