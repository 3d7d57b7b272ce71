import os

# Point the application at throwaway settings before anything imports it
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ideaboard.db.database import Base, get_db
from ideaboard.core.security import get_password_hash, create_access_token
from ideaboard.models.user import User, UserRole
from ideaboard.models.ideas import Category, Idea, IdeaStatus

# Test database - in-memory SQLite shared by every connection of a test
TEST_DB_URL = "sqlite:///:memory:"

TEST_PASSWORD = "testpass123"
# bcrypt is slow on purpose; hash once for every fixture user
TEST_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)


@pytest.fixture(scope="function")
def db_session():
    """Create a test database session for direct database tests"""
    test_engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )

    # Create all tables
    Base.metadata.create_all(bind=test_engine)

    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = testing_session_local()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)
        test_engine.dispose()


@pytest.fixture(scope="function")
def mock_db_session():
    """Create a mock database session for service tests that must not touch a database"""
    mock_session = MagicMock()
    mock_session.query.return_value = mock_session
    mock_session.options.return_value = mock_session
    mock_session.filter.return_value = mock_session
    mock_session.first.return_value = None
    mock_session.all.return_value = []
    return mock_session


@pytest.fixture(scope="function")
def app(db_session):
    """The real application with its database swapped for the test session"""
    from main import create_app

    application = create_app()

    def override_get_db():
        yield db_session

    application.dependency_overrides[get_db] = override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client(app):
    return TestClient(app)


def _make_user(db_session, name, email, role=UserRole.USER, is_active=True):
    user = User(
        name=name,
        email=email,
        hashed_password=TEST_PASSWORD_HASH,
        role=role,
        is_active=is_active
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


# Database fixtures
@pytest.fixture
def test_user(db_session):
    """Create a regular user in database"""
    return _make_user(db_session, "Ada Lovelace", "ada@example.com")


@pytest.fixture
def test_user2(db_session):
    """Create a second regular user in database"""
    return _make_user(db_session, "Grace Hopper", "grace@example.com")


@pytest.fixture
def admin_user(db_session):
    """Create an administrator in database"""
    return _make_user(db_session, "Board Admin", "admin@example.com", role=UserRole.ADMIN)


@pytest.fixture
def test_category(db_session):
    category = Category(name="User Interface")
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def test_idea(db_session, test_user, test_category):
    """Create a pending idea authored by test_user"""
    idea = Idea(
        title="Dark mode",
        description="A darker theme for late-night sessions",
        author_id=test_user.id,
        category_id=test_category.id,
        status=IdeaStatus.PENDING
    )
    db_session.add(idea)
    db_session.commit()
    db_session.refresh(idea)
    return idea


def make_auth_headers(user):
    token = create_access_token(data={"sub": user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(test_user):
    """Bearer headers for test_user"""
    return make_auth_headers(test_user)


@pytest.fixture
def auth_headers2(test_user2):
    return make_auth_headers(test_user2)


@pytest.fixture
def admin_headers(admin_user):
    return make_auth_headers(admin_user)


@pytest.fixture
def sample_idea_data(test_category):
    """Sample payload for submitting an idea"""
    return {
        "title": "Keyboard shortcuts",
        "description": "Let power users move cards without the mouse",
        "category_id": test_category.id
    }


@pytest.fixture
def user_password():
    """Plain-text password of every fixture user"""
    return TEST_PASSWORD
