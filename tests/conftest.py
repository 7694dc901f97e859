import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

import kanban.models as models
import kanban.schemas as schemas
from kanban.config import Settings
from kanban.database import Base, build_session_factory, enable_sqlite_foreign_keys
from kanban.main import create_app
from kanban.services import boards, tasks, users

TEST_DATABASE_URL = "sqlite://"
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = build_session_factory(engine)

test_settings = Settings(
    DATABASE_URL=TEST_DATABASE_URL,
    JWT_SECRET_KEY="test-secret",
    CORS_ORIGINS="http://testserver",
    DEBUG=False,
)


@pytest.fixture(autouse=True)
def db_session() -> Session:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client() -> TestClient:
    app = create_app(test_settings)
    # Share the in-memory database with the session fixture
    app.state.engine = engine
    app.state.session_factory = TestingSessionLocal
    with TestClient(app) as test_client:
        yield test_client


def register_user(session: Session, email: str, password: str = "secret123") -> models.User:
    user, _token = users.register(session, test_settings, schemas.UserCreate(email=email, password=password))
    return user


def create_board(session: Session, owner: models.User, name: str = "Roadmap") -> models.Board:
    return boards.create_board(session, owner, name)


def create_task(session: Session, owner: models.User, column_id: int, title: str, order=None) -> models.Task:
    return tasks.create_task(session, owner, schemas.TaskCreate(column_id=column_id, title=title, order=order))


def auth_headers(client: TestClient, email: str, password: str = "secret123") -> dict:
    response = client.post("/api/v1/auth/register", json={"email": email, "password": password})
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}
