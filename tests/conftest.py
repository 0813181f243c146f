import os

# 앱 import 전에 테스트용 설정 (메모리 SQLite, 시드 데이터 사용)
os.environ["DB_URL"] = "sqlite://"
os.environ["STORAGE_BACKEND"] = "sql"
os.environ["SEED_DEFAULT_DATA"] = "true"
os.environ["SESSION_SECRET"] = "test-session-secret"
os.environ["LOG_LEVEL"] = "WARNING"

from contextlib import ExitStack  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from database.db import Base, SessionLocal, engine, init_db  # noqa: E402
from main import app  # noqa: E402
from services.bootstrap import seed_default_data  # noqa: E402
from services.storage.sql_storage import DatabaseStorage  # noqa: E402

# 시드 데이터 ID (services/bootstrap.py 생성 순서)
SEED_FACULTY_ID = 1
SEED_TEACHER_ID = 1
SEED_GROUP_ID = 1
SEED_PERIOD_ID = 1
SEED_STUDENT_ID = 1
ADMIN_USER_ID, TEACHER_USER_ID, STUDENT_USER_ID = 1, 2, 3

CREDENTIALS = {
    "admin": ("admin", "admin123"),
    "teacher": ("teacher", "teacher123"),
    "student": ("student", "student123"),
}


@pytest.fixture
def empty_db():
    Base.metadata.drop_all(bind=engine)
    init_db()
    yield


@pytest.fixture
def seeded_db(empty_db):
    db = SessionLocal()
    try:
        seed_default_data(DatabaseStorage(db))
    finally:
        db.close()
    yield


@pytest.fixture
def db_storage(seeded_db):
    db = SessionLocal()
    try:
        yield DatabaseStorage(db)
    finally:
        db.close()


@pytest.fixture
def client_factory(seeded_db):
    """로그인하지 않은 클라이언트 생성기 (클라이언트마다 쿠키가 따로 유지됨)"""
    with ExitStack() as stack:
        def _make() -> TestClient:
            return stack.enter_context(TestClient(app))
        yield _make


def login(client: TestClient, username: str, password: str) -> TestClient:
    resp = client.post("/api/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return client


@pytest.fixture
def client(client_factory):
    return client_factory()


@pytest.fixture
def admin_client(client_factory):
    return login(client_factory(), *CREDENTIALS["admin"])


@pytest.fixture
def teacher_client(client_factory):
    return login(client_factory(), *CREDENTIALS["teacher"])


@pytest.fixture
def student_client(client_factory):
    return login(client_factory(), *CREDENTIALS["student"])
