import os
import tempfile

import pytest
from fastapi.testclient import TestClient

# Settings are read at import time, so the test environment must exist before any app import.
_DB_DIR = tempfile.mkdtemp(prefix="school_test_")
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR}/test_school.db"
os.environ["LOG_TO_FILE"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"


@pytest.fixture(scope="session")
def app():
    import main as main_module
    return main_module.app


@pytest.fixture()
def db_session(app):
    from app.db.database import SessionLocal
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def _clean_tables(app):
    yield
    from app.db.database import SessionLocal
    from app.models import Student, User
    db = SessionLocal()
    try:
        db.query(Student).delete()
        db.query(User).delete()
        db.commit()
    finally:
        db.close()


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def make_student(db_session):
    """Insert a student directly, bypassing the API."""
    from app.models import Student, User

    def _make(name="Test Student", email="student@school.edu", **details):
        user = User(name=name, email=email, role_id=3, reporter_id=1)
        user.student = Student(**details)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make
