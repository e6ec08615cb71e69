import pytest
import tempfile
from typing import Generator
from fastapi.testclient import TestClient

# It is important to set environment variables before importing app modules
import os
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="recipe-uploads-")
os.environ["ENVIRONMENT"] = "testing"

from app.db.session import Base, SessionLocal, engine
from app.main import app


@pytest.fixture(scope="session", autouse=True)
def db_engine():
    # Create tables
    Base.metadata.create_all(bind=engine)
    yield engine
    # Drop tables
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    os.remove("./test.db")


@pytest.fixture(autouse=True)
def clean_tables(db_engine):
    yield
    # Children first so foreign keys are never violated
    with db_engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())


@pytest.fixture(scope="function")
def db(db_engine) -> Generator:
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="module")
def client() -> Generator:
    with TestClient(app) as c:
        yield c
