"""Shared fixtures for the Product API tests.

The application reads its configuration at import time, so the database
location is pinned to a throwaway file before anything imports it.
"""

import os
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

_TMP_DIR = Path(tempfile.mkdtemp(prefix="product-api-tests-"))
os.environ["DB_PATH"] = str(_TMP_DIR / "products.db")
os.environ.pop("DATABASE_URL", None)
os.environ["APP_ENV"] = "production"


@pytest.fixture
def engine():
    from product_api.app.db import engine as db_engine
    from product_api.app.models import Base

    Base.metadata.drop_all(bind=db_engine)
    Base.metadata.create_all(bind=db_engine)
    yield db_engine
    Base.metadata.drop_all(bind=db_engine)


@pytest.fixture
def client(engine) -> TestClient:
    from product_api.app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def widget() -> dict:
    return {"name": "Widget", "description": "A widget", "quantity": 5}
