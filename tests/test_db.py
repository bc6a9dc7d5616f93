"""Tests for the data access context."""

import pytest
from fastapi import HTTPException
from sqlalchemy import select

from product_api.app.db import SessionLocal, connect_args_for, get_session, resolve_database_url
from product_api.app.models import Product


class TestDatabaseUrl:
    def test_defaults_to_sqlite_file(self):
        assert resolve_database_url(None, "products.db") == "sqlite:///products.db"

    def test_blank_override_is_ignored(self):
        assert resolve_database_url("   ", "/data/p.db") == "sqlite:////data/p.db"

    def test_explicit_url_wins(self):
        url = "sqlite:///elsewhere.db"
        assert resolve_database_url(f" {url} ", "products.db") == url

    def test_sqlite_connections_are_shared_across_threads(self):
        assert connect_args_for("sqlite:///x.db") == {"check_same_thread": False}
        assert connect_args_for("postgresql+psycopg://u:p@h/db") == {}


def _count_products() -> int:
    with SessionLocal() as s:
        return len(s.execute(select(Product)).scalars().all())


class TestSessionDependency:
    def test_commits_on_success(self, engine):
        gen = get_session()
        session = next(gen)
        session.add(Product(name="kept", quantity=1))

        with pytest.raises(StopIteration):
            next(gen)

        assert _count_products() == 1

    def test_rolls_back_and_reraises_on_error(self, engine):
        gen = get_session()
        session = next(gen)
        session.add(Product(name="dropped", quantity=1))
        session.flush()

        with pytest.raises(RuntimeError):
            gen.throw(RuntimeError("disk full"))

        assert _count_products() == 0

    def test_rolls_back_on_http_error(self, engine):
        gen = get_session()
        session = next(gen)
        session.add(Product(name="dropped", quantity=1))
        session.flush()

        with pytest.raises(HTTPException):
            gen.throw(HTTPException(status_code=404, detail="not found"))

        assert _count_products() == 0
