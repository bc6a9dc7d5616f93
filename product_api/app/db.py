import os
from typing import Iterator, Optional

from loguru import logger
from fastapi import HTTPException
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

DB_PATH = os.getenv("DB_PATH", "products.db")

def resolve_database_url(database_url: Optional[str], db_path: str) -> str:
    """
    DATABASE_URL wins when set; otherwise the SQLite file at DB_PATH.
    """
    if database_url and database_url.strip():
        return database_url.strip()
    return f"sqlite:///{db_path}"

DATABASE_URL = resolve_database_url(os.getenv("DATABASE_URL"), DB_PATH)

def connect_args_for(url: str) -> dict:
    # sync handlers run in a threadpool; the sqlite driver pins connections to a thread otherwise
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}

engine = create_engine(DATABASE_URL, connect_args=connect_args_for(DATABASE_URL), future=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

def init_db():
    """
    Create the Products table if it does not exist yet (idempotent).
    Called once at application startup and by scripts/init_db.py.
    """
    # Import here to avoid circulars
    from .models import Base  # noqa
    logger.info("Ensuring schema on {}", DATABASE_URL)
    Base.metadata.create_all(bind=engine)

def get_session() -> Iterator[Session]:
    """
    FastAPI dependency: yields a DB session, commits on success, rolls back on error.
    """
    s: Session = SessionLocal()
    try:
        yield s
        s.commit()
    except HTTPException:
        s.rollback()
        raise
    except Exception as e:
        logger.error("Rolling back session after {}", type(e).__name__)
        s.rollback()
        raise
    finally:
        s.close()
