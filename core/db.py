from __future__ import annotations

import logging
from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from core.config import get_settings
from core.models import Base

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_engine():
    return create_engine(get_settings().database_url, pool_pre_ping=True)


@lru_cache(maxsize=1)
def get_session_factory():
    return sessionmaker(bind=get_engine(), autoflush=False, autocommit=False)


def reset_engine() -> None:
    """Drop cached engine/session factory, e.g. after DATABASE_URL changes."""
    get_session_factory.cache_clear()
    get_engine.cache_clear()


def init_db() -> None:
    Base.metadata.create_all(bind=get_engine())


@contextmanager
def session_scope() -> Iterator[Session]:
    session = get_session_factory()()
    try:
        yield session
        session.commit()
    except Exception:
        logger.exception("Rolling back database session")
        session.rollback()
        raise
    finally:
        session.close()
