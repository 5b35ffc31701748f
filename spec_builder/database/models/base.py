# Path: spec_builder/database/models/base.py
"""
Database Base Model

SQLAlchemy declarative base and the engine behind DatabaseStorage.

Accepted URLs:
- ':memory:' (or any in-memory SQLite URL): single shared connection, tests
- sqlite:///path/to/file.db: one operator workstation
- postgresql://...: shared deployment, pooled (psycopg2 driver)
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool, QueuePool


logger = logging.getLogger('output.database')

Base = declarative_base()

_engine: Optional[Engine] = None
_SessionFactory = None

IN_MEMORY = ':memory:'


def _configured_url() -> tuple[str, dict]:
    """Database URL and pool sizing from SPEC_BUILDER_DB_* settings."""
    from spec_builder.config_loader import ConfigLoader
    config = ConfigLoader()

    pool = {
        'pool_size': config.get('db_pool_size', 5),
        'max_overflow': config.get('db_pool_max_overflow', 10),
        'pool_timeout': config.get('db_pool_timeout', 30),
        'pool_recycle': config.get('db_pool_recycle', 3600),
    }
    return config.get_db_connection_string(), pool


def _engine_options(url, pool: dict) -> dict:
    """
    Pick pooling per backend.

    SQLite in memory needs one connection shared by every session or each
    session would see an empty database.
    """
    if url.get_backend_name() != 'sqlite':
        return {'poolclass': QueuePool, **pool}

    options = {'connect_args': {'check_same_thread': False}}
    if url.database in (None, '', IN_MEMORY):
        options['poolclass'] = StaticPool
    else:
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return options


def initialize_engine(db_url: Optional[str] = None) -> None:
    """
    Create the engine and session factory.

    Args:
        db_url: Database URL, ':memory:' for an in-memory SQLite database,
                or None to use SPEC_BUILDER_DB_URL / the PostgreSQL settings

    Example:
        initialize_engine(':memory:')
        initialize_engine('sqlite:////var/lib/spec_builder/spec_builder.db')
    """
    global _engine, _SessionFactory

    if _engine is not None:
        logger.warning("Database engine already initialized")
        return

    pool = {}
    if db_url is None:
        db_url, pool = _configured_url()
    if db_url == IN_MEMORY:
        db_url = 'sqlite://'

    url = make_url(db_url)
    _engine = create_engine(url, echo=False, **_engine_options(url, pool))
    _SessionFactory = sessionmaker(bind=_engine)

    logger.info(
        f"Database engine initialized: {url.get_backend_name()} "
        f"({url.database or 'in-memory'})"
    )


def get_engine() -> Engine:
    """
    Return the initialized engine.

    Raises:
        RuntimeError: If initialize_engine() has not been called
    """
    if _engine is None:
        raise RuntimeError(
            "Database engine not initialized. Call initialize_engine() first."
        )
    return _engine


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """
    Transactional session: commit on success, roll back on error.

    Example:
        with session_scope() as session:
            value = StorageOperations.get(session, 'LIMS_CATALOGUE')
    """
    get_engine()
    session = _SessionFactory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_all_tables() -> None:
    """Create missing tables. Safe to call repeatedly."""
    Base.metadata.create_all(get_engine())
    logger.info("Database tables created")


def reset_engine() -> None:
    """Dispose of the engine so tests can initialize again."""
    global _engine, _SessionFactory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionFactory = None


def get_database_type() -> Optional[str]:
    """'postgresql', 'sqlite', or None if not initialized."""
    if _engine is None:
        return None
    return _engine.url.get_backend_name()


__all__ = [
    'Base',
    'initialize_engine',
    'get_engine',
    'session_scope',
    'create_all_tables',
    'reset_engine',
    'get_database_type',
]
