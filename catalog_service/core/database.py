"""
Database connection and session management
"""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from catalog_service.core.config import settings


def make_engine(database_url: str) -> Engine:
    """
    Create engine for the given URL.
    SQLite gets thread-sharing and SAVEPOINT-safe transactions,
    everything else gets the pooled PostgreSQL setup.
    """
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
        )
        enable_sqlite_transactions(engine)
        return engine

    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        connect_args={
            "connect_timeout": 10,  # 10 second connection timeout
            "options": "-c statement_timeout=30000"  # 30 second query timeout (PostgreSQL)
        },
        pool_recycle=3600,  # Recycle connections after 1 hour
    )


def enable_sqlite_transactions(engine: Engine) -> None:
    """
    Let SQLAlchemy emit BEGIN itself so that savepoints (used by tag
    find-or-create) nest inside the outer transaction on pysqlite.
    """
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


engine = make_engine(settings.DATABASE_URL)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency for getting database session.
    Use in FastAPI route dependencies.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
