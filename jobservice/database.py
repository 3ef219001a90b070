"""
Database schema and connection management.

Uses PostgreSQL with SQLAlchemy for job storage. Each invocation gets its
own engine without a connection pool, so closing the session closes the
underlying connection.
"""

from typing import Callable, Union

from sqlalchemy import create_engine, Column, Integer, String, Text
from sqlalchemy.engine import Engine, URL
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import NullPool

from .config import ServiceConfig

Base = declarative_base()

STATUS_OPEN = "open"


class Job(Base):
    """Job posting model."""

    __tablename__ = "jobs"

    job_id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, nullable=False)
    recruiter_id = Column(Integer, nullable=False)
    title = Column(String)
    description = Column(Text)
    status = Column(String, nullable=False, default=STATUS_OPEN, server_default=STATUS_OPEN)

    def __repr__(self):
        return f"<Job(job_id={self.job_id}, title='{self.title}', status={self.status})>"


jobs_table = Job.__table__


def create_db_engine(url: Union[str, URL], connect_args: dict = None):
    """
    Create an engine that opens a fresh connection per checkout.

    Args:
        url: Database URL
        connect_args: Extra DBAPI connect() arguments

    Returns:
        SQLAlchemy engine
    """
    return create_engine(url, poolclass=NullPool, connect_args=connect_args or {})


def init_database(url: Union[str, URL], connect_args: dict = None) -> None:
    """
    Create the jobs table if it does not exist.

    Intended for local development and tests; production schemas are
    managed outside this service.

    Args:
        url: Database URL
        connect_args: Extra DBAPI connect() arguments
    """
    engine = create_db_engine(url, connect_args)
    try:
        Base.metadata.create_all(engine)
    finally:
        engine.dispose()


def get_engine(config: ServiceConfig) -> Engine:
    """
    Create a non-pooling engine for the configured database.

    The caller disposes it when the invocation ends.

    Args:
        config: Service configuration

    Returns:
        SQLAlchemy engine
    """
    options = config.engine_options()
    return create_db_engine(options["url"], options["connect_args"])


def get_session_factory(engine: Engine) -> Callable[[], Session]:
    """Get a session factory bound to an engine."""
    return sessionmaker(bind=engine)
