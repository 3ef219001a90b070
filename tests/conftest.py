"""
Pytest configuration and shared fixtures.
"""

import json
import pytest
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import sessionmaker

from jobservice.config import ServiceConfig
from jobservice.database import Job, create_db_engine, init_database
from jobservice.handler import reset_config
from jobservice.logger import reset_logger


@pytest.fixture(autouse=True)
def fresh_globals():
    """Each test starts without a cached logger or config."""
    reset_logger()
    reset_config()
    yield
    reset_logger()
    reset_config()


@pytest.fixture
def db_url(tmp_path) -> str:
    """Create a temporary SQLite database with the jobs table."""
    url = f"sqlite:///{tmp_path / 'jobs.db'}"
    init_database(url)
    return url


@pytest.fixture
def config(db_url) -> ServiceConfig:
    return ServiceConfig(database=None, database_url=db_url)


@pytest.fixture
def session_factory(db_url):
    """Session factory that records every session it hands out and closes."""
    engine = create_db_engine(db_url)
    factory = sessionmaker(bind=engine)
    opened = []
    closed = []

    def make():
        session = factory()
        opened.append(session)
        original_close = session.close

        def close():
            closed.append(session)
            original_close()

        session.close = close
        return session

    make.opened = opened
    make.closed = closed
    yield make
    engine.dispose()


def _job_dict(job: Job) -> Dict[str, Any]:
    return {
        "job_id": job.job_id,
        "company_id": job.company_id,
        "recruiter_id": job.recruiter_id,
        "title": job.title,
        "description": job.description,
        "status": job.status,
    }


@pytest.fixture
def seeded_jobs(session_factory) -> List[Dict[str, Any]]:
    """Two open jobs and one closed job, as stored."""
    jobs = [
        Job(company_id=1, recruiter_id=10, title="Engineer", description="Build things", status="open"),
        Job(company_id=1, recruiter_id=11, title="Designer", description="Draw things", status="open"),
        Job(company_id=2, recruiter_id=12, title="Analyst", description="Count things", status="closed"),
    ]
    with session_factory() as session:
        session.add_all(jobs)
        session.commit()
        return [_job_dict(session.get(Job, job.job_id)) for job in jobs]


@pytest.fixture
def fetch_job(session_factory):
    """Read a job row straight from the database, or None."""

    def _fetch(job_id) -> Optional[Dict[str, Any]]:
        with session_factory() as session:
            job = session.get(Job, job_id)
            return _job_dict(job) if job is not None else None

    return _fetch


@pytest.fixture
def make_event():
    """Build an API Gateway HTTP API event."""

    def _make(
        method: str,
        job_id: Optional[Any] = None,
        body: Optional[Dict[str, Any]] = None,
        groups: Optional[Any] = None,
    ) -> Dict[str, Any]:
        claims = {"sub": "user-123"}
        if groups is not None:
            claims["cognito:groups"] = groups
        return {
            "requestContext": {
                "http": {"method": method},
                "authorizer": {"jwt": {"claims": claims}},
            },
            "pathParameters": {"id": str(job_id)} if job_id is not None else None,
            "body": json.dumps(body) if body is not None else None,
            "isBase64Encoded": False,
        }

    return _make
