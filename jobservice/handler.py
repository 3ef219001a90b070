"""
Jobs request handler.

One invocation handles one request: open a session, run a single
statement for the requested method, shape the response, and close the
session on every exit path.
"""

from typing import Any, Callable, Dict, Optional

from sqlalchemy.orm import Session

from . import repository
from .auth import is_recruiter
from .config import ServiceConfig
from .database import get_engine, get_session_factory
from .events import JobRequest, parse_event
from .logger import get_logger
from .responses import error_response, json_response, text_response

FORBIDDEN_MESSAGE = "Recruiters only"
UNSUPPORTED_MESSAGE = "Method not supported"
MISSING_ID_MESSAGE = "Missing job id"
DELETED_MESSAGE = "Job Deleted"
NOT_FOUND_MESSAGE = "Job not found"

_config: Optional[ServiceConfig] = None


def _create(db: Session, request: JobRequest, body: Dict[str, Any]) -> Dict[str, Any]:
    # status from the body is ignored; new jobs are always open
    job = repository.create_job(
        db,
        company_id=body.get("company_id"),
        recruiter_id=body.get("recruiter_id"),
        title=body.get("title"),
        description=body.get("description"),
    )
    db.commit()
    return json_response(201, job)


def _list(db: Session, request: JobRequest, body: Dict[str, Any]) -> Dict[str, Any]:
    return json_response(200, repository.list_open_jobs(db))


def _delete(db: Session, request: JobRequest, body: Dict[str, Any]) -> Dict[str, Any]:
    repository.delete_job(db, request.job_id)
    db.commit()
    return json_response(200, {"message": DELETED_MESSAGE})


def _update(db: Session, request: JobRequest, body: Dict[str, Any]) -> Dict[str, Any]:
    job = repository.update_job(
        db,
        request.job_id,
        title=body.get("title"),
        description=body.get("description"),
        status=body.get("status"),
    )
    if job is None:
        return error_response(404, NOT_FOUND_MESSAGE)
    db.commit()
    return json_response(200, job)


# method -> (operation, requires recruiter, requires path id)
ROUTES = {
    "POST": (_create, True, False),
    "GET": (_list, False, False),
    "DELETE": (_delete, True, True),
    "PUT": (_update, True, True),
}


def handle_request(
    request: JobRequest,
    config: ServiceConfig,
    session_factory: Optional[Callable[[], Session]] = None,
) -> Dict[str, Any]:
    """
    Handle one jobs request.

    Args:
        request: Parsed request, including the caller's groups
        config: Service configuration
        session_factory: Session factory override (default: built from config)

    Returns:
        Response dict with statusCode and body
    """
    engine = None

    try:
        logger = get_logger(level=config.log_level)
        if session_factory is None:
            engine = get_engine(config)
            session_factory = get_session_factory(engine)

        with session_factory() as db:
            route = ROUTES.get(request.method)
            if route is None:
                logger.warning("Unsupported method", method=request.method)
                return text_response(400, UNSUPPORTED_MESSAGE)

            operation, needs_recruiter, needs_id = route
            body = request.json_body()

            if needs_recruiter and not is_recruiter(request.groups, config.recruiter_group):
                logger.info("Recruiter role required", method=request.method, groups=request.groups)
                return text_response(403, FORBIDDEN_MESSAGE)

            if needs_id and not request.job_id:
                return text_response(400, MISSING_ID_MESSAGE)

            logger.info("Handling jobs request", method=request.method, job_id=request.job_id)
            # leaving the block closes the session, rolling back anything uncommitted
            return operation(db, request, body)

    except Exception as e:
        get_logger().error(f"Request failed: {e}", exc_info=True, method=request.method, job_id=request.job_id)
        return error_response(500, str(e))

    finally:
        if engine is not None:
            engine.dispose()


def get_config() -> ServiceConfig:
    """Build the service configuration once per process."""
    global _config

    if _config is None:
        _config = ServiceConfig.from_env()

    return _config


def reset_config():
    """Drop the cached configuration (useful for testing)."""
    global _config
    _config = None


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """Function entry point for API Gateway HTTP API events."""
    try:
        config = get_config()
        request = parse_event(event)
    except Exception as e:
        get_logger().error(f"Invalid invocation: {e}", exc_info=True)
        return error_response(500, str(e))

    return handle_request(request, config)
