"""
Inbound event parsing.

Turns an API Gateway HTTP API (payload v2.0) event into a JobRequest the
handler can act on without knowing the event layout.
"""

import base64
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .auth import extract_groups


@dataclass
class JobRequest:
    """One inbound request to the jobs resource."""

    method: str
    job_id: Optional[str] = None
    body: Optional[str] = None
    groups: List[str] = field(default_factory=list)
    is_base64_encoded: bool = False

    def json_body(self) -> Dict[str, Any]:
        """
        Decode the request body.

        Returns:
            Parsed JSON object; {} when there is no body

        Raises:
            ValueError: If the body is not valid JSON or not an object
        """
        if not self.body:
            return {}

        raw = self.body
        if self.is_base64_encoded:
            raw = base64.b64decode(raw).decode("utf-8")

        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("Request body must be a JSON object")
        return data


def _get_path(data: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def parse_event(event: Dict[str, Any]) -> JobRequest:
    """
    Build a JobRequest from a platform event.

    An event without a method yields an empty method, which no route accepts.

    Args:
        event: API Gateway HTTP API event

    Returns:
        JobRequest with groups extracted; the method is kept as sent
    """
    method = _get_path(event, "requestContext", "http", "method") or ""

    claims = _get_path(event, "requestContext", "authorizer", "jwt", "claims")
    path_params = event.get("pathParameters") or {}
    job_id = path_params.get("id")

    return JobRequest(
        method=str(method),
        job_id=str(job_id) if job_id is not None else None,
        body=event.get("body"),
        groups=extract_groups(claims),
        is_base64_encoded=bool(event.get("isBase64Encoded")),
    )
