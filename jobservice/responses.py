"""Response builders for the {statusCode, body} shape."""

import json
from typing import Any, Dict


def json_response(status_code: int, payload: Any) -> Dict[str, Any]:
    # default=str covers datetimes, decimals and UUIDs from the driver
    return {"statusCode": status_code, "body": json.dumps(payload, default=str)}


def text_response(status_code: int, message: str) -> Dict[str, Any]:
    return {"statusCode": status_code, "body": message}


def error_response(status_code: int, message: str) -> Dict[str, Any]:
    return json_response(status_code, {"error": message})
