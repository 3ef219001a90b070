"""
Caller role checks.

Tokens are verified upstream by the API gateway; this module only reads
the group claim it forwards.
"""

from typing import Any, Dict, List, Optional

from .config import DEFAULT_RECRUITER_GROUP

GROUPS_CLAIM = "cognito:groups"


def _split_groups(value: str) -> List[str]:
    # HTTP API JWT authorizers flatten lists to "[A B]"
    text = value.strip()
    if text.startswith("[") and text.endswith("]"):
        text = text[1:-1]
    separator = "," if "," in text else None
    return [g.strip() for g in text.split(separator) if g.strip()]


def extract_groups(claims: Optional[Dict[str, Any]]) -> List[str]:
    """
    Read the caller's group memberships from JWT claims.

    Args:
        claims: Claims forwarded by the authorizer (may be None)

    Returns:
        Group names in claim order; empty when the claim is absent
    """
    if not claims:
        return []

    value = claims.get(GROUPS_CLAIM)
    if value is None:
        return []
    if isinstance(value, str):
        return _split_groups(value)
    return [str(g) for g in value]


def is_recruiter(groups: List[str], recruiter_group: str = DEFAULT_RECRUITER_GROUP) -> bool:
    return recruiter_group in groups
