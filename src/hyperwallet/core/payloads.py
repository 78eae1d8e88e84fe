"""
Helpers for the request bodies and response shapes the facade adjusts.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .client import ApiResult

__all__ = [
    "BankAccountTransition",
    "PrepaidCardTransition",
    "add_program_token",
    "build_transition",
    "empty_list",
    "normalize_empty_list",
]


class PrepaidCardTransition(str, Enum):
    SUSPENDED = "SUSPENDED"
    UNSUSPENDED = "UNSUSPENDED"
    LOST_OR_STOLEN = "LOST_OR_STOLEN"
    DE_ACTIVATED = "DE_ACTIVATED"
    LOCKED = "LOCKED"
    UNLOCKED = "UNLOCKED"


class BankAccountTransition(str, Enum):
    # The API spells this one with a hyphen, unlike the prepaid card value.
    DE_ACTIVATED = "DE-ACTIVATED"


def build_transition(transition: str) -> Dict[str, str]:
    """Build the body POSTed to a ``status-transitions`` sub-resource."""
    if isinstance(transition, Enum):
        transition = transition.value
    return {"transition": transition}


def add_program_token(data: Any, program_token: Optional[str]) -> Any:
    """
    Return ``data`` with ``programToken`` filled in from the client default.

    A caller-supplied ``programToken`` is never replaced, and the caller's
    mapping is never mutated.
    """
    if not program_token or not isinstance(data, Mapping):
        return data
    if data.get("programToken"):
        return data
    body = dict(data)
    body["programToken"] = program_token
    return body


def empty_list() -> Dict[str, Any]:
    return {"count": 0, "data": []}


def normalize_empty_list(result: ApiResult) -> ApiResult:
    """
    Turn a successful ``204 No Content`` into an empty list page.

    Applied to list operations only; other endpoints may legitimately answer
    204 with nothing to show.
    """
    response = result.response
    if result.error is None and response is not None and response.status_code == 204:
        return result._replace(data=empty_list())
    return result
