"""
Declarative table of the Hyperwallet REST operations.

Each :class:`Endpoint` says which verb and path template an operation uses,
which identifiers it requires, and how the remaining argument is sent. The
facade dispatches every operation through :meth:`Endpoint.prepare`.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import quote

from .payloads import (
    BankAccountTransition,
    PrepaidCardTransition,
    add_program_token,
    build_transition,
)

__all__ = [
    "ENDPOINTS",
    "Endpoint",
    "PreparedRequest",
    "ValidationError",
    "encode_segment",
    "get_endpoint",
    "wire_name",
]

DATA = "data"
OPTIONS = "options"


class ValidationError(ValueError):
    """Raised before any I/O when a required argument is missing or empty."""


def encode_segment(value: Any) -> str:
    """Percent-encode one path token, including ``/``."""
    return quote(str(value), safe="")


def wire_name(name: str) -> str:
    """``user_token`` -> ``userToken``, the spelling the API uses."""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass(frozen=True)
class PreparedRequest:
    method: str
    path: str
    payload: Any
    headers: Dict[str, str]
    list_result: bool


@dataclass(frozen=True)
class Endpoint:
    name: str
    method: str
    template: str
    payload: Optional[str] = None
    list_result: bool = False
    inject_program_token: bool = False
    transition: Optional[str] = None
    query_params: Mapping[str, str] = field(default_factory=dict)
    header_params: Mapping[str, str] = field(default_factory=dict)

    @property
    def path_params(self) -> Tuple[str, ...]:
        return tuple(
            name
            for _, name, _, _ in string.Formatter().parse(self.template)
            if name
        )

    @property
    def params(self) -> Tuple[str, ...]:
        """Positional identifiers, all required, in call order."""
        names = list(self.path_params)
        for extra in (*self.query_params, *self.header_params):
            if extra not in names:
                names.append(extra)
        return tuple(names)

    @property
    def arguments(self) -> Tuple[str, ...]:
        return self.params + ((self.payload,) if self.payload else ())

    def prepare(
        self, *args: Any, program_token: Optional[str] = None
    ) -> PreparedRequest:
        """
        Validate ``args`` and turn them into a request for the executor.

        Raises :class:`ValidationError` for a missing identifier and
        :class:`TypeError` for a wrong number of arguments.
        """
        params = self.params
        max_args = len(self.arguments)
        if not len(params) <= len(args) <= max_args:
            raise TypeError(
                f"{self.name}() expects arguments ({', '.join(self.arguments)}), "
                f"got {len(args)}"
            )

        values = dict(zip(params, args))
        for name in params:
            if not values[name]:
                raise ValidationError(f"{wire_name(name)} is required")

        path = self.template.format(
            **{name: encode_segment(values[name]) for name in self.path_params}
        )
        extra = args[len(params)] if len(args) > len(params) else None

        if self.transition is not None:
            payload: Any = build_transition(self.transition)
        elif self.method == "GET":
            payload = dict(extra or {})
            for name, key in self.query_params.items():
                payload[key] = values[name]
        elif self.inject_program_token:
            payload = add_program_token(extra, program_token)
        else:
            payload = extra

        headers = {header: str(values[name]) for name, header in self.header_params.items()}
        return PreparedRequest(
            method=self.method,
            path=path,
            payload=payload,
            headers=headers,
            list_result=self.list_result,
        )


_USER = "users/{user_token}"
_CARD = _USER + "/prepaid-cards/{prepaid_card_token}"
_BANK = _USER + "/bank-accounts/{bank_account_token}"
_ACCOUNT = "programs/{program_token}/accounts/{account_token}"

_CARD_TRANSITIONS = {
    "suspend_prepaid_card": PrepaidCardTransition.SUSPENDED,
    "unsuspend_prepaid_card": PrepaidCardTransition.UNSUSPENDED,
    "lost_or_stolen_prepaid_card": PrepaidCardTransition.LOST_OR_STOLEN,
    "deactivate_prepaid_card": PrepaidCardTransition.DE_ACTIVATED,
    "lock_prepaid_card": PrepaidCardTransition.LOCKED,
    "unlock_prepaid_card": PrepaidCardTransition.UNLOCKED,
}

_TABLE = (
    # Users
    Endpoint("create_user", "POST", "users", DATA, inject_program_token=True),
    Endpoint("get_user", "GET", _USER),
    Endpoint("update_user", "PUT", _USER, DATA, inject_program_token=True),
    Endpoint("list_users", "GET", "users", OPTIONS, list_result=True),
    # Prepaid cards
    Endpoint("create_prepaid_card", "POST", _USER + "/prepaid-cards", DATA),
    Endpoint("get_prepaid_card", "GET", _CARD),
    Endpoint("update_prepaid_card", "PUT", _CARD, DATA),
    Endpoint("list_prepaid_cards", "GET", _USER + "/prepaid-cards", OPTIONS, list_result=True),
    *(
        Endpoint(name, "POST", _CARD + "/status-transitions", transition=transition.value)
        for name, transition in _CARD_TRANSITIONS.items()
    ),
    Endpoint("create_prepaid_card_status_transition", "POST", _CARD + "/status-transitions", DATA),
    Endpoint(
        "get_prepaid_card_status_transition",
        "GET",
        _CARD + "/status-transitions/{status_transition_token}",
    ),
    Endpoint(
        "list_prepaid_card_status_transitions",
        "GET",
        _CARD + "/status-transitions",
        OPTIONS,
        list_result=True,
    ),
    # Bank accounts
    Endpoint("create_bank_account", "POST", _USER + "/bank-accounts", DATA),
    Endpoint("get_bank_account", "GET", _BANK),
    Endpoint("update_bank_account", "PUT", _BANK, DATA),
    Endpoint("list_bank_accounts", "GET", _USER + "/bank-accounts", OPTIONS, list_result=True),
    Endpoint(
        "deactivate_bank_account",
        "POST",
        _BANK + "/status-transitions",
        transition=BankAccountTransition.DE_ACTIVATED.value,
    ),
    Endpoint("create_bank_account_status_transition", "POST", _BANK + "/status-transitions", DATA),
    Endpoint(
        "list_bank_account_status_transitions",
        "GET",
        _BANK + "/status-transitions",
        OPTIONS,
        list_result=True,
    ),
    # Balances
    Endpoint("list_balances_for_user", "GET", _USER + "/balances", OPTIONS, list_result=True),
    Endpoint(
        "list_balances_for_prepaid_card", "GET", _CARD + "/balances", OPTIONS, list_result=True
    ),
    Endpoint("list_balances_for_account", "GET", _ACCOUNT + "/balances", OPTIONS, list_result=True),
    # Payments
    Endpoint("create_payment", "POST", "payments", DATA, inject_program_token=True),
    Endpoint("get_payment", "GET", "payments/{payment_token}"),
    Endpoint("list_payments", "GET", "payments", OPTIONS, list_result=True),
    # Programs
    Endpoint("get_program", "GET", "programs/{program_token}"),
    Endpoint("get_program_account", "GET", _ACCOUNT),
    # Transfer method configurations
    Endpoint(
        "get_transfer_method_configuration",
        "GET",
        "transfer-method-configurations",
        query_params={
            "user_token": "userToken",
            "country": "country",
            "currency": "currency",
            "type": "type",
            "profile_type": "profileType",
        },
    ),
    Endpoint(
        "list_transfer_method_configurations",
        "GET",
        "transfer-method-configurations",
        OPTIONS,
        list_result=True,
        query_params={"user_token": "userToken"},
    ),
    # Transfer methods
    Endpoint(
        "create_transfer_method",
        "POST",
        _USER + "/transfer-methods",
        DATA,
        header_params={"json_cache_token": "Json-Cache-Token"},
    ),
    # Receipts
    Endpoint(
        "list_receipts_for_program_account",
        "GET",
        _ACCOUNT + "/receipts",
        OPTIONS,
        list_result=True,
    ),
    Endpoint("list_receipts_for_user", "GET", _USER + "/receipts", OPTIONS, list_result=True),
    Endpoint(
        "list_receipts_for_prepaid_card", "GET", _CARD + "/receipts", OPTIONS, list_result=True
    ),
    # Webhook notifications
    Endpoint("list_webhook_notifications", "GET", "webhook-notifications", OPTIONS, list_result=True),
    Endpoint("get_webhook_notification", "GET", "webhook-notifications/{webhook_token}"),
)

ENDPOINTS: Dict[str, Endpoint] = {endpoint.name: endpoint for endpoint in _TABLE}


def get_endpoint(name: str) -> Endpoint:
    try:
        return ENDPOINTS[name]
    except KeyError:
        raise KeyError(f"Unknown operation '{name}'") from None
