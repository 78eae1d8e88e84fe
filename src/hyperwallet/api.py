"""
Public, high-level client for the Hyperwallet REST API.
"""

from __future__ import annotations

from concurrent.futures import Executor, Future
from typing import Any, Mapping, Optional

import requests

from .core.client import ApiClient, ApiResult, Callback
from .core.config import DEFAULT_SERVER, ClientConfig, ConfigError, load_client_config
from .core.endpoints import get_endpoint
from .core.payloads import normalize_empty_list

__all__ = [
    "Hyperwallet",
    "create_client",
]

Options = Optional[Mapping[str, Any]]
Data = Optional[Mapping[str, Any]]


class Hyperwallet:
    """
    The Hyperwallet SDK client.

    Every operation validates its identifiers synchronously, raising
    :class:`~hyperwallet.core.endpoints.ValidationError` without touching the
    network. Otherwise it returns a future resolving to an
    :class:`~hyperwallet.core.client.ApiResult`, and ``callback`` (when given)
    is called once with ``(error, data, response)``.
    """

    def __init__(
        self,
        username: str,
        password: str,
        *,
        program_token: Optional[str] = None,
        server: str = DEFAULT_SERVER,
        session: Optional[requests.Session] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        if not username or not password:
            raise ConfigError("You need to specify your API username and password!")
        self.program_token = program_token
        self.client = ApiClient(
            username, password, server, session=session, executor=executor
        )

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        *,
        session: Optional[requests.Session] = None,
        executor: Optional[Executor] = None,
    ) -> "Hyperwallet":
        return cls(
            config.username,
            config.password,
            program_token=config.program_token,
            server=config.server,
            session=session,
            executor=executor,
        )

    def call(
        self, operation: str, *args: Any, callback: Optional[Callback] = None
    ) -> "Future[ApiResult]":
        """
        Run any operation from the endpoint table by name.

        ``args`` are the operation's identifiers followed by its optional body
        or query options.
        """
        endpoint = get_endpoint(operation)
        request = endpoint.prepare(*args, program_token=self.program_token)
        return self.client.execute(
            request.method,
            request.path,
            request.payload,
            request.headers,
            callback,
            transform=normalize_empty_list if request.list_result else None,
        )

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "Hyperwallet":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # Users

    def create_user(self, data: Data, callback: Optional[Callback] = None):
        return self.call("create_user", data, callback=callback)

    def get_user(self, user_token: str, callback: Optional[Callback] = None):
        return self.call("get_user", user_token, callback=callback)

    def update_user(
        self, user_token: str, data: Data, callback: Optional[Callback] = None
    ):
        return self.call("update_user", user_token, data, callback=callback)

    def list_users(self, options: Options = None, callback: Optional[Callback] = None):
        return self.call("list_users", options, callback=callback)

    # Prepaid cards

    def create_prepaid_card(
        self, user_token: str, data: Data, callback: Optional[Callback] = None
    ):
        return self.call("create_prepaid_card", user_token, data, callback=callback)

    def get_prepaid_card(
        self, user_token: str, prepaid_card_token: str, callback: Optional[Callback] = None
    ):
        return self.call(
            "get_prepaid_card", user_token, prepaid_card_token, callback=callback
        )

    def update_prepaid_card(
        self,
        user_token: str,
        prepaid_card_token: str,
        data: Data,
        callback: Optional[Callback] = None,
    ):
        return self.call(
            "update_prepaid_card", user_token, prepaid_card_token, data, callback=callback
        )

    def list_prepaid_cards(
        self, user_token: str, options: Options = None, callback: Optional[Callback] = None
    ):
        return self.call("list_prepaid_cards", user_token, options, callback=callback)

    def suspend_prepaid_card(
        self, user_token: str, prepaid_card_token: str, callback: Optional[Callback] = None
    ):
        return self.call(
            "suspend_prepaid_card", user_token, prepaid_card_token, callback=callback
        )

    def unsuspend_prepaid_card(
        self, user_token: str, prepaid_card_token: str, callback: Optional[Callback] = None
    ):
        return self.call(
            "unsuspend_prepaid_card", user_token, prepaid_card_token, callback=callback
        )

    def lost_or_stolen_prepaid_card(
        self, user_token: str, prepaid_card_token: str, callback: Optional[Callback] = None
    ):
        return self.call(
            "lost_or_stolen_prepaid_card", user_token, prepaid_card_token, callback=callback
        )

    def deactivate_prepaid_card(
        self, user_token: str, prepaid_card_token: str, callback: Optional[Callback] = None
    ):
        return self.call(
            "deactivate_prepaid_card", user_token, prepaid_card_token, callback=callback
        )

    def lock_prepaid_card(
        self, user_token: str, prepaid_card_token: str, callback: Optional[Callback] = None
    ):
        return self.call(
            "lock_prepaid_card", user_token, prepaid_card_token, callback=callback
        )

    def unlock_prepaid_card(
        self, user_token: str, prepaid_card_token: str, callback: Optional[Callback] = None
    ):
        return self.call(
            "unlock_prepaid_card", user_token, prepaid_card_token, callback=callback
        )

    def create_prepaid_card_status_transition(
        self,
        user_token: str,
        prepaid_card_token: str,
        data: Data,
        callback: Optional[Callback] = None,
    ):
        return self.call(
            "create_prepaid_card_status_transition",
            user_token,
            prepaid_card_token,
            data,
            callback=callback,
        )

    def get_prepaid_card_status_transition(
        self,
        user_token: str,
        prepaid_card_token: str,
        status_transition_token: str,
        callback: Optional[Callback] = None,
    ):
        return self.call(
            "get_prepaid_card_status_transition",
            user_token,
            prepaid_card_token,
            status_transition_token,
            callback=callback,
        )

    def list_prepaid_card_status_transitions(
        self,
        user_token: str,
        prepaid_card_token: str,
        options: Options = None,
        callback: Optional[Callback] = None,
    ):
        return self.call(
            "list_prepaid_card_status_transitions",
            user_token,
            prepaid_card_token,
            options,
            callback=callback,
        )

    # Bank accounts

    def create_bank_account(
        self, user_token: str, data: Data, callback: Optional[Callback] = None
    ):
        return self.call("create_bank_account", user_token, data, callback=callback)

    def get_bank_account(
        self, user_token: str, bank_account_token: str, callback: Optional[Callback] = None
    ):
        return self.call(
            "get_bank_account", user_token, bank_account_token, callback=callback
        )

    def update_bank_account(
        self,
        user_token: str,
        bank_account_token: str,
        data: Data,
        callback: Optional[Callback] = None,
    ):
        return self.call(
            "update_bank_account", user_token, bank_account_token, data, callback=callback
        )

    def list_bank_accounts(
        self, user_token: str, options: Options = None, callback: Optional[Callback] = None
    ):
        return self.call("list_bank_accounts", user_token, options, callback=callback)

    def deactivate_bank_account(
        self, user_token: str, bank_account_token: str, callback: Optional[Callback] = None
    ):
        return self.call(
            "deactivate_bank_account", user_token, bank_account_token, callback=callback
        )

    def create_bank_account_status_transition(
        self,
        user_token: str,
        bank_account_token: str,
        data: Data,
        callback: Optional[Callback] = None,
    ):
        return self.call(
            "create_bank_account_status_transition",
            user_token,
            bank_account_token,
            data,
            callback=callback,
        )

    def list_bank_account_status_transitions(
        self,
        user_token: str,
        bank_account_token: str,
        options: Options = None,
        callback: Optional[Callback] = None,
    ):
        return self.call(
            "list_bank_account_status_transitions",
            user_token,
            bank_account_token,
            options,
            callback=callback,
        )

    # Balances

    def list_balances_for_user(
        self, user_token: str, options: Options = None, callback: Optional[Callback] = None
    ):
        return self.call("list_balances_for_user", user_token, options, callback=callback)

    def list_balances_for_prepaid_card(
        self,
        user_token: str,
        prepaid_card_token: str,
        options: Options = None,
        callback: Optional[Callback] = None,
    ):
        return self.call(
            "list_balances_for_prepaid_card",
            user_token,
            prepaid_card_token,
            options,
            callback=callback,
        )

    def list_balances_for_account(
        self,
        program_token: str,
        account_token: str,
        options: Options = None,
        callback: Optional[Callback] = None,
    ):
        return self.call(
            "list_balances_for_account",
            program_token,
            account_token,
            options,
            callback=callback,
        )

    # Payments

    def create_payment(self, data: Data, callback: Optional[Callback] = None):
        return self.call("create_payment", data, callback=callback)

    def get_payment(self, payment_token: str, callback: Optional[Callback] = None):
        return self.call("get_payment", payment_token, callback=callback)

    def list_payments(self, options: Options = None, callback: Optional[Callback] = None):
        return self.call("list_payments", options, callback=callback)

    # Programs

    def get_program(self, program_token: str, callback: Optional[Callback] = None):
        return self.call("get_program", program_token, callback=callback)

    def get_program_account(
        self, program_token: str, account_token: str, callback: Optional[Callback] = None
    ):
        return self.call(
            "get_program_account", program_token, account_token, callback=callback
        )

    # Transfer method configurations

    def get_transfer_method_configuration(
        self,
        user_token: str,
        country: str,
        currency: str,
        type: str,
        profile_type: str,
        callback: Optional[Callback] = None,
    ):
        return self.call(
            "get_transfer_method_configuration",
            user_token,
            country,
            currency,
            type,
            profile_type,
            callback=callback,
        )

    def list_transfer_method_configurations(
        self, user_token: str, options: Options = None, callback: Optional[Callback] = None
    ):
        return self.call(
            "list_transfer_method_configurations", user_token, options, callback=callback
        )

    # Transfer methods

    def create_transfer_method(
        self,
        user_token: str,
        json_cache_token: str,
        data: Data = None,
        callback: Optional[Callback] = None,
    ):
        """``json_cache_token`` is the token handed out by the transfer method widget."""
        return self.call(
            "create_transfer_method", user_token, json_cache_token, data, callback=callback
        )

    # Receipts

    def list_receipts_for_program_account(
        self,
        program_token: str,
        account_token: str,
        options: Options = None,
        callback: Optional[Callback] = None,
    ):
        return self.call(
            "list_receipts_for_program_account",
            program_token,
            account_token,
            options,
            callback=callback,
        )

    def list_receipts_for_user(
        self, user_token: str, options: Options = None, callback: Optional[Callback] = None
    ):
        return self.call("list_receipts_for_user", user_token, options, callback=callback)

    def list_receipts_for_prepaid_card(
        self,
        user_token: str,
        prepaid_card_token: str,
        options: Options = None,
        callback: Optional[Callback] = None,
    ):
        return self.call(
            "list_receipts_for_prepaid_card",
            user_token,
            prepaid_card_token,
            options,
            callback=callback,
        )

    # Webhook notifications

    def list_webhook_notifications(
        self, options: Options = None, callback: Optional[Callback] = None
    ):
        return self.call("list_webhook_notifications", options, callback=callback)

    def get_webhook_notification(
        self, webhook_token: str, callback: Optional[Callback] = None
    ):
        return self.call("get_webhook_notification", webhook_token, callback=callback)


def create_client(
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    executor: Optional[Executor] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    program_token: Optional[str] = None,
    server: Optional[str] = None,
) -> Hyperwallet:
    """
    Construct a :class:`Hyperwallet` client.

    Callers can either supply a ready-made :class:`ClientConfig` or let the
    helper assemble one from environment data.
    """
    if config is not None:
        extras = (overrides, base, username, password, program_token, server)
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built ClientConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_client_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            username=username,
            password=password,
            program_token=program_token,
            server=server,
        )
    return Hyperwallet.from_config(cfg, session=session, executor=executor)
