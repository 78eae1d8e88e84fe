"""Tests for the endpoint table and request preparation."""

from __future__ import annotations

import pytest

from hyperwallet.core.endpoints import (
    ENDPOINTS,
    Endpoint,
    ValidationError,
    encode_segment,
    get_endpoint,
    wire_name,
)

LIST_OPERATIONS = {
    "list_users",
    "list_prepaid_cards",
    "list_prepaid_card_status_transitions",
    "list_bank_accounts",
    "list_bank_account_status_transitions",
    "list_balances_for_user",
    "list_balances_for_prepaid_card",
    "list_balances_for_account",
    "list_payments",
    "list_transfer_method_configurations",
    "list_receipts_for_program_account",
    "list_receipts_for_user",
    "list_receipts_for_prepaid_card",
    "list_webhook_notifications",
}


class TestTable:
    def test_list_flag_matches_list_operations(self) -> None:
        flagged = {name for name, endpoint in ENDPOINTS.items() if endpoint.list_result}
        assert flagged == LIST_OPERATIONS

    def test_only_user_and_payment_writes_inject_program_token(self) -> None:
        injecting = {
            name for name, endpoint in ENDPOINTS.items() if endpoint.inject_program_token
        }
        assert injecting == {"create_user", "update_user", "create_payment"}

    def test_operation_count(self) -> None:
        assert len(ENDPOINTS) == 40

    @pytest.mark.parametrize(
        "name, params",
        [
            ("create_user", ()),
            ("get_prepaid_card", ("user_token", "prepaid_card_token")),
            (
                "get_prepaid_card_status_transition",
                ("user_token", "prepaid_card_token", "status_transition_token"),
            ),
            ("list_balances_for_account", ("program_token", "account_token")),
            (
                "get_transfer_method_configuration",
                ("user_token", "country", "currency", "type", "profile_type"),
            ),
            ("create_transfer_method", ("user_token", "json_cache_token")),
        ],
    )
    def test_required_parameters_in_call_order(self, name, params) -> None:
        assert ENDPOINTS[name].params == params

    def test_unknown_operation(self) -> None:
        with pytest.raises(KeyError, match="Unknown operation 'delete_user'"):
            get_endpoint("delete_user")


class TestPrepare:
    def test_builds_path_from_template(self) -> None:
        request = ENDPOINTS["get_bank_account"].prepare("usr-1", "trm-2")

        assert request.method == "GET"
        assert request.path == "users/usr-1/bank-accounts/trm-2"
        assert request.payload == {}
        assert request.headers == {}
        assert request.list_result is False

    def test_reserved_characters_are_percent_encoded(self) -> None:
        request = ENDPOINTS["get_prepaid_card"].prepare("usr/1", "card 2?x=&")
        assert request.path == "users/usr%2F1/prepaid-cards/card%202%3Fx%3D%26"

    def test_encode_segment_leaves_unreserved_alone(self) -> None:
        assert encode_segment("usr-1_a.b~c") == "usr-1_a.b~c"
        assert encode_segment("a/b") == "a%2Fb"

    @pytest.mark.parametrize("missing", ["", None])
    def test_missing_identifier_raises(self, missing) -> None:
        with pytest.raises(ValidationError, match="^prepaidCardToken is required$"):
            ENDPOINTS["get_prepaid_card"].prepare("usr-1", missing)

    @pytest.mark.parametrize("falsy", [0, False])
    def test_other_falsy_identifiers_are_missing(self, falsy) -> None:
        with pytest.raises(ValidationError, match="^paymentToken is required$"):
            ENDPOINTS["get_payment"].prepare(falsy)

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("user_token", "userToken"),
            ("json_cache_token", "jsonCacheToken"),
            ("status_transition_token", "statusTransitionToken"),
            ("country", "country"),
        ],
    )
    def test_wire_name(self, name, expected) -> None:
        assert wire_name(name) == expected

    def test_first_missing_identifier_is_reported(self) -> None:
        with pytest.raises(ValidationError, match="^userToken is required$"):
            ENDPOINTS["get_prepaid_card"].prepare("", "")

    def test_validation_error_is_value_error(self) -> None:
        assert issubclass(ValidationError, ValueError)

    def test_wrong_argument_count(self) -> None:
        with pytest.raises(TypeError, match="get_user"):
            ENDPOINTS["get_user"].prepare()
        with pytest.raises(TypeError):
            ENDPOINTS["get_user"].prepare("a", "b")

    def test_list_options_are_passed_through(self) -> None:
        options = {"limit": 10, "sortBy": "createdOn"}
        request = ENDPOINTS["list_users"].prepare(options)

        assert request.payload == options
        assert request.payload is not options
        assert request.list_result is True

    def test_list_without_options(self) -> None:
        assert ENDPOINTS["list_payments"].prepare().payload == {}
        assert ENDPOINTS["list_payments"].prepare(None).payload == {}

    def test_transition_body(self) -> None:
        request = ENDPOINTS["lock_prepaid_card"].prepare("usr-1", "trm-1")
        assert request.method == "POST"
        assert request.payload == {"transition": "LOCKED"}

    def test_transfer_method_configuration_query(self) -> None:
        request = ENDPOINTS["get_transfer_method_configuration"].prepare(
            "usr-1", "US", "USD", "BANK_ACCOUNT", "INDIVIDUAL"
        )
        assert request.path == "transfer-method-configurations"
        assert request.payload == {
            "userToken": "usr-1",
            "country": "US",
            "currency": "USD",
            "type": "BANK_ACCOUNT",
            "profileType": "INDIVIDUAL",
        }

    def test_list_transfer_method_configurations_merges_user_token(self) -> None:
        request = ENDPOINTS["list_transfer_method_configurations"].prepare(
            "usr-1", {"limit": 5, "userToken": "other"}
        )
        assert request.payload == {"limit": 5, "userToken": "usr-1"}

    def test_header_parameter(self) -> None:
        request = ENDPOINTS["create_transfer_method"].prepare(
            "usr-1", "jct-1", {"type": "BANK_ACCOUNT"}
        )
        assert request.path == "users/usr-1/transfer-methods"
        assert request.headers == {"Json-Cache-Token": "jct-1"}
        assert request.payload == {"type": "BANK_ACCOUNT"}

    def test_program_token_injected_only_where_flagged(self) -> None:
        user = ENDPOINTS["create_user"].prepare({}, program_token="prg-1")
        card = ENDPOINTS["create_prepaid_card"].prepare("usr-1", {}, program_token="prg-1")

        assert user.payload == {"programToken": "prg-1"}
        assert card.payload == {}

    def test_custom_endpoint(self) -> None:
        endpoint = Endpoint("get_thing", "GET", "things/{thing_token}/parts/{part}")
        assert endpoint.params == ("thing_token", "part")
        assert endpoint.prepare("t", "p").path == "things/t/parts/p"
