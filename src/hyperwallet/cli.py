"""
Command-line interface for calling the Hyperwallet REST API.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, Iterable, Sequence, Tuple

from .api import create_client
from .core.client import ApiResult
from .core.config import ConfigError, load_client_config
from .core.endpoints import DATA, ENDPOINTS, OPTIONS, ValidationError


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _key_value(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Values must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Key must not be empty")
    return key, val


def _json_object(value: str) -> Dict[str, Any]:
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as exc:
        raise argparse.ArgumentTypeError(f"Invalid JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        raise argparse.ArgumentTypeError("JSON body must be an object")
    return parsed


def _collect(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    collected: dict[str, str] = {}
    for key, value in pairs:
        collected[key] = value
    return collected


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hyperwallet",
        description="Call a single Hyperwallet REST API operation",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing HYPERWALLET_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_key_value,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("operations", help="List every available operation")

    call = commands.add_parser("call", help="Run one operation and print the result")
    call.add_argument("operation", help="Operation name, e.g. get_user")
    call.add_argument(
        "arguments",
        nargs="*",
        help="Identifiers required by the operation, in order",
    )
    call.add_argument(
        "--data",
        type=_json_object,
        default=None,
        help="JSON object sent as the request body",
    )
    call.add_argument(
        "--query",
        action="append",
        type=_key_value,
        metavar="KEY=VALUE",
        default=None,
        help="Query parameter for list operations (repeatable)",
    )
    return parser


def _print_operations() -> int:
    for endpoint in ENDPOINTS.values():
        print(
            f"{endpoint.name:<40} {endpoint.method:<5} {endpoint.template}"
            f"  ({', '.join(endpoint.arguments) or '-'})"
        )
    return 0


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    if args.command == "operations":
        return _print_operations()

    endpoint = ENDPOINTS.get(args.operation)
    if endpoint is None:
        parser.error(f"unknown operation '{args.operation}'")

    call_args: list[Any] = list(args.arguments)
    if endpoint.payload == DATA:
        call_args.append(args.data)
    elif endpoint.payload == OPTIONS:
        call_args.append(_collect(args.query or ()))
    if args.data is not None and endpoint.payload != DATA:
        parser.error(f"{endpoint.name} does not take a request body")
    if args.query and endpoint.payload != OPTIONS:
        parser.error(f"{endpoint.name} does not take query options")

    try:
        config = load_client_config(
            env_file=args.env_file, overrides=_collect(args.set or ())
        )
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    with create_client(config=config) as client:
        try:
            future = client.call(endpoint.name, *call_args)
        except (ValidationError, TypeError) as exc:
            logging.error("Invalid arguments: %s", exc)
            return 1
        return _handle_result(future.result())


def _handle_result(result: ApiResult) -> int:
    if result.error is not None:
        logging.error(
            "Request failed (status %s): %s", result.error.status, result.error.errors
        )
        return 1

    if result.data is not None:
        json.dump(result.data, sys.stdout, indent=2, sort_keys=True)
        sys.stdout.write("\n")
    return 0


def main() -> None:
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
