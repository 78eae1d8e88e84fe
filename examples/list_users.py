"""
Minimal script that uses the public API to page through users and their cards.
"""

from __future__ import annotations

import argparse
import logging
import sys

from hyperwallet import ConfigError, create_client, load_client_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List users with the SDK API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing HYPERWALLET_* settings",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("--username", help="API username")
    parser.add_argument("--password", help="API password")
    parser.add_argument("--program-token", help="Default program token")
    parser.add_argument("--server", help="API server, defaults to the sandbox")
    parser.add_argument(
        "--limit",
        type=int,
        default=10,
        help="Maximum number of users to fetch (default: 10)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_client_config(
            env_file=args.env_file,
            username=args.username,
            password=args.password,
            program_token=args.program_token,
            server=args.server,
        )
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    with create_client(config=config) as client:
        error, users, _ = client.list_users({"limit": args.limit}).result()
        if error is not None:
            logging.error("Listing users failed: %s", error.errors)
            return 1

        logging.info("Found %s users", users["count"])
        card_futures = {
            user["token"]: client.list_prepaid_cards(user["token"])
            for user in users["data"]
        }
        for user_token, future in card_futures.items():
            error, cards, _ = future.result()
            if error is not None:
                logging.warning("Could not list cards for %s: %s", user_token, error)
                continue
            logging.info("%s has %s prepaid card(s)", user_token, cards["count"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
