"""
Configuration objects and helpers for the Hyperwallet client.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .environment import build_environment

__all__ = [
    "ConfigError",
    "ClientConfig",
    "DEFAULT_SERVER",
    "load_client_config",
]

DEFAULT_SERVER = "https://api.sandbox.hyperwallet.com"

_PARAMETER_TO_ENV_KEY = {
    "username": "HYPERWALLET_USERNAME",
    "password": "HYPERWALLET_PASSWORD",
    "program_token": "HYPERWALLET_PROGRAM_TOKEN",
    "server": "HYPERWALLET_SERVER",
}


class ConfigError(Exception):
    """Raised when the supplied configuration is invalid."""


def _collect_parameter_overrides(explicit: Mapping[str, Any]) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:
            raise TypeError(f"Unknown client parameter '{key}'") from exc
        overrides[env_key] = str(value)
    return overrides


def _optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class ClientConfig:
    """
    Everything the client needs for its whole lifetime.

    Credentials are required and non-empty; ``program_token`` is the default
    injected into user and payment bodies that do not carry one.
    """

    username: str
    password: str = field(repr=False)
    program_token: Optional[str] = None
    server: str = DEFAULT_SERVER

    def __post_init__(self) -> None:
        if not self.username or not self.password:
            raise ConfigError("You need to specify your API username and password!")
        if not self.server:
            raise ConfigError("HYPERWALLET_SERVER must not be empty")

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "ClientConfig":
        username = (values.get("HYPERWALLET_USERNAME") or "").strip()
        password = values.get("HYPERWALLET_PASSWORD") or ""
        if not username or not password:
            raise ConfigError(
                "HYPERWALLET_USERNAME and HYPERWALLET_PASSWORD must be provided"
            )

        server = _optional(values.get("HYPERWALLET_SERVER")) or DEFAULT_SERVER

        return cls(
            username=username,
            password=password,
            program_token=_optional(values.get("HYPERWALLET_PROGRAM_TOKEN")),
            server=server,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        program_token: Optional[str] = None,
        server: Optional[str] = None,
    ) -> "ClientConfig":
        merged_overrides = dict(overrides or {})
        merged_overrides.update(
            _collect_parameter_overrides(
                {
                    "username": username,
                    "password": password,
                    "program_token": program_token,
                    "server": server,
                }
            )
        )

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.variables)


def load_client_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    program_token: Optional[str] = None,
    server: Optional[str] = None,
) -> ClientConfig:
    """
    Convenience wrapper that mirrors :meth:`ClientConfig.from_env`.

    The configuration can come from environment variables, a ``.env`` file,
    direct keyword arguments, or any combination of the three.
    """
    return ClientConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        username=username,
        password=password,
        program_token=program_token,
        server=server,
    )
