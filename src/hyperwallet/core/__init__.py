"""
Core primitives: the request executor, the endpoint table and configuration.
"""

from .client import SDK_VERSION, ApiClient, ApiError, ApiResult, Callback
from .config import DEFAULT_SERVER, ClientConfig, ConfigError, load_client_config
from .endpoints import ENDPOINTS, Endpoint, ValidationError, get_endpoint
from .environment import ClientEnvironment, build_environment
from .payloads import (
    BankAccountTransition,
    PrepaidCardTransition,
    add_program_token,
    build_transition,
    normalize_empty_list,
)

__all__ = [
    "ApiClient",
    "ApiError",
    "ApiResult",
    "BankAccountTransition",
    "Callback",
    "ClientConfig",
    "ClientEnvironment",
    "ConfigError",
    "DEFAULT_SERVER",
    "ENDPOINTS",
    "Endpoint",
    "PrepaidCardTransition",
    "SDK_VERSION",
    "ValidationError",
    "add_program_token",
    "build_environment",
    "build_transition",
    "get_endpoint",
    "load_client_config",
    "normalize_empty_list",
]
