"""
Python client for the Hyperwallet REST API.

The most useful pieces are re-exported here so integrators can
``from hyperwallet import ...`` without navigating the package.
"""

from .api import Hyperwallet, create_client
from .core import (
    SDK_VERSION,
    ApiClient,
    ApiError,
    ApiResult,
    BankAccountTransition,
    ClientConfig,
    ConfigError,
    PrepaidCardTransition,
    ValidationError,
    load_client_config,
)

__version__ = SDK_VERSION

__all__ = (
    "ApiClient",
    "ApiError",
    "ApiResult",
    "BankAccountTransition",
    "ClientConfig",
    "ConfigError",
    "Hyperwallet",
    "PrepaidCardTransition",
    "ValidationError",
    "create_client",
    "load_client_config",
)
