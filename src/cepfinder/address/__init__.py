"""
Address lookup: concurrent race across postal-code providers.
"""

from .errors import (  # noqa: F401
    AddressLookupError,
    NoProvidersError,
    NoProviderSucceededError,
    ProviderConfigError,
    RequestTimeoutError,
)
from .fetcher_base import BaseFetcher  # noqa: F401
from .fetchers import JsonFetcher  # noqa: F401
from .models import AddressResult, ClientConfig, ProviderConfig  # noqa: F401
from .registry import (  # noqa: F401
    FetcherRegistry,
    default_fetchers,
    load_provider_configs,
    register_fetcher,
)
from .service import AddressService, lookup  # noqa: F401

__all__ = [
    "AddressLookupError",
    "AddressResult",
    "AddressService",
    "BaseFetcher",
    "ClientConfig",
    "FetcherRegistry",
    "JsonFetcher",
    "NoProviderSucceededError",
    "NoProvidersError",
    "ProviderConfig",
    "ProviderConfigError",
    "RequestTimeoutError",
    "default_fetchers",
    "load_provider_configs",
    "lookup",
    "register_fetcher",
]
