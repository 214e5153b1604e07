"""
Fetcher registry and the declarative provider list.

Fetcher *types* register themselves with :func:`register_fetcher`; the
*providers* to race are declared in ``providers.yml`` and each one is bound
to a registered type.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Type, Union

import yaml
from pydantic import ValidationError

from .errors import ProviderConfigError
from .fetcher_base import BaseFetcher
from .models import ProviderConfig

logger = logging.getLogger(__name__)

PROVIDERS_FILE = Path(__file__).with_name("providers.yml")


class FetcherRegistry:
    """
    Registry mapping fetcher type names to fetcher classes.
    """

    _fetchers: Dict[str, Type[BaseFetcher]] = {}
    _default_fetcher: Optional[Type[BaseFetcher]] = None

    @classmethod
    def register(
        cls,
        fetcher_type: str,
        fetcher_class: Type[BaseFetcher],
        is_default: bool = False,
    ) -> None:
        """
        Register a fetcher class for a specific type.

        Args:
            fetcher_type: Unique identifier for the fetcher
            fetcher_class: Fetcher class that inherits from BaseFetcher
            is_default: Whether this should be the default fetcher
        """
        if not issubclass(fetcher_class, BaseFetcher):
            raise ValueError(
                f"Fetcher class must inherit from BaseFetcher: {fetcher_class}"
            )

        cls._fetchers[fetcher_type] = fetcher_class

        if is_default:
            cls._default_fetcher = fetcher_class

        logger.debug(f"Registered fetcher: {fetcher_type} -> {fetcher_class.__name__}")

    @classmethod
    def get_available_types(cls) -> List[str]:
        """Get list of all registered fetcher types."""
        return list(cls._fetchers.keys())

    @classmethod
    def create_fetcher(cls, config: ProviderConfig) -> BaseFetcher:
        """
        Instantiate the fetcher type named by ``config.fetcher_type``.

        Unknown types fall back to the default fetcher when one is registered.
        """
        fetcher_class = cls._fetchers.get(config.fetcher_type)
        if fetcher_class is None:
            if cls._default_fetcher is None:
                raise ValueError(
                    f"Unknown fetcher type '{config.fetcher_type}' for provider {config.id}"
                )
            logger.debug(f"Using default fetcher for provider {config.id}")
            fetcher_class = cls._default_fetcher
        return fetcher_class(config)


def register_fetcher(
    fetcher_type: str,
    fetcher_class: Optional[Type[BaseFetcher]] = None,
    is_default: bool = False,
):
    """
    Decorator and function for registering fetchers.

    Can be used as:
    1. Function: register_fetcher("my_type", MyFetcher)
    2. Decorator: @register_fetcher("my_type")
    3. Decorator with default: @register_fetcher("my_type", is_default=True)
    """

    def decorator(cls: Type[BaseFetcher]) -> Type[BaseFetcher]:
        FetcherRegistry.register(fetcher_type, cls, is_default)
        return cls

    if fetcher_class is not None:
        FetcherRegistry.register(fetcher_type, fetcher_class, is_default)
        return fetcher_class
    return decorator


def create_fetcher(config: ProviderConfig) -> BaseFetcher:
    """Create the fetcher for one provider configuration."""
    return FetcherRegistry.create_fetcher(config)


def list_fetcher_types() -> List[str]:
    """List all available fetcher types."""
    return FetcherRegistry.get_available_types()


def load_provider_configs(
    path: Optional[Union[str, Path]] = None,
) -> List[ProviderConfig]:
    """
    Load the ordered provider list from YAML.

    Args:
        path: Provider file; the packaged ``providers.yml`` when omitted

    Returns:
        Provider configurations in declaration order

    Raises:
        ProviderConfigError: If the file is missing, unreadable or invalid
    """
    path = Path(path) if path else PROVIDERS_FILE
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ProviderConfigError(f"Cannot read provider file {path}: {e}") from e

    entries = raw.get("providers") if isinstance(raw, dict) else None
    if not isinstance(entries, list):
        raise ProviderConfigError(f"{path}: expected a top-level 'providers' list")

    configs = []
    for index, entry in enumerate(entries):
        try:
            configs.append(ProviderConfig(**entry))
        except (TypeError, ValidationError) as e:
            raise ProviderConfigError(f"{path}: invalid provider #{index}: {e}") from e

    ids = [c.id for c in configs]
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise ProviderConfigError(f"{path}: duplicate provider ids: {duplicates}")

    logger.debug(f"Loaded {len(configs)} providers from {path}")
    return configs


def default_fetchers(path: Optional[Union[str, Path]] = None) -> List[BaseFetcher]:
    """Build the ordered fetcher list raced by default."""
    return [create_fetcher(config) for config in load_provider_configs(path)]
