"""
Fetcher implementations.

Every provider we race answers a plain GET with a flat JSON object, so one
parameterized fetcher covers all of them; the per-provider differences live
in ``providers.yml``.
"""

import logging
from typing import Any, Optional

import requests

from .fetcher_base import BaseFetcher
from .models import AddressResult, ClientConfig
from .registry import register_fetcher
from .sync import CancellationToken

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


@register_fetcher("json", is_default=True)
class JsonFetcher(BaseFetcher):
    """
    Fetcher for providers returning one JSON object per postal code.
    """

    @property
    def fetcher_type(self) -> str:
        return "json"

    def fetch(
        self, token: CancellationToken, postal_code: str, client: ClientConfig
    ) -> Optional[AddressResult]:
        """
        GET the provider endpoint and map the payload onto AddressResult.

        Args:
            token: Race cancellation token; cancelling it closes the response
            postal_code: Lookup key, passed through unmodified
            client: Shared transport settings

        Returns:
            The normalized address, or None on any failure or cancellation
        """
        if token.cancelled:
            self.logger.debug(f"Skipped, race already decided, source: {self.source}")
            return None

        url = self.config.url_for(postal_code)
        self.logger.debug(f"Requesting {url}")

        try:
            with requests.get(
                url, headers=client.headers, timeout=client.timeout, stream=True
            ) as response:
                # Tear the transfer down if a sibling wins mid-flight.
                token.add_callback(response.close)
                try:
                    response.raise_for_status()
                    payload = response.json()
                finally:
                    token.remove_callback(response.close)

        except requests.Timeout:
            self.logger.info(f"Timeout, source: {self.source}")
            return None

        except (requests.RequestException, ValueError) as e:
            if token.cancelled:
                self.logger.debug(f"Aborted, source: {self.source}")
            else:
                self.logger.warning(f"Request failed, source: {self.source}: {e}")
            return None

        if token.cancelled:
            self.logger.debug(f"Aborted after response, source: {self.source}")
            return None

        try:
            return self.to_address(payload)
        except ValueError as e:
            self.logger.warning(f"Unusable payload, source: {self.source}: {e}")
            return None

    def to_address(self, payload: Any) -> AddressResult:
        """
        Map a decoded provider payload onto the common result shape.

        Raises:
            ValueError: If the payload is not an object or flags an error
        """
        if not isinstance(payload, dict):
            raise ValueError(f"expected a JSON object, got {type(payload).__name__}")

        error_field = self.config.error_field
        if error_field and payload.get(error_field):
            raise ValueError(f"provider reported '{error_field}'")

        values = {
            field: _text(payload.get(key)) for field, key in self.config.fields.items()
        }
        return AddressResult(source=self.source, **values)
