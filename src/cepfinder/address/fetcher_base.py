"""
Abstract base class for address fetchers.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from .models import AddressResult, ClientConfig, ProviderConfig
from .sync import CancellationToken, CompletionTracker, ResultChannel

logger = logging.getLogger(__name__)


class BaseFetcher(ABC):
    """
    One provider lookup, run as an independent task inside a race.

    Subclasses implement :meth:`fetch`; :meth:`run` wraps it with the race
    bookkeeping (win claim, publish, completion signal) so no subclass can
    get the side effects wrong.
    """

    def __init__(self, config: ProviderConfig):
        self.config = config
        self.logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )

    @property
    def source(self) -> str:
        return self.config.name

    @property
    @abstractmethod
    def fetcher_type(self) -> str:
        """
        Return the type identifier for this fetcher.
        """
        pass

    @abstractmethod
    def fetch(
        self, token: CancellationToken, postal_code: str, client: ClientConfig
    ) -> Optional[AddressResult]:
        """
        Look up ``postal_code`` at this provider.

        Must honour ``token`` promptly and return None on every failure,
        including cancellation. Never raises on provider errors.
        """
        pass

    def run(
        self,
        token: CancellationToken,
        postal_code: str,
        client: ClientConfig,
        channel: ResultChannel,
        tracker: CompletionTracker,
    ) -> bool:
        """
        Task body scheduled by the coordinator.

        On success the fetcher claims the win by cancelling the token; only
        the claimant publishes, so a race delivers at most one result.
        The tracker is signalled exactly once on every exit path.

        Returns:
            True if this fetcher won the race.
        """
        try:
            try:
                result = self.fetch(token, postal_code, client)
            except Exception as e:
                if token.cancelled:
                    self.logger.debug(f"Aborted, source: {self.source}: {e}")
                else:
                    self.logger.error(f"Lookup failed, source: {self.source}: {e}")
                return False

            if result is None:
                return False

            if not token.cancel():
                self.logger.debug(f"Discarding late result, source: {self.source}")
                return False

            channel.publish(result)
            self.logger.info(f"Won race for {postal_code}, source: {self.source}")
            return True
        finally:
            tracker.done()

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(source={self.source})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(config={self.config})"
