"""
Race coordinator: resolve a postal code with whichever provider answers first.

All registered fetchers are launched on their own daemon threads. The
coordinator then waits for the first of three events:

- the deadline elapses: the lookup fails with a timeout, even if a fetcher
  succeeds a moment later;
- the cancellation token is signalled: a fetcher won, and its result is
  waiting in the channel;
- the result channel is closed: every fetcher finished without a win.

The token is always cancelled on the way out, so stragglers stop promptly and
discard whatever they were doing.
"""

import logging
import threading
import time
from typing import Iterable, List, Optional

from ..settings import settings
from .errors import NoProvidersError, NoProviderSucceededError, RequestTimeoutError
from .fetcher_base import BaseFetcher
from .models import AddressResult, ClientConfig
from .registry import default_fetchers
from .sync import CancellationToken, CompletionTracker, ResultChannel

logger = logging.getLogger(__name__)


class AddressService:
    """
    Coordinator racing a fixed list of fetchers under one deadline.
    """

    def __init__(
        self,
        fetchers: Optional[Iterable[BaseFetcher]] = None,
        timeout: Optional[float] = None,
        client: Optional[ClientConfig] = None,
    ):
        self.logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )
        if fetchers is None:
            fetchers = default_fetchers(settings.providers_file)
        self.fetchers: List[BaseFetcher] = list(fetchers)
        self.client = client or settings.client_config()
        self.timeout = self.client.timeout
        if timeout is not None:
            self.set_timeout(timeout)

    @property
    def providers(self) -> List[str]:
        """Source names of the registered fetchers, in launch order."""
        return [fetcher.source for fetcher in self.fetchers]

    def set_timeout(self, timeout: float) -> "AddressService":
        """
        Set the race deadline and the per-provider request timeout.

        Returns:
            self, so calls can be chained
        """
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self.timeout = timeout
        self.client = self.client.model_copy(update={"timeout": timeout})
        return self

    def execute(self, postal_code: str) -> AddressResult:
        """
        Race every provider for ``postal_code``.

        Args:
            postal_code: Lookup key, handed to each fetcher unmodified

        Returns:
            The first result produced by any provider

        Raises:
            NoProvidersError: If no fetcher is registered
            RequestTimeoutError: If the deadline elapsed before any win
            NoProviderSucceededError: If every fetcher finished without a win
        """
        if not self.fetchers:
            raise NoProvidersError()

        count = len(self.fetchers)
        deadline = time.monotonic() + self.timeout

        token = CancellationToken()
        channel = ResultChannel(capacity=count)
        tracker = CompletionTracker(count)
        wakeup = threading.Event()

        self.logger.info(
            f"Looking up {postal_code} across {count} providers "
            f"(timeout={self.timeout}s)"
        )

        # No transport wait may outlive the race deadline.
        client = self.client
        remaining = deadline - time.monotonic()
        if client.timeout > remaining > 0:
            client = client.model_copy(update={"timeout": remaining})

        try:
            for fetcher in self.fetchers:
                self._spawn(
                    f"cepfinder-{fetcher.source}",
                    fetcher.run,
                    token,
                    postal_code,
                    client,
                    channel,
                    tracker,
                )
            self._spawn("cepfinder-waiter", self._close_when_done, tracker, channel)

            token.add_callback(wakeup.set)
            channel.add_close_callback(wakeup.set)

            if not wakeup.wait(max(deadline - time.monotonic(), 0)):
                self.logger.warning(f"Lookup for {postal_code} timed out")
                raise RequestTimeoutError()

            # A winner publishes right after claiming the token, and the
            # channel only closes once it has, so this never blocks for long.
            result = channel.receive() if token.cancelled else channel.receive(0)
            if result is None:
                self.logger.warning(f"No provider resolved {postal_code}")
                raise NoProviderSucceededError()

            self.logger.info(f"Resolved {postal_code} via {result.source}")
            return result
        finally:
            token.cancel()

    @staticmethod
    def _spawn(name: str, target, *args) -> threading.Thread:
        # Stragglers never block interpreter exit.
        thread = threading.Thread(target=target, args=args, name=name, daemon=True)
        thread.start()
        return thread

    @staticmethod
    def _close_when_done(tracker: CompletionTracker, channel: ResultChannel) -> None:
        tracker.wait()
        channel.close()


def lookup(postal_code: str, timeout: Optional[float] = None) -> AddressResult:
    """
    Resolve ``postal_code`` using the default provider list.

    Args:
        postal_code: Postal code to resolve
        timeout: Deadline in seconds; ``settings.request_timeout`` if omitted
    """
    return AddressService(timeout=timeout).execute(postal_code)
