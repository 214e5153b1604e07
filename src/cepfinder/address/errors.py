"""
Errors surfaced by an address lookup.

Individual provider failures never show up here; fetchers absorb them. Only
the coordinator's final outcome is raised to the caller.
"""


class AddressLookupError(Exception):
    """Base class for every failure a lookup can report."""


class RequestTimeoutError(AddressLookupError):
    """No provider answered before the deadline."""

    def __init__(self, message: str = "request timeout"):
        super().__init__(message)


class NoProviderSucceededError(AddressLookupError):
    """Every provider finished without producing a result."""

    def __init__(self, message: str = "no provider succeeded"):
        super().__init__(message)


class NoProvidersError(AddressLookupError):
    """The lookup was started with an empty provider registry."""

    def __init__(self, message: str = "no providers registered"):
        super().__init__(message)


class ProviderConfigError(AddressLookupError):
    """A provider configuration file could not be loaded."""
