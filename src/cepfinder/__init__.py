"""
cepfinder: resolve Brazilian postal codes (CEP) by racing public providers.

Subpackages
-----------
- address:  fetchers, provider registry and the race coordinator
- api:      FastAPI server
- plugins:  CLI commands
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version(__name__)
except PackageNotFoundError:  # local editable install
    __version__ = "0.0.0-dev"

from .address import AddressResult, AddressService, lookup  # noqa: E402

__all__ = [
    "AddressResult",
    "AddressService",
    "lookup",
]
