"""
Fixtures and test configuration for the cepfinder test suite.
"""

import threading
from typing import Optional
from unittest.mock import MagicMock

import pytest
import yaml

from cepfinder.address.fetcher_base import BaseFetcher
from cepfinder.address.models import AddressResult, ClientConfig, ProviderConfig


class StubFetcher(BaseFetcher):
    """
    Fetcher double that waits ``delay`` seconds (aborting if the token is
    cancelled meanwhile) and then succeeds, fails or raises.
    """

    def __init__(
        self,
        name: str,
        delay: float = 0.0,
        fail: bool = False,
        error: Optional[Exception] = None,
        **fields,
    ):
        super().__init__(
            ProviderConfig(
                id=name.lower(),
                name=name,
                url_template="http://stub.invalid/{postal_code}",
            )
        )
        self.delay = delay
        self.fail = fail
        self.error = error
        self.fields = fields
        self.calls = []
        self.aborted = False
        self.won = None
        self.finished = threading.Event()

    @property
    def fetcher_type(self) -> str:
        return "stub"

    def fetch(self, token, postal_code, client):
        self.calls.append(postal_code)
        if self.delay and token.wait(self.delay):
            self.aborted = True
            return None
        if self.error is not None:
            raise self.error
        if self.fail:
            return None
        return AddressResult(source=self.source, **self.fields)

    def run(self, token, postal_code, client, channel, tracker):
        try:
            self.won = super().run(token, postal_code, client, channel, tracker)
            return self.won
        finally:
            self.finished.set()


@pytest.fixture
def stub_fetcher():
    """Factory for StubFetcher instances."""
    return StubFetcher


@pytest.fixture
def client_config():
    """Transport settings used by fetcher tests."""
    return ClientConfig(timeout=5.0, headers={"User-Agent": "cepfinder-tests"})


@pytest.fixture
def viacep_config():
    """ViaCEP provider configuration."""
    return ProviderConfig(
        id="viacep",
        name="ViaCEP",
        url_template="http://viacep.com.br/ws/{postal_code}/json",
        error_field="erro",
        fields={
            "state": "uf",
            "city": "localidade",
            "street": "logradouro",
            "postal_code": "cep",
            "neighborhood": "bairro",
        },
    )


@pytest.fixture
def brasilapi_config():
    """BrasilAPI provider configuration."""
    return ProviderConfig(
        id="brasilapi",
        name="BrasilAPI",
        url_template="https://brasilapi.com.br/api/cep/v1/{postal_code}",
        fields={
            "state": "state",
            "city": "city",
            "street": "street",
            "postal_code": "cep",
            "neighborhood": "neighborhood",
        },
    )


@pytest.fixture
def viacep_payload():
    """ViaCEP answer for 01001000."""
    return {
        "cep": "01001-000",
        "logradouro": "Praça da Sé",
        "complemento": "lado ímpar",
        "bairro": "Sé",
        "localidade": "São Paulo",
        "uf": "SP",
        "ibge": "3550308",
    }


@pytest.fixture
def brasilapi_payload():
    """BrasilAPI answer for 01001000."""
    return {
        "cep": "01001000",
        "state": "SP",
        "city": "São Paulo",
        "neighborhood": "Sé",
        "street": "Praça da Sé",
        "service": "open-cep",
    }


@pytest.fixture
def make_response():
    """Build a mock requests response usable as a context manager."""

    def _make(payload=None, status_error=None, json_error=None):
        response = MagicMock()
        response.__enter__.return_value = response
        if status_error is not None:
            response.raise_for_status.side_effect = status_error
        if json_error is not None:
            response.json.side_effect = json_error
        else:
            response.json.return_value = payload
        return response

    return _make


@pytest.fixture
def providers_file(tmp_path):
    """Write a provider YAML file and return its path."""

    def _write(content):
        path = tmp_path / "providers.yml"
        with open(path, "w", encoding="utf-8") as f:
            if isinstance(content, str):
                f.write(content)
            else:
                yaml.dump(content, f)
        return path

    return _write
