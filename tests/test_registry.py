"""
Tests for the fetcher registry and provider configuration loading.
"""

import pytest

from cepfinder.address.errors import ProviderConfigError
from cepfinder.address.fetcher_base import BaseFetcher
from cepfinder.address.fetchers import JsonFetcher
from cepfinder.address.models import ProviderConfig
from cepfinder.address.registry import (
    FetcherRegistry,
    create_fetcher,
    default_fetchers,
    list_fetcher_types,
    load_provider_configs,
    register_fetcher,
)


class TestPackagedProviders:
    """Test cases for the packaged provider list."""

    def test_order_and_names(self):
        """ViaCEP is launched before BrasilAPI."""
        configs = load_provider_configs()

        assert [c.id for c in configs] == ["viacep", "brasilapi"]
        assert [c.name for c in configs] == ["ViaCEP", "BrasilAPI"]

    def test_viacep_error_field(self):
        """ViaCEP answers unknown codes with an 'erro' flag."""
        viacep = load_provider_configs()[0]
        assert viacep.error_field == "erro"
        assert viacep.fields["city"] == "localidade"

    def test_default_fetchers(self):
        """Every packaged provider is served by the JSON fetcher."""
        fetchers = default_fetchers()

        assert len(fetchers) == 2
        assert all(isinstance(f, JsonFetcher) for f in fetchers)
        assert [f.source for f in fetchers] == ["ViaCEP", "BrasilAPI"]


class TestLoadProviderConfigs:
    """Test cases for load_provider_configs with custom files."""

    def test_custom_file(self, providers_file):
        """A custom file replaces the packaged list."""
        path = providers_file(
            {
                "providers": [
                    {
                        "id": "local",
                        "name": "Local",
                        "url_template": "http://localhost:8080/cep/{postal_code}",
                        "fields": {"city": "cidade"},
                    }
                ]
            }
        )

        configs = load_provider_configs(path)

        assert len(configs) == 1
        assert configs[0].url_for("01001000") == "http://localhost:8080/cep/01001000"

    def test_empty_list_is_allowed(self, providers_file):
        """An empty registry loads; the coordinator reports it on use."""
        path = providers_file({"providers": []})
        assert load_provider_configs(path) == []

    def test_missing_file(self, tmp_path):
        """A missing file is a configuration error."""
        with pytest.raises(ProviderConfigError):
            load_provider_configs(tmp_path / "nope.yml")

    def test_invalid_yaml(self, providers_file):
        """Unparseable YAML is a configuration error."""
        path = providers_file("providers: [unclosed")

        with pytest.raises(ProviderConfigError):
            load_provider_configs(path)

    def test_missing_providers_key(self, providers_file):
        """The top level must hold a 'providers' list."""
        path = providers_file({"sources": []})

        with pytest.raises(ProviderConfigError, match="providers"):
            load_provider_configs(path)

    def test_invalid_entry(self, providers_file):
        """Entries are validated."""
        path = providers_file(
            {"providers": [{"id": "x", "name": "X", "url_template": "http://x/"}]}
        )

        with pytest.raises(ProviderConfigError, match="#0"):
            load_provider_configs(path)

    def test_non_mapping_entry(self, providers_file):
        """Entries must be mappings."""
        path = providers_file({"providers": ["viacep"]})

        with pytest.raises(ProviderConfigError):
            load_provider_configs(path)

    def test_duplicate_ids(self, providers_file):
        """Provider ids must be unique."""
        entry = {"id": "x", "name": "X", "url_template": "http://x/{postal_code}"}
        path = providers_file({"providers": [entry, dict(entry, name="Y")]})

        with pytest.raises(ProviderConfigError, match="duplicate"):
            load_provider_configs(path)


class DummyFetcher(BaseFetcher):
    """Registered only for the duration of a test."""

    @property
    def fetcher_type(self):
        return "dummy"

    def fetch(self, token, postal_code, client):
        return None


class TestFetcherRegistry:
    """Test cases for FetcherRegistry."""

    @pytest.fixture
    def isolated_registry(self, monkeypatch):
        """Let a test register types without leaking them."""
        monkeypatch.setattr(
            FetcherRegistry, "_fetchers", dict(FetcherRegistry._fetchers)
        )
        monkeypatch.setattr(
            FetcherRegistry, "_default_fetcher", FetcherRegistry._default_fetcher
        )

    def test_json_registered_by_default(self):
        """The JSON fetcher is registered on import."""
        assert "json" in list_fetcher_types()

    def test_register_and_create(self, isolated_registry):
        """Registered types are instantiated by name."""
        register_fetcher("dummy", DummyFetcher)
        config = ProviderConfig(
            id="d",
            name="D",
            url_template="http://d/{postal_code}",
            fetcher_type="dummy",
        )

        assert isinstance(create_fetcher(config), DummyFetcher)

    def test_decorator_registration(self, isolated_registry):
        """register_fetcher works as a class decorator."""
        decorated = register_fetcher("dummy")(DummyFetcher)

        assert decorated is DummyFetcher
        assert "dummy" in list_fetcher_types()

    def test_unknown_type_falls_back_to_default(self):
        """Unknown types use the default fetcher."""
        config = ProviderConfig(
            id="x", name="X", url_template="http://x/{postal_code}", fetcher_type="soap"
        )
        assert isinstance(create_fetcher(config), JsonFetcher)

    def test_rejects_non_fetcher(self):
        """Only BaseFetcher subclasses can be registered."""
        with pytest.raises(ValueError):
            FetcherRegistry.register("bad", dict)
