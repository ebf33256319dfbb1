"""
Unit tests for settings and data client selection.
"""
import pytest
from moads.config import Settings
from moads.errors import ConfigurationError, DataAccessError
from moads.services import SupabaseClient, UnconfiguredClient, create_data_client


@pytest.fixture(autouse=True)
def clear_supabase_env(monkeypatch):
    for name in ("SUPABASE_URL", "SUPABASE_ANON_KEY", "VITE_SUPABASE_URL", "VITE_SUPABASE_ANON_KEY"):
        monkeypatch.delenv(name, raising=False)


@pytest.mark.unit
class TestSettings:
    """Test Settings loading and validation."""

    def test_credentials_present(self):
        settings = Settings(
            supabase_url="https://example.supabase.co/",
            supabase_anon_key="key",
            _env_file=None,
        )

        assert settings.supabase_credentials() == ("https://example.supabase.co/", "key")

    def test_missing_url_raises(self):
        settings = Settings(supabase_anon_key="key", _env_file=None)

        with pytest.raises(ConfigurationError) as exc_info:
            settings.supabase_credentials()

        assert "SUPABASE_URL" in str(exc_info.value)

    def test_missing_both_lists_both(self):
        settings = Settings(_env_file=None)

        with pytest.raises(ConfigurationError) as exc_info:
            settings.supabase_credentials()

        assert "SUPABASE_URL or SUPABASE_ANON_KEY" in str(exc_info.value)

    def test_blank_key_counts_as_missing(self):
        settings = Settings(supabase_url="https://example.supabase.co", supabase_anon_key="  ", _env_file=None)

        with pytest.raises(ConfigurationError):
            settings.supabase_credentials()

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://env.supabase.co")
        monkeypatch.setenv("SUPABASE_ANON_KEY", "env-key")

        settings = Settings(_env_file=None)

        assert settings.supabase_url == "https://env.supabase.co"
        assert settings.supabase_anon_key == "env-key"

    def test_reads_vite_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("VITE_SUPABASE_URL", "https://vite.supabase.co")
        monkeypatch.setenv("VITE_SUPABASE_ANON_KEY", "vite-key")

        settings = Settings(_env_file=None)

        assert settings.supabase_credentials() == ("https://vite.supabase.co", "vite-key")

    def test_cors_origins_list(self):
        settings = Settings(api_cors_origins="http://a.test, http://b.test,", _env_file=None)

        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]


@pytest.mark.unit
class TestCreateDataClient:
    """Test live/unconfigured client selection."""

    def test_live_client_when_configured(self):
        settings = Settings(
            supabase_url="https://example.supabase.co/",
            supabase_anon_key="key",
            supabase_timeout_seconds=3.0,
            _env_file=None,
        )

        client = create_data_client(settings)

        assert isinstance(client, SupabaseClient)
        assert client.url == "https://example.supabase.co"
        assert client.timeout == 3.0
        assert client.is_configured is True

    def test_unconfigured_client_when_missing(self):
        client = create_data_client(Settings(_env_file=None))

        assert isinstance(client, UnconfiguredClient)
        assert client.is_configured is False

    async def test_unconfigured_client_fails_every_operation(self):
        client = create_data_client(Settings(_env_file=None))

        with pytest.raises(DataAccessError, match="not configured"):
            await client.select("campaigns")
        with pytest.raises(DataAccessError, match="not configured"):
            await client.insert("campaigns", [{}])
        with pytest.raises(DataAccessError, match="not configured"):
            await client.update("campaigns", {}, "id", "1")
        with pytest.raises(DataAccessError, match="not configured"):
            await client.delete("campaigns", "id", "1")
