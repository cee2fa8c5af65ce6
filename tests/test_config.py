"""Tests for Settings."""

from proxy_core.config import Settings


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.cache_ttl == 86400
        assert settings.search_result_limit == 20
        assert settings.analytics_base_url == "https://api.us-east.tinybird.co/v0/pipes"

    def test_base_url_trailing_slash_stripped(self):
        settings = Settings(_env_file=None, ANALYTICS_BASE_URL="https://example.test/v0/pipes/")

        assert settings.analytics_base_url == "https://example.test/v0/pipes"

    def test_redis_url(self):
        settings = Settings(_env_file=None, REDIS_HOST="cache", REDIS_PORT=6380, REDIS_DB=2, REDIS_PASSWORD="pw")

        assert settings.redis_url == "redis://:pw@cache:6380/2"

    def test_missing_api_key_is_an_error(self):
        settings = Settings(_env_file=None, TINYBIRD_API_KEY="")

        errors, _ = settings.validate_production_config()

        assert any("TINYBIRD_API_KEY" in error for error in errors)

    def test_plain_http_backend_warns(self):
        settings = Settings(_env_file=None, TINYBIRD_API_KEY="k", ANALYTICS_BASE_URL="http://localhost:8001")

        errors, warnings = settings.validate_production_config()

        assert errors == []
        assert any("HTTPS" in warning for warning in warnings)

    def test_environment_selects_renderer_mode(self):
        assert Settings(_env_file=None).is_development
        assert not Settings(_env_file=None, ENVIRONMENT="production").is_development
        assert Settings(_env_file=None, ENVIRONMENT="production", DEBUG=True).is_development

    def test_effective_log_level(self):
        assert Settings(_env_file=None, LOG_LEVEL="warning").effective_log_level == "WARNING"
        assert Settings(_env_file=None, LOG_LEVEL="warning", DEBUG=True).effective_log_level == "DEBUG"
