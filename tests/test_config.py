"""
Tests for configuration, pagination parsing and the service endpoints

Settings are constructed directly (not through the cached get_settings)
so each test controls its own values.
"""

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from pydantic import ValidationError

from bookreviews.config import Settings
from bookreviews.dependencies import MAX_SQL_INT, PaginationParams, parse_int_param
from bookreviews.main import create_app

GOOD_KEY = "k" * 40


class TestSettings:
    """Tests for Settings validators"""

    def test_defaults(self):
        settings = Settings(_env_file=None, secret_key=GOOD_KEY)

        assert settings.access_token_expire_hours == 24
        assert settings.reject_duplicate_books is False
        assert settings.allowed_origins_list == ["http://localhost:3000"]

    def test_placeholder_secret_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, secret_key="REPLACE_WITH_YOUR_GENERATED_SECRET_KEY_PLEASE")

    def test_short_secret_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, secret_key="too-short")

    def test_log_level_normalized(self):
        settings = Settings(_env_file=None, secret_key=GOOD_KEY, log_level="debug")

        assert settings.log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, secret_key=GOOD_KEY, log_level="loud")

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, secret_key=GOOD_KEY, environment="moon")

    @pytest.mark.parametrize(
        "raw, expected",
        [("", ""), ("api/v1", "/api/v1"), ("/api/v1/", "/api/v1")],
    )
    def test_api_prefix_normalized(self, raw, expected):
        settings = Settings(_env_file=None, secret_key=GOOD_KEY, api_prefix=raw)

        assert settings.api_prefix == expected

    def test_allowed_origins_split(self):
        settings = Settings(
            _env_file=None,
            secret_key=GOOD_KEY,
            allowed_origins="http://a.example, http://b.example",
        )

        assert settings.allowed_origins_list == ["http://a.example", "http://b.example"]


class TestParseIntParam:
    """Lenient page/limit parsing"""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, 7),
            ("3", 3),
            (" 3", 3),
            ("3abc", 3),
            ("abc", 7),
            ("", 7),
            ("0", 7),
            ("-2", 7),
            ("1000", 1000),
            ("99999999999999999999", 7),
            (str(2**63 - 1), 2**63 - 1),
            (str(2**63), 7),
        ],
    )
    def test_parse(self, raw, expected):
        assert parse_int_param(raw, 7) == expected

    def test_overflowing_offset_falls_back_to_first_page(self):
        pagination = PaginationParams(page=str(2**62), limit="10")

        assert pagination.page == 1
        assert pagination.limit == 10
        assert pagination.skip <= MAX_SQL_INT

    def test_large_page_within_range_is_kept(self):
        pagination = PaginationParams(page="1000000", limit="10")

        assert pagination.page == 1000000
        assert pagination.skip == 9999990


class TestServiceEndpoints:
    """Tests for / and /health"""

    def test_root(self, client: TestClient):
        response = client.get("/")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["health"] == "/health"

    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"
        assert data["rateLimiting"]["enabled"] is False

    def test_unknown_route_uses_error_format(self, client: TestClient):
        response = client.get("/no-such-route")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "error" in response.json()

    def test_unhandled_error_hides_details_in_debug(self, database):
        """Debug mode still returns the generic message; details stay in the log."""
        settings = Settings(debug=True)
        app = create_app(settings=settings, database=database)

        @app.get("/explode")
        def explode():
            raise RuntimeError("connection string with password")

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/explode")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"error": "Internal server error"}
