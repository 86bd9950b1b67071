"""
Idea Box API: Settings and Health Tests
=======================================
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from ideabox.config import Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("AUTO_CREATE_SCHEMA", raising=False)

        s = Settings(_env_file=None)

        assert s.database_url == "sqlite+aiosqlite:///./idea-box.db"
        assert s.backend_port == 8080
        assert s.auto_create_schema is True
        assert s.is_sqlite

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(log_level="chatty")

    def test_cors_origins_list(self):
        s = Settings(cors_origins="http://a.test, http://b.test,")

        assert s.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_postgres_url_is_not_sqlite(self):
        s = Settings(database_url="postgresql+asyncpg://u:p@db/ideas")

        assert not s.is_sqlite


class TestHealthUnavailable:

    @pytest.mark.asyncio
    async def test_health_reports_unreachable_database(self, app, test_client, monkeypatch):
        async def failing_ping():
            raise OSError("connection refused")

        monkeypatch.setattr(app.state.database, "ping", failing_ping)

        response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
        assert response.json()["database"] == "disconnected"
