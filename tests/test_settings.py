import pytest

from todo_api.errors import ConfigurationError
from todo_api.main import create_app
from todo_api.settings import get_settings, parse_database_url


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("DATABASE_URL", "APP_ENV", "CORS_ALLOW_ORIGINS", "LOG_LEVEL", "HOST", "PORT"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestGetSettings:
    def test_missing_database_url_is_fatal(self, clean_env):
        with pytest.raises(ConfigurationError):
            get_settings()

    def test_blank_database_url_is_fatal(self, clean_env):
        clean_env.setenv("DATABASE_URL", "   ")
        with pytest.raises(ConfigurationError):
            get_settings()

    def test_create_app_without_configuration_fails(self, clean_env):
        with pytest.raises(ConfigurationError):
            create_app()

    def test_defaults(self, clean_env, tmp_path):
        clean_env.setenv("DATABASE_URL", f"sqlite:///{tmp_path}/todos.db")
        settings = get_settings()
        assert settings.database_path == f"{tmp_path}/todos.db"
        assert settings.environment == "production"
        assert settings.is_development is False
        assert settings.cors_allow_origins == ("*",)
        assert settings.log_level == "INFO"
        assert settings.port == 8000

    def test_overrides(self, clean_env):
        clean_env.setenv("DATABASE_URL", "todos.db")
        clean_env.setenv("APP_ENV", "Development")
        clean_env.setenv("CORS_ALLOW_ORIGINS", "http://a.example, http://b.example")
        clean_env.setenv("LOG_LEVEL", "debug")
        clean_env.setenv("PORT", "9001")
        settings = get_settings()
        assert settings.is_development is True
        assert settings.cors_allow_origins == ("http://a.example", "http://b.example")
        assert settings.log_level == "DEBUG"
        assert settings.port == 9001

    def test_bad_port(self, clean_env):
        clean_env.setenv("DATABASE_URL", "todos.db")
        clean_env.setenv("PORT", "eighty")
        with pytest.raises(ConfigurationError):
            get_settings()

    def test_bad_log_level(self, clean_env):
        clean_env.setenv("DATABASE_URL", "todos.db")
        clean_env.setenv("LOG_LEVEL", "chatty")
        with pytest.raises(ConfigurationError):
            get_settings()

    def test_create_app_from_environment(self, clean_env, tmp_path):
        clean_env.setenv("DATABASE_URL", f"sqlite:///{tmp_path}/env.db")
        app = create_app()
        assert app.state.settings.database_path == f"{tmp_path}/env.db"
        assert (tmp_path / "env.db").exists()


class TestParseDatabaseUrl:
    def test_sqlite_url(self):
        assert parse_database_url("sqlite:///data/todos.db") == "data/todos.db"

    def test_absolute_sqlite_url(self):
        assert parse_database_url("sqlite:////var/lib/todos.db") == "/var/lib/todos.db"

    def test_bare_path(self):
        assert parse_database_url("todos.db") == "todos.db"

    @pytest.mark.parametrize("url", ["postgresql://user@host/db", "sqlite:///", ""])
    def test_rejected(self, url):
        with pytest.raises(ConfigurationError):
            parse_database_url(url)
