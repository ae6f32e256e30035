import pytest
from pydantic import ValidationError

from elibrary.core.config import Settings

ENV_VARS = ("ELIB_DB", "ELIB_LOG", "ELIB_LIST_LIMIT", "ELIB_CORS_ORIGINS", "ELIB_SQL_ECHO")


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = Settings(_env_file=None)
    assert settings.database_url == "sqlite:///./elibrary.db"
    assert settings.list_limit == 10
    assert settings.sql_echo is False
    assert settings.cors_origins == [
        "http://localhost:5173",
        "https://library-management-client-sigma.vercel.app",
    ]


def test_reads_environment(clean_env):
    clean_env.setenv("ELIB_DB", "sqlite:///./env.db")
    clean_env.setenv("ELIB_LOG", "debug")
    clean_env.setenv("ELIB_LIST_LIMIT", "25")
    clean_env.setenv("ELIB_CORS_ORIGINS", "http://a.test, http://b.test")
    clean_env.setenv("ELIB_SQL_ECHO", "true")
    settings = Settings(_env_file=None)
    assert settings.database_url == "sqlite:///./env.db"
    assert settings.log_level == "DEBUG"
    assert settings.list_limit == 25
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.sql_echo is True


def test_explicit_values_win_over_environment(clean_env):
    clean_env.setenv("ELIB_DB", "sqlite:///./env.db")
    settings = Settings(_env_file=None, database_url="sqlite:///./given.db")
    assert settings.database_url == "sqlite:///./given.db"


@pytest.mark.parametrize("value", ["0", "many"])
def test_bad_list_limit_is_rejected(clean_env, value):
    clean_env.setenv("ELIB_LIST_LIMIT", value)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
