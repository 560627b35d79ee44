import pytest
from pydantic import ValidationError

from wathiqa.configs import Settings, get_settings


@pytest.fixture
def clean_env(tmp_path, monkeypatch):
    """Run without a .env file and with a cold settings cache."""
    monkeypatch.chdir(tmp_path)
    for name in ("ENVIRONMENT", "LOG_LEVEL", "ARCHIVE_SESSION_TTL_HOURS", "ARCHIVE_MAX_PAGE_SIZE"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


def test_groups_reread_after_cache_clear(clean_env):
    assert get_settings().archive.session_ttl_hours == 24

    clean_env.setenv("ARCHIVE_SESSION_TTL_HOURS", "6")
    assert get_settings().archive.session_ttl_hours == 24

    get_settings.cache_clear()
    assert get_settings().archive.session_ttl_hours == 6


def test_each_instance_builds_its_own_groups(clean_env):
    clean_env.setenv("ARCHIVE_MAX_PAGE_SIZE", "50")
    first = Settings()
    clean_env.setenv("ARCHIVE_MAX_PAGE_SIZE", "75")
    second = Settings()

    assert first.archive.max_page_size == 50
    assert second.archive.max_page_size == 75
    assert first.archive is not second.archive


def test_log_level_is_case_insensitive(clean_env):
    clean_env.setenv("LOG_LEVEL", "debug")

    assert Settings().log_level == "DEBUG"


@pytest.mark.parametrize("name,value", [("ENVIRONMENT", "prod"), ("LOG_LEVEL", "LOUD")])
def test_unknown_values_are_rejected(clean_env, name, value):
    clean_env.setenv(name, value)

    with pytest.raises(ValidationError):
        Settings()


def test_env_file_is_read(clean_env, tmp_path):
    (tmp_path / ".env").write_text("ARCHIVE_SESSION_TTL_HOURS=3\nENVIRONMENT=test\n", encoding="utf-8")

    settings = Settings()

    assert settings.environment == "test"
    assert settings.archive.session_ttl_hours == 3
