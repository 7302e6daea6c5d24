import pytest

from notepush.config import ConfigurationError, Settings, load_settings

REQUIRED_ENV = ("LINE_CHANNEL_SECRET", "GITHUB_TOKEN")
OPTIONAL_ENV = (
    "GITHUB_OWNER",
    "GITHUB_REPO",
    "GITHUB_BRANCH",
    "NOTE_FILE_PATH_TEMPLATE",
    "NOTE_TIMEZONE",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in REQUIRED_ENV + OPTIONAL_ENV:
        monkeypatch.delenv(name, raising=False)


def test_defaults_from_environment(monkeypatch):
    monkeypatch.setenv("LINE_CHANNEL_SECRET", "s")
    monkeypatch.setenv("GITHUB_TOKEN", "t")

    settings = load_settings(_env_file=None)

    assert settings.github_owner == "KijimaMotofumi"
    assert settings.github_repo == "note"
    assert settings.github_branch == "main"
    assert settings.note_file_path_template == "daily/{date}.md"
    assert settings.note_timezone == "Asia/Tokyo"
    assert settings.append_max_attempts == 3
    assert settings.append_backoff_seconds == 0.15


def test_missing_required_values_fail_fast():
    with pytest.raises(ConfigurationError) as excinfo:
        load_settings(_env_file=None)

    message = str(excinfo.value)
    assert message.startswith("Missing env:")
    assert "LINE_CHANNEL_SECRET" in message
    assert "GITHUB_TOKEN" in message


def test_blank_secret_counts_as_missing(monkeypatch):
    monkeypatch.setenv("LINE_CHANNEL_SECRET", "   ")
    monkeypatch.setenv("GITHUB_TOKEN", "t")

    with pytest.raises(ConfigurationError, match="Missing env: LINE_CHANNEL_SECRET"):
        load_settings(_env_file=None)


def test_blank_optional_values_use_defaults(monkeypatch):
    monkeypatch.setenv("LINE_CHANNEL_SECRET", "s")
    monkeypatch.setenv("GITHUB_TOKEN", "t")
    monkeypatch.setenv("GITHUB_REPO", "")
    monkeypatch.setenv("NOTE_FILE_PATH_TEMPLATE", " ")

    settings = load_settings(_env_file=None)

    assert settings.github_repo == "note"
    assert settings.note_file_path_template == "daily/{date}.md"


def test_unknown_timezone_rejected(monkeypatch):
    monkeypatch.setenv("LINE_CHANNEL_SECRET", "s")
    monkeypatch.setenv("GITHUB_TOKEN", "t")
    monkeypatch.setenv("NOTE_TIMEZONE", "Mars/Olympus_Mons")

    with pytest.raises(ConfigurationError, match="NOTE_TIMEZONE"):
        load_settings(_env_file=None)


def test_log_level_normalized():
    settings = Settings(LINE_CHANNEL_SECRET="s", GITHUB_TOKEN="t", LOG_LEVEL="debug", _env_file=None)

    assert settings.log_level == "DEBUG"
