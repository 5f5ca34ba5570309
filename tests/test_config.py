import logging

from utils import config
from utils.logger import configure_logging, get_logger


def test_env_file_in_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv(config.AUTH_TOKEN_KEY, "placeholder")
    monkeypatch.delenv(config.AUTH_TOKEN_KEY)
    (tmp_path / config.ENV_FILE_NAME).write_text("THINGS3_AUTH_TOKEN=from-file\n")

    config.load_env_vars()
    assert config.get_auth_token() == "from-file"


def test_environment_wins_over_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv(config.AUTH_TOKEN_KEY, "from-env")
    (tmp_path / config.ENV_FILE_NAME).write_text("THINGS3_AUTH_TOKEN=from-file\n")

    config.load_env_vars()
    assert config.get_auth_token() == "from-env"


def test_empty_token_is_none(monkeypatch):
    monkeypatch.setenv(config.AUTH_TOKEN_KEY, "")
    assert config.get_auth_token() is None


def test_configure_logging_accepts_names():
    configure_logging("debug")
    assert logging.getLogger().level == logging.DEBUG
    configure_logging(logging.WARNING)
    assert logging.getLogger().level == logging.WARNING
    assert get_logger("thingscli.test").name == "thingscli.test"
