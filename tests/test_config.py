"""Unit tests for todoist_cli.config."""

from __future__ import annotations

import stat

import pytest

from todoist_cli import config


@pytest.fixture(autouse=True)
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv(config.TOKEN_ENV_VAR, raising=False)
    return tmp_path


def test_config_path_under_home(home):
    assert config.config_path() == home / ".todoist" / "config"


def test_load_missing_file_returns_empty_config():
    assert not config.exists()
    assert config.load() == config.Config()


def test_save_then_load(home):
    path = config.save(config.Config(access_token="abc123"))

    assert path == home / ".todoist" / "config"
    assert config.exists()
    assert config.load().access_token == "abc123"


def test_save_sets_private_permissions(home):
    config.save(config.Config(access_token="abc123"))

    assert config.permissions() == 0o600
    assert stat.S_IMODE((home / ".todoist").stat().st_mode) == 0o700


def test_save_overwrites_and_leaves_no_temp_files(home):
    config.save(config.Config(access_token="first"))
    config.save(config.Config(access_token="second"))

    assert config.load().access_token == "second"
    assert [p.name for p in (home / ".todoist").iterdir()] == ["config"]


def test_load_ignores_comments_blank_and_malformed_lines(home):
    path = home / ".todoist" / "config"
    path.parent.mkdir()
    path.write_text(
        "# comment\n"
        "\n"
        "garbage line\n"
        "other_key = 1\n"
        "  access_token = tok=with=equals  \n",
        encoding="utf-8",
    )

    assert config.load().access_token == "tok=with=equals"


def test_resolve_token_prefers_config_file(monkeypatch):
    config.save(config.Config(access_token="from-file"))
    monkeypatch.setenv(config.TOKEN_ENV_VAR, "from-env")

    assert config.resolve_token() == "from-file"


def test_resolve_token_falls_back_to_env(monkeypatch):
    monkeypatch.setenv(config.TOKEN_ENV_VAR, "from-env")

    assert config.resolve_token() == "from-env"


def test_resolve_token_empty_when_unset():
    assert config.resolve_token() == ""


@pytest.mark.parametrize(
    "token, masked",
    [
        ("0123456789abcdef", "0123...cdef"),
        ("123456789", "1234...6789"),
        ("12345678", "****"),
        ("", "****"),
    ],
)
def test_mask_token(token, masked):
    assert config.mask_token(token) == masked
