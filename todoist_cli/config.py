"""Configuration file handling.

The access token lives in ``~/.todoist/config`` as ``key=value`` lines. The
file is written with mode 0600 in a single atomic replace.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_DIR = ".todoist"
CONFIG_FILE = "config"
TOKEN_ENV_VAR = "TODOIST_ACCESS_TOKEN"
TOKEN_URL = "https://todoist.com/app/settings/integrations/developer"


@dataclass
class Config:
    access_token: str = ""


def config_dir() -> Path:
    return Path.home() / CONFIG_DIR


def config_path() -> Path:
    return config_dir() / CONFIG_FILE


def exists() -> bool:
    return config_path().is_file()


def _parse_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        data[key.strip()] = value.strip()
    return data


def load() -> Config:
    """Read the config file. A missing file yields an empty ``Config``.

    Raises:
        OSError: The file exists but cannot be read.
    """
    path = config_path()
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Config()
    values = _parse_lines(text)
    return Config(access_token=values.get("access_token", ""))


def save(cfg: Config) -> Path:
    """Write ``cfg`` to the config file and return its path."""
    directory = config_dir()
    directory.mkdir(mode=0o700, parents=True, exist_ok=True)
    path = config_path()

    content = (
        "# Todoist CLI Configuration\n"
        "# Created by: todoist configure\n"
        "\n"
        "# Your Todoist API Token\n"
        f"# Get from: {TOKEN_URL}\n"
        f"access_token={cfg.access_token}\n"
    )

    # mkstemp creates the file with mode 0600.
    fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=".config-")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.debug("Saved configuration to %s", path)
    return path


def permissions() -> int:
    """Permission bits of the config file, e.g. ``0o600``."""
    return stat.S_IMODE(config_path().stat().st_mode)


def resolve_token() -> str:
    """Access token from the config file, else the environment, else ``""``."""
    try:
        cfg = load()
    except OSError as exc:
        logger.warning("Cannot read %s: %s", config_path(), exc)
        cfg = Config()
    if cfg.access_token:
        return cfg.access_token
    return os.environ.get(TOKEN_ENV_VAR, "")


def mask_token(token: str) -> str:
    if len(token) <= 8:
        return "****"
    return f"{token[:4]}...{token[-4:]}"
