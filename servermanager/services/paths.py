from __future__ import annotations

import os
from pathlib import Path


INSTALL_PATH_ENV = "SERVERMANAGER_INSTALL_PATH"
DEFAULT_INSTALL_DIRNAME = "assetto"


def default_install_path() -> Path:
    return Path.cwd() / DEFAULT_INSTALL_DIRNAME


def _normalize_path(raw: object) -> Path | None:
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    return Path(text).expanduser()


def resolve_install_path(cli: str | None = None, env: str | None = None) -> Path:
    for candidate in (cli, env):
        resolved = _normalize_path(candidate)
        if resolved is not None:
            return resolved
    return default_install_path()


def install_path() -> Path:
    return resolve_install_path(env=os.getenv(INSTALL_PATH_ENV))


def content_dir(base: Path | None = None) -> Path:
    return (base or install_path()) / "content"


def weather_dir(base: Path | None = None) -> Path:
    return content_dir(base) / "weather"


def user_data_dir() -> Path:
    appdata = os.getenv("APPDATA")
    if appdata:
        return Path(appdata) / "ServerManager"
    return Path.home() / ".servermanager"


def delete_history_path() -> Path:
    return user_data_dir() / "weather_delete_history.jsonl"
