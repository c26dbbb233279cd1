from __future__ import annotations

import logging
from pathlib import Path
import shutil

from servermanager.domain.models import (
    WeatherCatalog,
    WeatherDeleteEvent,
    WeatherDeleteOutcome,
    default_weather,
)
from servermanager.services.delete_history import DeleteHistoryService
from servermanager.services.paths import weather_dir as default_weather_dir
from servermanager.services.weather_ini import WeatherIniError, parse_weather_ini


logger = logging.getLogger(__name__)

WEATHER_INFO_FILE = "weather.ini"
LAUNCHER_SECTION = "LAUNCHER"
NAME_KEY = "NAME"
METADATA_ENCODINGS = ("utf-8-sig", "cp1252", "latin-1")

DELETE_SUCCESS_MESSAGE = "Weather preset successfully deleted!"
DELETE_FAILED_MESSAGE = (
    "Sorry, weather preset could not be deleted. Are you sure it was installed?"
)
LIST_FAILED_MESSAGE = "couldn't get weather list"


class WeatherCatalogError(Exception):
    """Raised when the weather catalog cannot be built."""


class WeatherListingError(WeatherCatalogError, OSError):
    """Raised when the weather directory exists but cannot be enumerated."""


class WeatherMetadataError(WeatherCatalogError):
    """Raised when a preset ships a weather.ini that cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid weather metadata in {path}: {reason}")
        self.path = path


def _decode_metadata(raw: bytes) -> str:
    for encoding in METADATA_ENCODINGS[:-1]:
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            continue
    return raw.decode(METADATA_ENCODINGS[-1])


def read_weather_name(base_dir: Path, key: str) -> str:
    """Return the ``[LAUNCHER] NAME`` of a preset, or ``""`` when it has none.

    A missing or unreadable ``weather.ini`` is normal and yields ``""``, as does
    a file without the exact-case section or key. Files written by Windows
    tools in a legacy code page are decoded as such. A file that exists but is
    not valid section/key-value text raises :class:`WeatherMetadataError`.
    """
    path = Path(base_dir) / key / WEATHER_INFO_FILE
    try:
        raw = path.read_bytes()
    except OSError:
        return ""

    try:
        document = parse_weather_ini(_decode_metadata(raw))
    except WeatherIniError as exc:
        raise WeatherMetadataError(path, str(exc)) from exc

    name = document.get(LAUNCHER_SECTION, NAME_KEY)
    if name is None:
        return ""
    return name.strip()


class WeatherCatalogService:
    def __init__(
        self,
        weather_root: Path | None = None,
        history: DeleteHistoryService | None = None,
    ) -> None:
        if weather_root is None:
            weather_root = default_weather_dir()
        self.weather_root = Path(weather_root).expanduser()
        self.history = history or DeleteHistoryService()

    def _iter_weather_dirs(self) -> list[Path] | None:
        folders: list[Path] = []
        try:
            entries = sorted(self.weather_root.iterdir())
            for entry in entries:
                if not entry.is_dir():
                    logger.debug("Skipping non-directory entry %s", entry)
                    continue
                folders.append(entry)
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise WeatherListingError(
                f"Could not list weather presets in {self.weather_root}: {exc}"
            ) from exc
        return folders

    def resolve_display_name(self, key: str) -> str:
        return read_weather_name(self.weather_root, key)

    def list_weather(self) -> WeatherCatalog:
        weather = default_weather()

        folders = self._iter_weather_dirs()
        if folders is None:
            return weather

        for folder in folders:
            name = self.resolve_display_name(folder.name)
            weather[folder.name] = name or folder.name

        if not weather:
            return default_weather()
        return weather

    def _remove_weather_dir(self, path: Path) -> str | None:
        try:
            if path.is_symlink() or path.is_file():
                path.unlink()
            elif path.exists():
                shutil.rmtree(path)
        except OSError as exc:
            logger.error("could not remove weather files for %s, err: %s", path.name, exc)
            return str(exc)
        logger.info("Removed weather preset %s from %s", path.name, path)
        return None

    def delete_weather(self, key: str) -> WeatherDeleteOutcome:
        weather = self.list_weather()
        path = self.weather_root / key

        if key not in weather:
            event = WeatherDeleteEvent(key=key, result="not_found")
        else:
            error = self._remove_weather_dir(path)
            if error is None:
                del weather[key]
                event = WeatherDeleteEvent(key=key, result="deleted", path=str(path))
            else:
                event = WeatherDeleteEvent(key=key, result="failed", path=str(path), error=error)

        self.history.record(event)
        success = event.result == "deleted"
        return WeatherDeleteOutcome(
            key=key,
            success=success,
            message=DELETE_SUCCESS_MESSAGE if success else DELETE_FAILED_MESSAGE,
            weather=weather,
        )
