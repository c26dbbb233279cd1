from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from servermanager.domain.models import WeatherDeleteEvent, WeatherKey
from servermanager.services.paths import delete_history_path


class DeleteHistoryService:
    """Keeps one JSON line per weather preset delete request, oldest first."""

    def __init__(self, history_path: Path | None = None) -> None:
        self.history_path = (history_path or delete_history_path()).expanduser()

    def record(self, event: WeatherDeleteEvent) -> None:
        try:
            self.history_path.parent.mkdir(parents=True, exist_ok=True)
            with self.history_path.open("a", encoding="utf-8") as handle:
                handle.write(event.model_dump_json() + "\n")
        except OSError:
            # History writes never change a delete outcome.
            return

    def list_events(self, key: WeatherKey | None = None) -> list[WeatherDeleteEvent]:
        try:
            lines = self.history_path.read_text(encoding="utf-8").splitlines()
        except OSError:
            return []

        events: list[WeatherDeleteEvent] = []
        for line in lines:
            if not line.strip():
                continue
            try:
                event = WeatherDeleteEvent.model_validate_json(line)
            except ValidationError:
                continue
            if key is not None and event.key != key:
                continue
            events.append(event)
        return events
