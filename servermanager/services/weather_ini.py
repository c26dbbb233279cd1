from __future__ import annotations

from dataclasses import dataclass, field
import re


SECTION_PATTERN = re.compile(r"^\[([^\]]+)\]\s*(?:[#;].*)?$")
KEY_VALUE_PATTERN = re.compile(r"^([^=:\s\[][^=:]*?)\s*[=:]\s*(.*)$")
INLINE_COMMENT_PATTERN = re.compile(r"[#;]")
PREAMBLE_SECTION = ""


class WeatherIniError(ValueError):
    """Raised when a weather.ini file is not valid section/key-value text."""

    def __init__(self, line_number: int, line: str) -> None:
        super().__init__(f"line {line_number}: unexpected content {line.strip()!r}")
        self.line_number = line_number
        self.line = line


@dataclass(slots=True)
class WeatherIniSection:
    name: str
    values: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class WeatherIniDocument:
    preamble: WeatherIniSection = field(
        default_factory=lambda: WeatherIniSection(name=PREAMBLE_SECTION)
    )
    sections: list[WeatherIniSection] = field(default_factory=list)

    def section_names(self) -> list[str]:
        return [section.name for section in self.sections]

    def find_section(self, name: str) -> WeatherIniSection | None:
        if not name:
            return self.preamble
        for section in self.sections:
            if section.name == name:
                return section
        return None

    def get(self, section: str, key: str) -> str | None:
        found = self.find_section(section)
        if found is None:
            return None
        return found.values.get(key)


def _clean_value(raw: str) -> str:
    value = raw.strip()
    if value[:1] in {'"', "'"}:
        closing = value.find(value[0], 1)
        if closing > 0:
            return value[1:closing]
    return INLINE_COMMENT_PATTERN.split(value, maxsplit=1)[0].rstrip()


def parse_weather_ini(text: str) -> WeatherIniDocument:
    doc = WeatherIniDocument()
    current = doc.preamble

    for line_number, raw_line in enumerate((text or "").splitlines(), start=1):
        stripped = raw_line.strip()
        if line_number == 1:
            stripped = stripped.lstrip("\ufeff")

        if not stripped:
            continue

        if stripped.startswith(("#", ";")):
            continue

        if stripped.startswith("["):
            section_match = SECTION_PATTERN.match(stripped)
            if section_match is None:
                raise WeatherIniError(line_number, raw_line)
            name = section_match.group(1).strip()
            if not name:
                raise WeatherIniError(line_number, raw_line)
            existing = doc.find_section(name)
            if existing is None:
                existing = WeatherIniSection(name=name)
                doc.sections.append(existing)
            current = existing
            continue

        key_value_match = KEY_VALUE_PATTERN.match(stripped)
        if key_value_match is None:
            raise WeatherIniError(line_number, raw_line)
        key = key_value_match.group(1).strip()
        current.values[key] = _clean_value(key_value_match.group(2))

    return doc
