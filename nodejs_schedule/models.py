"""Data models for the Node.js release schedule."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional


@dataclass
class ScheduleEntry:
    """Schedule metadata of one Node.js release line.

    Attributes:
        version: Significant version number without a leading "v" (e.g. "4", "0.12")
        start: Date the release line is expected to be first released
        end: Date the release line is expected to reach end of life
        lts: Date the release line is expected to become LTS, if applicable
        maintenance: Date the release line is expected to reach maintenance phase, if applicable
        codename: LTS codename of the release line, if applicable
    """

    version: str
    start: date
    end: date
    lts: Optional[date] = None
    maintenance: Optional[date] = None
    codename: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        """Serialize to a JSON-ready dict with ISO dates, omitting unset fields."""
        data = {
            "version": self.version,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
        }
        if self.lts is not None:
            data["lts"] = self.lts.isoformat()
        if self.maintenance is not None:
            data["maintenance"] = self.maintenance.isoformat()
        if self.codename is not None:
            data["codename"] = self.codename
        return data


def normalize_version_key(key: str) -> str:
    """Strip the leading "v" the schedule document uses on its keys ("v4" -> "4")."""
    return key.removeprefix("v")


def parse_schedule_date(value: str) -> date:
    """
    Convert a schedule date string to a calendar date.

    The document uses plain ISO dates ("2015-09-08"). A full ISO timestamp
    ("2018-04-30T00:00:00Z") is accepted too and only its date is kept. Any
    other trailing text makes the value invalid.

    Raises:
        ValueError: If the string is not an ISO date or timestamp
        TypeError: If the value is not a string
    """
    if "T" in value:
        return datetime.fromisoformat(value).date()
    return date.fromisoformat(value)


def parse_schedule_entry(key: str, record: Mapping[str, Any]) -> ScheduleEntry:
    """
    Parse one entry of the raw schedule document.

    Args:
        key: Raw version key from the document (e.g. "v4", "v0.12")
        record: Object with required "start"/"end" and optional "lts",
            "maintenance" and "codename" fields

    Returns:
        Parsed ScheduleEntry

    Raises:
        KeyError: If "start" or "end" is missing
        TypeError: If the record is not an object
        ValueError: If a date is malformed
    """
    if not isinstance(record, Mapping):
        raise TypeError(f"Schedule record for {key!r} must be an object, got {type(record).__name__}")

    lts = parse_schedule_date(record["lts"]) if record.get("lts") else None
    maintenance = parse_schedule_date(record["maintenance"]) if record.get("maintenance") else None

    return ScheduleEntry(
        version=normalize_version_key(key),
        start=parse_schedule_date(record["start"]),
        end=parse_schedule_date(record["end"]),
        lts=lts,
        maintenance=maintenance,
        codename=record.get("codename") or None,
    )
