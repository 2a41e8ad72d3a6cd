"""Lectura de exportaciones JSON del registro de salud (healthQuestLog)."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from dateutil import parser, tz

from salud_tips.model import LogEntry
from salud_tips.sources.base import LogSource, SourcePaths

logger = logging.getLogger(__name__)

_LOCAL_TZ = tz.gettz("America/Argentina/Buenos_Aires")


@dataclass(frozen=True)
class QuestLogPaths(SourcePaths):
    """Paths for quest log JSON exports."""

    # root: folder containing *.json exports


class QuestLogSource(LogSource):
    """Quest log JSON reading source."""

    def validate(self) -> None:
        """Validate that the export directory exists."""
        if not self._paths.root.exists():
            raise FileNotFoundError(str(self._paths.root))

    def newest_json(self) -> Path:
        """Return newest *.json by mtime."""
        files = sorted(
            self._paths.root.glob("*.json"),
            key=lambda p: p.stat().st_mtime,
            reverse=True,
        )
        if not files:
            raise FileNotFoundError(f"No *.json in {self._paths.root}")
        return files[0]

    def load_entries(self, path: Path) -> list[LogEntry]:
        """Parse a quest log JSON export into entries.

        Args:
            path: Path to JSON file.

        Returns:
            Entries in file order (the last one is the latest).

        Raises:
            ValueError: If JSON shape is invalid.
        """
        text = path.read_text(encoding="utf-8")
        raw = _extract_json_list(text)
        if not isinstance(raw, list):
            raise ValueError("Quest log JSON must be a list")

        out: list[LogEntry] = []
        for item in raw:
            entry = _item_to_entry(item)
            if entry is not None:
                out.append(entry)
        skipped = len(raw) - len(out)
        if skipped:
            logger.warning("Skipped %d non-object items in %s", skipped, path)
        return out


def _item_to_entry(item: Any) -> LogEntry | None:
    """Convierte un ítem dict en LogEntry; None si no es un objeto."""
    if not isinstance(item, dict):
        return None
    return LogEntry(
        recorded_at=_parse_date(item.get("date") or item.get("timestamp")),
        bmi=_blank_to_none(item.get("bmi")),
        sleep_hours=_blank_to_none(item.get("sleepHours")),
        heart_rate=_blank_to_none(item.get("heartRate")),
        cycle_tracking=item.get("cycleTracking", False),
        cycle_length=_blank_to_none(item.get("cycleLength")),
    )


def _blank_to_none(value: Any) -> Any:
    """Vacío o marcador "--" -> None; el resto se deja crudo."""
    if isinstance(value, str) and value.strip() in ("", "--"):
        return None
    return value


def _extract_json_list(text: str) -> Any:
    """Extract JSON array from text, tolerating leading non-JSON (e.g. log lines)."""
    start = text.find("[")
    if start >= 0:
        return json.loads(text[start:])
    return json.loads(text)


def _parse_date(raw: Any) -> datetime | None:
    """Parses ISO dates or epoch milliseconds; None if unusable."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int | float):
        try:
            return datetime.fromtimestamp(raw / 1000, tz=_LOCAL_TZ)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        dt = parser.isoparse(raw.strip())
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=_LOCAL_TZ)
    return dt
