"""Clases base para fuentes de registros."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from salud_tips.model import LogEntry


@dataclass(frozen=True)
class SourcePaths:
    """Container for source directories."""

    root: Path


class LogSource(ABC):
    """Abstract log entry source."""

    def __init__(self, paths: SourcePaths) -> None:
        """Create a log source.

        Args:
            paths: Source paths configuration.
        """
        self._paths = paths

    @abstractmethod
    def validate(self) -> None:
        """Validate that required folders/files exist.

        Raises:
            FileNotFoundError: If required files are missing.
        """

    @abstractmethod
    def load_entries(self, path: Path) -> list[LogEntry]:
        """Parse one export file into entries, keeping file order."""
