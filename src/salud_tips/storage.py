"""Persistencia SQLite para configuracion e historial de registros."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from salud_tips.model import LogEntry, to_flag, to_number

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS app_config (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS log_entries (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    created_at TEXT NOT NULL,
    bmi REAL,
    sleep_hours REAL,
    heart_rate REAL,
    cycle_tracking INTEGER NOT NULL DEFAULT 0,
    recorded_at TEXT,
    cycle_length REAL
);
"""

# Columns older databases may lack.
_LATE_COLUMNS: dict[str, str] = {
    "recorded_at": "TEXT",
    "cycle_length": "REAL",
}


@dataclass(frozen=True)
class AppConfig:
    """Configuracion persistida de la app."""

    export_dir: str
    import_path: str


class SQLiteStore:
    """Repositorio SQLite para la app."""

    def __init__(self, db_path: Path) -> None:
        """Create store and ensure schema exists."""
        self._db_path = db_path
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        with self._connect() as conn:
            conn.executescript(SCHEMA_SQL)
            self._migrate(conn)
            conn.commit()

    def _migrate(self, conn: sqlite3.Connection) -> None:
        """Apply lightweight schema migrations."""
        cols = {row["name"] for row in conn.execute("PRAGMA table_info(log_entries)")}
        for name, sql_type in _LATE_COLUMNS.items():
            if name not in cols:
                logger.info("Adding column log_entries.%s", name)
                conn.execute(f"ALTER TABLE log_entries ADD COLUMN {name} {sql_type}")

    def load_config(self) -> AppConfig:
        """Devuelve configuracion guardada o defaults."""
        defaults = {"export_dir": "", "import_path": ""}
        with self._connect() as conn:
            rows = conn.execute("SELECT key, value FROM app_config").fetchall()
        values = {row["key"]: row["value"] for row in rows}
        merged = {**defaults, **values}
        return AppConfig(
            export_dir=merged["export_dir"],
            import_path=merged["import_path"],
        )

    def save_config(self, config: AppConfig) -> None:
        """Guarda la configuracion en tabla key/value."""
        payload = {
            "export_dir": config.export_dir,
            "import_path": config.import_path,
        }
        with self._connect() as conn:
            conn.executemany(
                """
                INSERT INTO app_config(key, value) VALUES(?, ?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value
                """,
                payload.items(),
            )
            conn.commit()

    def append_entry(self, entry: LogEntry) -> int:
        """Guarda un registro al final del historial. Devuelve su id."""
        with self._connect() as conn:
            cur = conn.execute(_INSERT_SQL, _entry_row(entry))
            conn.commit()
        entry_id = int(cur.lastrowid)
        logger.debug("Stored log entry %d", entry_id)
        return entry_id

    def append_entries(self, entries: Iterable[LogEntry]) -> int:
        """Guarda varios registros en orden. Devuelve cuantos se guardaron."""
        rows = [_entry_row(entry) for entry in entries]
        if not rows:
            return 0
        with self._connect() as conn:
            conn.executemany(_INSERT_SQL, rows)
            conn.commit()
        logger.info("Stored %d log entries", len(rows))
        return len(rows)

    def load_log(self) -> list[LogEntry]:
        """Carga el historial completo en orden de insercion."""
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT
                    recorded_at, bmi, sleep_hours, heart_rate,
                    cycle_tracking, cycle_length
                FROM log_entries
                ORDER BY id
                """
            ).fetchall()
        return [_row_to_entry(row) for row in rows]

    def clear_log(self) -> int:
        """Borra el historial. Devuelve la cantidad de filas borradas."""
        with self._connect() as conn:
            cur = conn.execute("DELETE FROM log_entries")
            conn.commit()
        return int(cur.rowcount)


_INSERT_SQL = """
INSERT INTO log_entries(
    created_at, recorded_at, bmi, sleep_hours, heart_rate,
    cycle_tracking, cycle_length
) VALUES (?, ?, ?, ?, ?, ?, ?)
"""


def _entry_row(entry: LogEntry) -> tuple[object, ...]:
    recorded_at = entry.recorded_at.isoformat() if entry.recorded_at else None
    return (
        datetime.now().isoformat(timespec="seconds"),
        recorded_at,
        to_number(entry.bmi),
        to_number(entry.sleep_hours),
        to_number(entry.heart_rate),
        int(to_flag(entry.cycle_tracking)),
        to_number(entry.cycle_length),
    )


def _row_to_entry(row: sqlite3.Row) -> LogEntry:
    raw_ts = row["recorded_at"]
    return LogEntry(
        recorded_at=datetime.fromisoformat(raw_ts) if raw_ts else None,
        bmi=row["bmi"],
        sleep_hours=row["sleep_hours"],
        heart_rate=row["heart_rate"],
        cycle_tracking=bool(row["cycle_tracking"]),
        cycle_length=row["cycle_length"],
    )
