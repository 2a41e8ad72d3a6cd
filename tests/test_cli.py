"""Tests for CLI entrypoints."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest

from salud_tips import cli
from salud_tips.storage import SQLiteStore


def _run(db: Path, *args: str) -> int:
    return cli.main(["--db", str(db), *args])


def test_parse_args_add_values() -> None:
    ns = cli.parse_args(
        ["--db", "/tmp/x.sqlite3", "add", "--bmi", "24.5", "--cycle-tracking"]
    )
    assert ns.db == "/tmp/x.sqlite3"
    assert ns.command == "add"
    assert ns.bmi == 24.5
    assert ns.cycle_tracking is True
    assert ns.sleep is None


def test_parse_args_requires_command() -> None:
    with pytest.raises(SystemExit):
        cli.parse_args([])


def test_add_then_tips_text(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    db = tmp_path / "db.sqlite3"
    assert _run(db, "add", "--bmi", "24", "--date", "2026-01-31T08:00") == 0
    assert _run(db, "add", "--sleep", "7", "--cycle-length", "40") == 0

    log = SQLiteStore(db).load_log()
    assert len(log) == 2
    assert log[0].recorded_at is not None
    assert log[0].recorded_at.tzinfo is not None
    # cycle length only counts when tracking is on
    assert log[1].cycle_length is None

    capsys.readouterr()
    assert _run(db, "tips") == 0
    out = capsys.readouterr().out
    assert "Sleep Master Achievement!" in out
    assert "General Power-Up Guide" in out


def test_tips_html_to_file(tmp_path: Path) -> None:
    db = tmp_path / "db.sqlite3"
    out = tmp_path / "site" / "tips.html"
    assert _run(db, "tips", "--format", "html", "--out", str(out)) == 0
    html = out.read_text(encoding="utf-8")
    assert "No Personal Tips Yet!" in html


def test_import_directory_uses_newest(tmp_path: Path) -> None:
    db = tmp_path / "db.sqlite3"
    exports = tmp_path / "exports"
    exports.mkdir()
    data = [{"bmi": "31"}, {"sleepHours": "8"}, {"heartRate": 120}]
    (exports / "quest.json").write_text(json.dumps(data), encoding="utf-8")

    assert _run(db, "import", str(exports)) == 0
    assert len(SQLiteStore(db).load_log()) == 3


def test_import_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        _run(tmp_path / "db.sqlite3", "import", str(tmp_path / "missing.json"))


def test_export_writes_workbook(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    captured: dict[str, Any] = {}

    def _write_tips_xlsx(
        tips: Any, catalog: Any, log: Any, out_path: Path, _: Any
    ) -> None:
        captured["tips"] = tips
        captured["log"] = log
        captured["out_path"] = out_path

    class _FixedDatetime(datetime):
        @classmethod
        def now(cls, tz: Any | None = None) -> _FixedDatetime:
            return cls(2025, 12, 31, 23, 59, 1, tzinfo=tz)

    monkeypatch.setattr(cli, "write_tips_xlsx", _write_tips_xlsx)
    monkeypatch.setattr(cli, "datetime", _FixedDatetime)
    monkeypatch.chdir(tmp_path)

    db = tmp_path / "db.sqlite3"
    _run(db, "add", "--heart-rate", "59.6")
    assert _run(db, "export") == 0

    out_path: Path = captured["out_path"]
    assert out_path.name == "consejos_salud_2025-12-31_23-59-01.xlsx"
    assert out_path.parent == tmp_path / "salidas"
    assert len(captured["log"]) == 1
    assert captured["tips"][0].title == "Heart Rate — Optimal Zone!"


def test_history_and_clear(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    db = tmp_path / "db.sqlite3"
    _run(db, "history")
    assert "No entries yet." in capsys.readouterr().out

    _run(db, "add", "--bmi", "22.5", "--sleep", "6.5")
    capsys.readouterr()
    assert _run(db, "history") == 0
    out = capsys.readouterr().out
    assert "22.5" in out
    assert "Entries: 1" in out

    assert _run(db, "clear") == 0
    assert "Deleted entries: 1" in capsys.readouterr().out
    assert SQLiteStore(db).load_log() == []


def test_config_saves_export_dir_used_by_export(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    captured: dict[str, Path] = {}

    def _write_tips_xlsx(
        tips: Any, catalog: Any, log: Any, out_path: Path, _: Any
    ) -> None:
        captured["out_path"] = out_path

    monkeypatch.setattr(cli, "write_tips_xlsx", _write_tips_xlsx)
    monkeypatch.chdir(tmp_path)

    db = tmp_path / "db.sqlite3"
    out_dir = tmp_path / "reportes"
    assert _run(db, "config", "--export-dir", str(out_dir)) == 0
    assert SQLiteStore(db).load_config().export_dir == str(out_dir)
    assert SQLiteStore(db).load_config().import_path == ""

    _run(db, "add", "--bmi", "22")
    assert _run(db, "export") == 0
    assert captured["out_path"].parent == out_dir


def test_config_without_arguments_shows_current_values(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    db = tmp_path / "db.sqlite3"
    assert _run(db, "config") == 0
    out = capsys.readouterr().out
    assert "Export dir: (default)" in out
    assert "Import path: (none)" in out

    _run(db, "config", "--import-path", "/data/log.json")
    capsys.readouterr()
    _run(db, "config")
    out = capsys.readouterr().out
    assert "Import path: /data/log.json" in out
    assert "Export dir: (default)" in out
