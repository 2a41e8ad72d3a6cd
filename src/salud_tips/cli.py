"""CLI para registrar datos de salud y generar consejos personalizados."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from dateutil import parser as date_parser
from dateutil import tz

from salud_tips.catalog import GENERAL_ADVICE
from salud_tips.excel_writer import ExcelLayout, write_tips_xlsx
from salud_tips.history import display_frame, history_summary, log_to_frame
from salud_tips.model import LogEntry
from salud_tips.render import HtmlRenderer, Renderer, TextRenderer
from salud_tips.sources.quest_log import QuestLogPaths, QuestLogSource
from salud_tips.storage import AppConfig, SQLiteStore
from salud_tips.tips import derive_tips

logger = logging.getLogger(__name__)

_LOCAL_TZ = tz.gettz("America/Argentina/Buenos_Aires")

DEFAULT_DB = Path.home() / ".salud_tips" / "salud_tips.sqlite3"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argparse namespace.
    """
    parser = argparse.ArgumentParser(
        description="Consejos de salud personalizados a partir de tu registro."
    )
    parser.add_argument(
        "--db",
        default=str(DEFAULT_DB),
        help="Base SQLite (default: ~/.salud_tips/salud_tips.sqlite3).",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Mostrar mensajes de depuración."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add", help="Agregar un registro al historial.")
    add.add_argument("--bmi", type=float, default=None)
    add.add_argument("--sleep", type=float, default=None, help="Horas de sueño.")
    add.add_argument("--heart-rate", type=float, default=None, help="Pulso (lpm).")
    add.add_argument("--cycle-tracking", action="store_true")
    add.add_argument("--cycle-length", type=int, default=None, help="Días.")
    add.add_argument("--date", default=None, help="Fecha ISO (default: ahora).")

    imp = sub.add_parser("import", help="Importar un export JSON del registro.")
    imp.add_argument("path", help="Archivo JSON o carpeta (se usa el más nuevo).")

    tips = sub.add_parser("tips", help="Mostrar la página de consejos.")
    tips.add_argument("--format", choices=("text", "html"), default="text")
    tips.add_argument("--out", default=None, help="Escribir a archivo.")

    export = sub.add_parser("export", help="Exportar consejos e historial a Excel.")
    export.add_argument("--out", default=None, help="Archivo .xlsx de salida.")

    config = sub.add_parser("config", help="Ver o guardar la configuracion.")
    config.add_argument("--export-dir", default=None, help="Carpeta de exportacion.")
    config.add_argument("--import-path", default=None, help="Ruta JSON por defecto.")

    sub.add_parser("history", help="Mostrar el historial.")
    sub.add_parser("clear", help="Borrar el historial.")
    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    """Configure a root stream handler on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    """Run the tips CLI.

    Returns:
        Exit code (0 on success).
    """
    ns = parse_args(argv)
    setup_logging(ns.verbose)
    store = SQLiteStore(Path(ns.db).expanduser().resolve())

    if ns.command == "add":
        return _cmd_add(store, ns)
    if ns.command == "import":
        return _cmd_import(store, Path(ns.path).expanduser())
    if ns.command == "tips":
        return _cmd_tips(store, ns.format, ns.out)
    if ns.command == "export":
        return _cmd_export(store, ns.out)
    if ns.command == "history":
        return _cmd_history(store)
    if ns.command == "config":
        return _cmd_config(store, ns.export_dir, ns.import_path)
    if ns.command == "clear":
        print(f"OK: Deleted entries: {store.clear_log()}")
        return 0
    raise ValueError(f"Unknown command: {ns.command}")


def _cmd_add(store: SQLiteStore, ns: argparse.Namespace) -> int:
    recorded_at = (
        date_parser.isoparse(ns.date) if ns.date else datetime.now(tz=_LOCAL_TZ)
    )
    if recorded_at.tzinfo is None:
        recorded_at = recorded_at.replace(tzinfo=_LOCAL_TZ)
    entry = LogEntry(
        recorded_at=recorded_at,
        bmi=ns.bmi,
        sleep_hours=ns.sleep,
        heart_rate=ns.heart_rate,
        cycle_tracking=ns.cycle_tracking,
        cycle_length=ns.cycle_length if ns.cycle_tracking else None,
    )
    entry_id = store.append_entry(entry)
    print(f"OK: Entry stored: {entry_id}")
    return 0


def _cmd_import(store: SQLiteStore, path: Path) -> int:
    if path.is_dir():
        source = QuestLogSource(QuestLogPaths(root=path))
        source.validate()
        json_file = source.newest_json()
    else:
        source = QuestLogSource(QuestLogPaths(root=path.parent))
        source.validate()
        if not path.exists():
            raise FileNotFoundError(str(path))
        json_file = path
    entries = source.load_entries(json_file)
    count = store.append_entries(entries)
    print(f"OK: Quest log file: {json_file}")
    print(f"OK: Entries imported: {count}")
    return 0


def _cmd_tips(store: SQLiteStore, fmt: str, out: str | None) -> int:
    renderer: Renderer = HtmlRenderer() if fmt == "html" else TextRenderer()
    tips = derive_tips(store.load_log())
    page = renderer.render(tips, GENERAL_ADVICE)
    if out is None:
        print(page)
        return 0
    out_path = Path(out).expanduser()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(page, encoding="utf-8")
    print(f"OK: Output: {out_path}")
    return 0


def _cmd_export(store: SQLiteStore, out: str | None) -> int:
    log = store.load_log()
    tips = derive_tips(log)
    if out is None:
        ts = datetime.now(tz=_LOCAL_TZ).strftime("%Y-%m-%d_%H-%M-%S")
        export_dir = store.load_config().export_dir
        out_dir = (
            Path(export_dir).expanduser() if export_dir else Path.cwd() / "salidas"
        )
        out_path = out_dir / f"consejos_salud_{ts}.xlsx"
    else:
        out_path = Path(out).expanduser()
    write_tips_xlsx(tips, GENERAL_ADVICE, log, out_path, ExcelLayout())
    print(f"OK: Tips: {len(tips)}")
    print(f"OK: Output: {out_path}")
    return 0


def _cmd_history(store: SQLiteStore) -> int:
    df = log_to_frame(store.load_log())
    if df.empty:
        print("No entries yet.")
        return 0
    print(display_frame(df).to_string(index=False, max_colwidth=28))
    summary = history_summary(df)
    print(
        "Entries: {entries} | Avg sleep: {avg_sleep_hours} | "
        "Avg heart rate: {avg_heart_rate} | Latest BMI: {latest_bmi}".format(
            **summary
        )
    )
    return 0


def _cmd_config(
    store: SQLiteStore, export_dir: str | None, import_path: str | None
) -> int:
    config = store.load_config()
    if export_dir is not None or import_path is not None:
        config = AppConfig(
            export_dir=config.export_dir if export_dir is None else export_dir,
            import_path=config.import_path if import_path is None else import_path,
        )
        store.save_config(config)
        logger.info("Configuration saved")
    print(f"OK: Export dir: {config.export_dir or '(default)'}")
    print(f"OK: Import path: {config.import_path or '(none)'}")
    return 0
