"""Generación de Excel formateado con consejos e historial."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from salud_tips.history import log_to_frame
from salud_tips.model import AdviceItem, LogEntry, Tip

logger = logging.getLogger(__name__)

_TIP_COLUMNS: list[str] = ["Tipo", "Icono", "Título", "Detalle"]
_ADVICE_COLUMNS: list[str] = ["Icono", "Título", "Detalle"]

_HISTORY_HEADER_MAP: dict[str, str] = {
    "entry": "N°",
    "recorded_at": "Fecha / Hora",
    "bmi": "IMC",
    "sleep_hours": "Sueño (h)",
    "heart_rate": "Pulso (lpm)",
    "cycle_tracking": "Ciclo\nregistrado",
    "cycle_length": "Duración\nciclo (días)",
}

_SEVERITY_FILLS: dict[str, str] = {
    "good": "C6EFCE",
    "warning": "FFEB9C",
    "alert": "FFC7CE",
    "info": "DDEBF7",
}


@dataclass(frozen=True)
class ExcelLayout:
    """Layout/formatting configuration for the tips workbook."""

    tips_sheet: str = "Consejos personales"
    general_sheet: str = "Consejos generales"
    history_sheet: str = "Historial"
    empty_message: str = "Sin registros todavía."


def tips_to_frame(tips: Sequence[Tip]) -> pd.DataFrame:
    """One row per tip, keeping engine order."""
    rows = [[tip.severity.value, tip.icon, tip.title, tip.body] for tip in tips]
    return pd.DataFrame(rows, columns=_TIP_COLUMNS)


def advice_to_frame(catalog: Sequence[AdviceItem]) -> pd.DataFrame:
    """One row per general advice item."""
    rows = [[item.icon, item.title, item.body] for item in catalog]
    return pd.DataFrame(rows, columns=_ADVICE_COLUMNS)


def _prepare_history(log: Sequence[LogEntry]) -> pd.DataFrame:
    """Historial sin timezone y con cabeceras legibles."""
    df = log_to_frame(log)
    if "recorded_at" in df.columns and not df.empty:
        df["recorded_at"] = pd.to_datetime(
            df["recorded_at"], errors="coerce", utc=True
        ).dt.tz_localize(None)
    if "cycle_tracking" in df.columns:
        df["cycle_tracking"] = df["cycle_tracking"].map(
            lambda flag: "si" if flag else "no"
        )
    return df.rename(columns=_HISTORY_HEADER_MAP)


def write_tips_xlsx(
    tips: Sequence[Tip],
    catalog: Sequence[AdviceItem],
    log: Sequence[LogEntry],
    out_path: Path,
    layout: ExcelLayout,
) -> None:
    """Write a formatted workbook suitable for printing.

    Args:
        tips: Personal tips, in engine order.
        catalog: General advice items.
        log: Full log history (history sheet).
        out_path: Output path for the XLSX file.
        layout: Excel layout parameters.
    """
    out_path.parent.mkdir(parents=True, exist_ok=True)

    tips_df = tips_to_frame(tips)
    if tips_df.empty:
        tips_df = pd.DataFrame(
            [["", "", layout.empty_message, ""]], columns=_TIP_COLUMNS
        )

    with pd.ExcelWriter(out_path, engine="openpyxl") as writer:
        tips_df.to_excel(writer, index=False, sheet_name=layout.tips_sheet)
        advice_to_frame(catalog).to_excel(
            writer, index=False, sheet_name=layout.general_sheet
        )
        _prepare_history(log).to_excel(
            writer, index=False, sheet_name=layout.history_sheet
        )
        for name in (layout.tips_sheet, layout.general_sheet, layout.history_sheet):
            _format_sheet(writer.book[name])
        _fill_severity(writer.book[layout.tips_sheet])
    logger.info("Wrote %d tips to %s", len(tips), out_path)


def _style_header_row(ws: Any) -> None:
    """Aplica fuente negrita, alineación y borde a la fila de cabecera."""
    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    header_font = Font(bold=True)
    center = Alignment(horizontal="center", vertical="center", wrap_text=True)
    for cell in ws[1]:
        cell.font = header_font
        cell.alignment = center
        cell.border = border


def _style_body_rows(ws: Any) -> None:
    """Aplica alineación y borde a las filas de datos; el texto largo se ajusta."""
    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    wrap = Alignment(horizontal="left", vertical="top", wrap_text=True)
    for row in ws.iter_rows(min_row=2):
        for cell in row:
            cell.alignment = wrap
            cell.border = border


def _get_header_col_index(ws: Any) -> dict[str, int]:
    """Devuelve mapa nombre de cabecera -> índice de columna (1-based)."""
    headers = [str(cell.value) for cell in ws[1]]
    return {name: idx + 1 for idx, name in enumerate(headers)}


def _apply_column_widths(ws: Any, col_index: dict[str, int]) -> None:
    """Establece anchos de columna para evitar ###."""
    widths = [
        ("Tipo", 10),
        ("Icono", 6),
        ("Título", 32),
        ("Detalle", 90),
        ("N°", 5),
        ("Fecha / Hora", 18),
        ("IMC", 8),
        ("Sueño (h)", 10),
        ("Pulso (lpm)", 11),
        ("Ciclo\nregistrado", 10),
        ("Duración\nciclo (días)", 12),
    ]
    for header, width in widths:
        idx = col_index.get(header)
        if idx is not None:
            letter = ws.cell(row=1, column=idx).column_letter
            ws.column_dimensions[letter].width = width


def _apply_number_formats(ws: Any, col_index: dict[str, int]) -> None:
    """Aplica formatos numéricos por cabecera."""
    fmt_map: dict[str, str] = {
        "Fecha / Hora": "dd/mm/yyyy hh:mm",
        "IMC": "0.0",
        "Sueño (h)": "0.0",
        "Pulso (lpm)": "0",
        "Duración\nciclo (días)": "0",
    }
    for row in ws.iter_rows(min_row=2):
        for header, fmt in fmt_map.items():
            idx = col_index.get(header)
            if idx is not None:
                row[idx - 1].number_format = fmt


def _fill_severity(ws: Any) -> None:
    """Colorea la columna Tipo según la severidad del consejo."""
    idx = _get_header_col_index(ws).get("Tipo")
    if idx is None:
        return
    for row in ws.iter_rows(min_row=2):
        color = _SEVERITY_FILLS.get(str(row[idx - 1].value))
        if color:
            row[idx - 1].fill = PatternFill(
                start_color=color, end_color=color, fill_type="solid"
            )


def _format_sheet(ws: Any) -> None:
    """Apply borders, widths and number formats to a worksheet.

    Args:
        ws: openpyxl worksheet.
    """
    _style_header_row(ws)
    _style_body_rows(ws)
    col_index = _get_header_col_index(ws)
    _apply_column_widths(ws, col_index)
    _apply_number_formats(ws, col_index)
