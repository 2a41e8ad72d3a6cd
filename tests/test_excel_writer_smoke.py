from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import cast

from openpyxl import Workbook, load_workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from salud_tips.catalog import GENERAL_ADVICE
from salud_tips.excel_writer import (
    ExcelLayout,
    _format_sheet,
    tips_to_frame,
    write_tips_xlsx,
)
from salud_tips.model import LogEntry
from salud_tips.tips import derive_tips


def test_write_tips_xlsx_happy_path_and_formatting(tmp_path: Path) -> None:
    log = [
        LogEntry(
            recorded_at=datetime(2026, 1, 30, 8, 0, tzinfo=timezone.utc),
            bmi=31.0,
            sleep_hours=5.5,
        ),
        LogEntry(heart_rate=72),
    ]
    tips = derive_tips(log)
    out = tmp_path / "nested" / "out.xlsx"
    layout = ExcelLayout()
    write_tips_xlsx(tips, GENERAL_ADVICE, log, out, layout)

    wb = load_workbook(out)
    assert wb.sheetnames == [
        layout.tips_sheet,
        layout.general_sheet,
        layout.history_sheet,
    ]

    ws = cast(Worksheet, wb[layout.tips_sheet])
    headers = [cell.value for cell in ws[1]]
    assert headers == ["Tipo", "Icono", "Título", "Detalle"]
    assert ws.max_row == len(tips) + 1
    assert ws.cell(row=2, column=1).value == "alert"
    assert ws.cell(row=2, column=1).fill.start_color.rgb.endswith("FFC7CE")
    assert ws.cell(row=1, column=1).font.bold is True
    detalle_letter = get_column_letter(headers.index("Detalle") + 1)
    assert ws.column_dimensions[detalle_letter].width == 90

    general = cast(Worksheet, wb[layout.general_sheet])
    assert general.max_row == len(GENERAL_ADVICE) + 1
    assert general.cell(row=2, column=2).value == "Hydration Potion"

    history = cast(Worksheet, wb[layout.history_sheet])
    hist_headers = [cell.value for cell in history[1]]
    assert "IMC" in hist_headers
    imc_col = hist_headers.index("IMC") + 1
    assert history.cell(row=2, column=imc_col).value == 31.0
    assert history.cell(row=2, column=imc_col).number_format == "0.0"
    fecha_col = hist_headers.index("Fecha / Hora") + 1
    assert history.cell(row=2, column=fecha_col).value == datetime(2026, 1, 30, 8, 0)


def test_write_tips_xlsx_empty_log_writes_placeholder(tmp_path: Path) -> None:
    out = tmp_path / "empty.xlsx"
    layout = ExcelLayout()
    write_tips_xlsx([], GENERAL_ADVICE, [], out, layout)
    wb = load_workbook(out)
    ws = wb[layout.tips_sheet]
    assert ws.cell(row=2, column=3).value == layout.empty_message
    assert wb[layout.history_sheet].max_row == 1


def test_tips_to_frame_keeps_order() -> None:
    tips = derive_tips([LogEntry(bmi=17, sleep_hours=10)])
    df = tips_to_frame(tips)
    assert list(df["Tipo"]) == ["warning", "warning"]
    assert df.loc[1, "Título"] == "Oversleep Warning!"


def test_format_sheet_handles_missing_headers() -> None:
    wb = Workbook()
    ws = cast(Worksheet, wb.active)
    ws.append(["Solo"])
    ws.append([1])

    _format_sheet(ws)

    assert ws.cell(row=1, column=1).font.bold is True
    assert ws.cell(row=2, column=1).alignment.wrap_text is True
