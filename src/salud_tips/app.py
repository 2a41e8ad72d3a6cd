"""App Kivy: formulario de registro, consejos y exportación."""

from __future__ import annotations

import traceback
from datetime import datetime
from pathlib import Path

from dateutil import tz

from salud_tips.catalog import GENERAL_ADVICE
from salud_tips.excel_writer import ExcelLayout, write_tips_xlsx
from salud_tips.model import LogEntry, to_number
from salud_tips.render import TextRenderer
from salud_tips.sources.quest_log import QuestLogPaths, QuestLogSource
from salud_tips.storage import AppConfig, SQLiteStore
from salud_tips.tips import derive_tips

_LOCAL_TZ = tz.gettz("America/Argentina/Buenos_Aires")

FORM_FIELDS: list[tuple[str, str]] = [
    ("bmi", "IMC"),
    ("sleep_hours", "Horas de sueño"),
    ("heart_rate", "Pulso (lpm)"),
    ("cycle_length", "Duración ciclo (días)"),
]


def run_app() -> int:
    """Lanza la app Kivy."""
    from kivy.app import App
    from kivy.core.window import Window
    from kivy.uix.boxlayout import BoxLayout
    from kivy.uix.button import Button
    from kivy.uix.checkbox import CheckBox
    from kivy.uix.label import Label
    from kivy.uix.textinput import TextInput

    class SaludTipsApp(App):
        """Main Kivy app."""

        def __init__(self, **kwargs: object) -> None:
            super().__init__(**kwargs)
            self.store = SQLiteStore(Path.cwd() / "salud_tips.sqlite3")
            self.app_config = self.store.load_config()
            self.inputs: dict[str, TextInput] = {}
            self.cycle_check: CheckBox | None = None
            self.import_input: TextInput | None = None
            self.export_input: TextInput | None = None
            self.preview: TextInput | None = None
            self.status: Label | None = None

        def build(self) -> BoxLayout:
            Window.bind(on_key_down=self._on_key_down)

            root = BoxLayout(orientation="vertical", spacing=8, padding=10)
            root.add_widget(
                Label(
                    text="Salud Tips: registra tus datos y mira tus consejos.",
                    size_hint_y=None,
                    height=36,
                )
            )

            form = BoxLayout(orientation="horizontal", spacing=8, size_hint_y=None)
            form.height = 40
            for key, label in FORM_FIELDS:
                inp = TextInput(hint_text=label, multiline=False)
                self.inputs[key] = inp
                form.add_widget(inp)
            self.cycle_check = CheckBox(size_hint_x=0.1)
            form.add_widget(self.cycle_check)
            form.add_widget(Label(text="Ciclo", size_hint_x=0.15))
            root.add_widget(form)

            import_row = BoxLayout(orientation="horizontal", size_hint_y=None)
            import_row.height = 36
            import_row.add_widget(Label(text="JSON", size_hint_x=0.15))
            self.import_input = TextInput(
                text=self.app_config.import_path, multiline=False
            )
            import_row.add_widget(self.import_input)
            root.add_widget(import_row)

            export_row = BoxLayout(orientation="horizontal", size_hint_y=None)
            export_row.height = 36
            export_row.add_widget(Label(text="Salida", size_hint_x=0.15))
            self.export_input = TextInput(
                text=self.app_config.export_dir, multiline=False
            )
            export_row.add_widget(self.export_input)
            root.add_widget(export_row)

            actions = BoxLayout(
                orientation="horizontal",
                spacing=8,
                size_hint_y=None,
                height=40,
            )
            for text, handler in (
                ("Guardar registro", self._on_add),
                ("Importar", self._on_import),
                ("Exportar Excel", self._on_export),
                ("Salir", lambda *_args: self.stop()),
            ):
                btn = Button(text=text)
                btn.bind(on_press=handler)
                actions.add_widget(btn)
            root.add_widget(actions)

            self.status = Label(text="", size_hint_y=None, height=30)
            root.add_widget(self.status)

            self.preview = TextInput(readonly=True, text="", multiline=True)
            root.add_widget(self.preview)

            self._refresh_preview()
            return root

        def _on_key_down(
            self,
            _window: object,
            keycode: int,
            _scancode: int,
            _text: str,
            _modifiers: list[str],
        ) -> bool:
            # Esc: salir de fullscreen o cerrar app.
            if keycode != 27:
                return False
            if Window.fullscreen:
                Window.fullscreen = False
            else:
                self.stop()
            return True

        def _on_add(self, _: object) -> None:
            values = {key: inp.text for key, inp in self.inputs.items()}
            tracking = bool(self.cycle_check and self.cycle_check.active)
            if all(to_number(v) is None for v in values.values()) and not tracking:
                self._set_status("Completa al menos un dato.")
                return
            entry = LogEntry(
                recorded_at=datetime.now(tz=_LOCAL_TZ),
                bmi=values["bmi"],
                sleep_hours=values["sleep_hours"],
                heart_rate=values["heart_rate"],
                cycle_tracking=tracking,
                cycle_length=values["cycle_length"] if tracking else None,
            )
            entry_id = self.store.append_entry(entry)
            for inp in self.inputs.values():
                inp.text = ""
            self._set_status(f"Registro {entry_id} guardado.")
            self._refresh_preview()

        def _on_import(self, _: object) -> None:
            raw = self.import_input.text.strip() if self.import_input else ""
            try:
                path = Path(raw).expanduser()
                root_dir = path if path.is_dir() else path.parent
                source = QuestLogSource(QuestLogPaths(root=root_dir))
                source.validate()
                json_file = source.newest_json() if path.is_dir() else path
                count = self.store.append_entries(source.load_entries(json_file))
            except Exception as exc:
                self._show_error("importar", exc)
                return
            self.app_config = AppConfig(
                export_dir=self.app_config.export_dir, import_path=raw
            )
            self.store.save_config(self.app_config)
            self._set_status(f"OK. {count} registros importados.")
            self._refresh_preview()

        def _on_export(self, _: object) -> None:
            raw = self.export_input.text.strip() if self.export_input else ""
            config = AppConfig(export_dir=raw, import_path=self.app_config.import_path)
            self.app_config = config
            self.store.save_config(config)
            out_dir = (
                Path(config.export_dir).expanduser()
                if config.export_dir
                else Path.cwd() / "salidas"
            )
            timestamp = datetime.now(tz=_LOCAL_TZ).strftime("%Y-%m-%d_%H-%M-%S")
            out_path = out_dir / f"consejos_salud_gui_{timestamp}.xlsx"
            log = self.store.load_log()
            try:
                write_tips_xlsx(
                    derive_tips(log), GENERAL_ADVICE, log, out_path, ExcelLayout()
                )
            except Exception as exc:
                self._show_error("exportar", exc)
                return
            self._set_status(f"Excel generado: {out_path}")

        def _refresh_preview(self) -> None:
            if self.preview is None:
                return
            tips = derive_tips(self.store.load_log())
            self.preview.text = TextRenderer().render(tips, GENERAL_ADVICE)

        def _set_status(self, text: str) -> None:
            if self.status is not None:
                self.status.text = text

        def _show_error(self, action: str, exc: Exception) -> None:
            error_type = type(exc).__name__
            self._set_status(f"Error al {action} ({error_type}): {exc}")
            if self.preview is not None:
                self.preview.text = traceback.format_exc()

    SaludTipsApp().run()
    return 0
