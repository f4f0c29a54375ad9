"""Konfigurationsmanager für die Engine-Konfiguration (YAML via ruamel.yaml).

Die Datei wird mit Abschnitts- und Inline-Kommentaren geschrieben, damit
Planer die Solver-Erweiterungen direkt in der YAML-Datei umschalten können.
"""

import json
from datetime import date
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.schema import EngineConfig, SolverConfig

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── KOMMENTARE IN DER YAML-DATEI ───

_YAML_HEADER = f"""\
# ============================================
# Stundenplan-Engine: Konfiguration
# Erstellt: {date.today().isoformat()}
# ============================================
"""

# Abschnitt → (Überschrift, Erläuterung)
_SECTION_COMMENTS: dict[str, tuple[str, str]] = {
    "time_grid": (
        "Zeitraster",
        "Tage und Slots werden in genau dieser Reihenfolge belegt.\n"
        "slot_labels dient nur der Anzeige.",
    ),
    "solver": (
        "Solver",
        "mode: greedy (Standard) oder optimal (CP-SAT).\n"
        "Alle Erweiterungen sind standardmäßig deaktiviert.",
    ),
}

# Solver-Option → Inline-Kommentar
_SOLVER_FIELD_COMMENTS: dict[str, str] = {
    "enforce_max_hours": "max_hours_per_week als Obergrenze",
    "respect_resource_availability": "Raum-Verfügbarkeit prüfen",
    "require_department_match": "Fachbereich Kurs = Lehrkraft",
    "time_limit_seconds": "nur Modus optimal",
    "num_workers": "nur Modus optimal; 1 = deterministisch",
    "random_seed": "nur Modus optimal",
}


class ConfigManager:
    """Lädt und speichert die EngineConfig im Verzeichnis config/."""

    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "engine_config.yaml"

    def first_run_check(self) -> bool:
        """True, solange unter DEFAULT_CONFIG noch keine Datei liegt."""
        return not self.DEFAULT_CONFIG.exists()

    def _resolve(self, path: Optional[Path]) -> Path:
        return Path(path) if path else self.DEFAULT_CONFIG

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> EngineConfig:
        """Liest die YAML-Datei und validiert sie als EngineConfig.

        Raises:
            FileNotFoundError: Datei existiert nicht.
            ValueError: Inhalt verletzt das Schema (Dateiname in der Meldung).
        """
        target = self._resolve(path)
        if not target.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {target}\n"
                f"Mit 'python main.py config init' wird eine Default-Konfiguration angelegt."
            )
        with open(target, "r", encoding="utf-8") as f:
            content = yaml.load(f)
        try:
            return EngineConfig.model_validate(dict(content or {}))
        except Exception as e:
            raise ValueError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e

    def load_or_default(self, path: Optional[Path] = None) -> EngineConfig:
        """Wie load(), ohne Datei aber mit default_engine_config()."""
        from config.defaults import default_engine_config

        target = self._resolve(path)
        if not target.exists():
            return default_engine_config()
        return self.load(target)

    # ─── Überschreiben einzelner Optionen ───

    @staticmethod
    def with_solver_overrides(config: EngineConfig, **overrides: Any) -> EngineConfig:
        """Kopie der Config mit geänderten Solver-Optionen; None-Werte bleiben unberührt."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return config
        solver = SolverConfig.model_validate({**config.solver.model_dump(), **updates})
        return config.model_copy(update={"solver": solver})

    # ─── Speichern ───

    def save(self, config: EngineConfig, path: Optional[Path] = None) -> Path:
        """Schreibt die Config als kommentierte YAML-Datei und gibt den Pfad zurück."""
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)

        document = self._build_commented_yaml(config)
        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(document, f)

        console.print(f"[green]✓[/green] Konfiguration gespeichert: {target}")
        return target

    def _build_commented_yaml(self, config: EngineConfig) -> CommentedMap:
        """EngineConfig → CommentedMap mit Abschnitts- und Inline-Kommentaren."""
        document = CommentedMap(json.loads(config.model_dump_json()))

        for key, (title, note) in _SECTION_COMMENTS.items():
            document.yaml_set_comment_before_after_key(
                key, before=f"\n─── {title} ───\n{note}",
            )

        solver = CommentedMap(document["solver"])
        for option, note in _SOLVER_FIELD_COMMENTS.items():
            if option in solver:
                solver.yaml_add_eol_comment(note, option)
        document["solver"] = solver
        return document
