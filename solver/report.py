"""Ergebnis-Modelle eines Planungslaufs: Stundenplan-Raster + Erfüllungsbericht."""

from datetime import datetime
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel


class ScheduledSession(BaseModel):
    """Eine platzierte Sitzung (Schnappschuss der Entitäten zum Planungszeitpunkt)."""

    day: str
    slot: str
    course_id: str
    course_name: str
    course_code: str
    teacher_id: str
    teacher_name: str
    resource_id: str
    resource_name: str
    students: int
    department: str = ""
    difficulty: Optional[str] = None


class FulfillmentRecord(BaseModel):
    """Angefragte vs. platzierte Sitzungen eines Kurses."""

    course_id: str
    course_name: str
    course_code: str
    sessions_requested: int
    sessions_placed: int

    @property
    def shortfall(self) -> int:
        return self.sessions_requested - self.sessions_placed

    @property
    def is_complete(self) -> bool:
        return self.sessions_placed >= self.sessions_requested


class ScheduleWarning(BaseModel):
    """Nicht-blockierender Hinweis, den die Oberfläche anzeigen soll."""

    kind: Literal["unresolved_reference", "partial_fulfillment"]
    # unknown_teacher / no_resource / department_mismatch / availability / max_hours
    reason: str
    course_id: str
    course_name: str
    message: str
    sessions_requested: int
    sessions_placed: int = 0


class ScheduleReport(BaseModel):
    """Vollständiges Ergebnis eines Laufs. Wird einmal erzeugt und nicht verändert.

    grid: Tag → Slot → Sitzungen (Reihenfolge = Platzierungsreihenfolge).
    Jeder konfigurierte (Tag, Slot) ist vorhanden, ggf. mit leerer Liste.
    """

    grid: dict[str, dict[str, list[ScheduledSession]]]
    fulfillment: list[FulfillmentRecord]
    warnings: list[ScheduleWarning] = []
    mode: str = "greedy"
    days: list[str]
    slots: list[str]
    generated_at: Optional[datetime] = None

    # ─── Lese-Operationen ───

    def total_placed_sessions(self) -> int:
        """Summe aller Sitzungen über alle (Tag, Slot)-Zellen."""
        return sum(
            len(sessions)
            for day_grid in self.grid.values()
            for sessions in day_grid.values()
        )

    def shortfalls(self) -> list[FulfillmentRecord]:
        """Kurse mit sessions_placed < sessions_requested (Eingabereihenfolge)."""
        return [f for f in self.fulfillment if not f.is_complete]

    def sessions(self) -> list[ScheduledSession]:
        """Alle Sitzungen, sortiert nach Tag- und Slot-Reihenfolge des Rasters."""
        return [
            s
            for day in self.days
            for slot in self.slots
            for s in self.grid.get(day, {}).get(slot, [])
        ]

    def get_course_sessions(self, course_id: str) -> list[ScheduledSession]:
        """Alle Sitzungen eines Kurses."""
        return [s for s in self.sessions() if s.course_id == course_id]

    def get_teacher_schedule(self, teacher_id: str) -> list[ScheduledSession]:
        """Alle Sitzungen einer Lehrkraft."""
        return [s for s in self.sessions() if s.teacher_id == teacher_id]

    def get_resource_schedule(self, resource_id: str) -> list[ScheduledSession]:
        """Alle Sitzungen in einem Raum."""
        return [s for s in self.sessions() if s.resource_id == resource_id]

    def fulfillment_for(self, course_id: str) -> Optional[FulfillmentRecord]:
        return next((f for f in self.fulfillment if f.course_id == course_id), None)

    # ─── Ausgabe ───

    def print_rich(self) -> None:
        """Gibt Erfüllungsbericht und Warnungen über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        requested = sum(f.sessions_requested for f in self.fulfillment)
        short = self.shortfalls()
        skipped = [w for w in self.warnings if w.kind == "unresolved_reference"]
        status = (
            "[bold green]✓ VOLLSTÄNDIG[/bold green]"
            if not short and not skipped
            else f"[bold yellow]⚠ {len(short)} KURS(E) UNVOLLSTÄNDIG, "
                 f"{len(skipped)} ÜBERSPRUNGEN[/bold yellow]"
        )
        console.print(Panel(
            f"{status}\nPlatziert: {self.total_placed_sessions()}/{requested} Sitzungen "
            f"| Modus: {self.mode}",
            title="Erfüllungsbericht",
            border_style="cyan",
        ))

        table = Table(box=box.ROUNDED)
        table.add_column("Kurs")
        table.add_column("Code")
        table.add_column("Angefragt", justify="right")
        table.add_column("Platziert", justify="right")
        for f in self.fulfillment:
            color = "green" if f.is_complete else "red"
            table.add_row(
                f.course_name, f.course_code, str(f.sessions_requested),
                f"[{color}]{f.sessions_placed}[/{color}]",
            )
        console.print(table)

        for w in self.warnings:
            console.print(f"  [yellow]• {w.message}[/yellow]")

    # ─── Persistenz ───

    def save_json(self, path: Path) -> None:
        """Speichert den Bericht als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "ScheduleReport":
        """Lädt einen gespeicherten Bericht aus JSON."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Stundenplan nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
