"""Catalog: Eingabe-Schnappschuss (Lehrkräfte, Kurse, Räume) + Vorab-Check."""

from collections import Counter
from pathlib import Path

from pydantic import BaseModel

from models.course import Course
from models.resource import Resource
from models.teacher import Teacher


class CatalogCheckReport(BaseModel):
    """Ergebnis des Vorab-Checks vor einem Planungslauf."""

    is_feasible: bool
    errors: list[str]      # Kritische Probleme (Kurs wird sicher nicht geplant)
    warnings: list[str]    # Hinweise (Planung evtl. unvollständig)

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel

        console = Console()
        if self.is_feasible:
            status = "[bold green]✓ PLANBAR[/bold green]"
        else:
            status = "[bold red]✗ PROBLEME GEFUNDEN[/bold red]"

        lines = [status]
        if self.errors:
            lines.append("\n[red bold]Fehler:[/red bold]")
            for e in self.errors:
                lines.append(f"  [red]• {e}[/red]")
        if self.warnings:
            lines.append("\n[yellow bold]Warnungen:[/yellow bold]")
            for w in self.warnings:
                lines.append(f"  [yellow]• {w}[/yellow]")
        if not self.errors and not self.warnings:
            lines.append("[dim]Keine Probleme gefunden.[/dim]")

        console.print(Panel("\n".join(lines), title="Katalog-Check", border_style="cyan"))


class Catalog(BaseModel):
    """Unveränderlicher Eingabe-Schnappschuss für genau einen Planungslauf.

    Die Reihenfolge der Listen ist Teil der Eingabe: Kurse weiter vorne
    haben Vorrang, Räume werden in Listenreihenfolge gewählt.
    """

    teachers: list[Teacher] = []
    courses: list[Course] = []
    resources: list[Resource] = []

    # ─── Lookups ───

    def teacher_by_id(self) -> dict[str, Teacher]:
        """Mapping Teacher.id → Teacher (bei doppelten Ids gewinnt der erste)."""
        lookup: dict[str, Teacher] = {}
        for t in self.teachers:
            lookup.setdefault(t.id, t)
        return lookup

    def resource_by_id(self) -> dict[str, Resource]:
        lookup: dict[str, Resource] = {}
        for r in self.resources:
            lookup.setdefault(r.id, r)
        return lookup

    # ─── Übersicht ───

    def summary(self) -> str:
        """Kurze Übersicht über den Katalog."""
        demand = sum(c.sessions_per_week for c in self.courses)
        supply = sum(t.available_slot_count for t in self.teachers)
        seats = sum(r.capacity for r in self.resources)
        lines = [
            f"Lehrkräfte: {len(self.teachers)} ({supply} freie Slots gesamt)",
            f"Kurse: {len(self.courses)} ({demand} Sitzungen/Woche)",
            f"Räume: {len(self.resources)} ({seats} Plätze gesamt)",
        ]
        return "\n".join(lines)

    # ─── Vorab-Check ───

    def check(self) -> CatalogCheckReport:
        """Prüft den Katalog auf Probleme, die die Engine nur still überspringt.

        Prüfungen:
        1. Kurs-Codes eindeutig
        2. Lehrkraft jedes Kurses existiert
        3. Mindestens ein Raum mit ausreichender Kapazität
        4. Freie Slots je Lehrkraft ≥ Summe der Sitzungen ihrer Kurse
        5. Fachbereich Kurs ↔ Lehrkraft (nur Warnung)
        """
        errors: list[str] = []
        warnings: list[str] = []

        teachers = self.teacher_by_id()

        # ── 1. Doppelte Kurs-Codes ──────────────────────────────────────
        codes = Counter(c.code for c in self.courses)
        for code, count in codes.items():
            if count > 1:
                errors.append(f"Kurs-Code '{code}' ist {count}× vergeben.")

        # ── 2. + 3. Referenzen und Kapazität ────────────────────────────
        demand_per_teacher: dict[str, int] = {}
        for course in self.courses:
            teacher = teachers.get(course.teacher_id)
            if teacher is None:
                errors.append(
                    f"Kurs {course.code} ({course.name}): Lehrkraft "
                    f"'{course.teacher_id}' existiert nicht."
                )
            else:
                demand_per_teacher[teacher.id] = (
                    demand_per_teacher.get(teacher.id, 0) + course.sessions_per_week
                )
                if course.department and teacher.department != course.department:
                    warnings.append(
                        f"Kurs {course.code}: Fachbereich '{course.department}' "
                        f"≠ Fachbereich der Lehrkraft '{teacher.department}'."
                    )

            if not any(r.capacity >= course.students_enrolled for r in self.resources):
                largest = max((r.capacity for r in self.resources), default=0)
                errors.append(
                    f"Kurs {course.code}: {course.students_enrolled} Teilnehmende, "
                    f"größter Raum hat nur {largest} Plätze."
                )

        # ── 4. Verfügbarkeit je Lehrkraft ───────────────────────────────
        for teacher_id, demand in demand_per_teacher.items():
            teacher = teachers[teacher_id]
            available = teacher.available_slot_count
            if available < demand:
                warnings.append(
                    f"Lehrkraft {teacher.id} ({teacher.name}): {demand} Sitzungen "
                    f"benötigt, aber nur {available} freie Slots."
                )
            if demand > teacher.max_hours_per_week:
                warnings.append(
                    f"Lehrkraft {teacher.id}: {demand} Sitzungen > "
                    f"max_hours_per_week ({teacher.max_hours_per_week})."
                )

        return CatalogCheckReport(
            is_feasible=len(errors) == 0,
            errors=errors,
            warnings=warnings,
        )

    # ─── Persistenz ────────────────────────────────────────────────────────

    def save_json(self, path: Path) -> None:
        """Speichert den Katalog als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "Catalog":
        """Lädt einen Katalog aus einer JSON-Datei."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
