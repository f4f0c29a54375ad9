"""Nachträgliche Validierung eines fertigen Stundenplans.

Prüft einen ScheduleReport unabhängig von der Engine auf Verletzungen
(Doppelbelegung, Kapazität, Verfügbarkeit, Buchführung).
"""

from collections import defaultdict
from typing import Literal

from pydantic import BaseModel

from models.catalog import Catalog
from solver.report import ScheduleReport


class ValidationViolation(BaseModel):
    """Eine einzelne Verletzung."""

    severity: Literal["error", "warning"]
    constraint: str      # z.B. "teacher_double_booking"
    description: str
    entity: str          # teacher_id / resource_id / course_id


class ValidationReport(BaseModel):
    """Ergebnis der Validierung."""

    violations: list[ValidationViolation]
    is_valid: bool       # True wenn keine Errors (Warnings ok)

    def by_constraint(self, constraint: str) -> list[ValidationViolation]:
        return [v for v in self.violations if v.constraint == constraint]

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        errors = [v for v in self.violations if v.severity == "error"]
        warnings = [v for v in self.violations if v.severity == "warning"]

        status = (
            "[bold green]✓ VALIDE[/bold green]"
            if self.is_valid
            else "[bold red]✗ VERLETZUNGEN GEFUNDEN[/bold red]"
        )
        lines = [status, f"Fehler: {len(errors)} | Warnungen: {len(warnings)}"]
        console.print(Panel("\n".join(lines), title="Stundenplan-Validierung", border_style="cyan"))

        if not self.violations:
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Typ", width=8)
        table.add_column("Constraint", width=28)
        table.add_column("Entität", width=12)
        table.add_column("Beschreibung")
        for v in self.violations:
            color = "red" if v.severity == "error" else "yellow"
            table.add_row(
                f"[{color}]{v.severity.upper()}[/{color}]",
                v.constraint,
                v.entity,
                v.description,
            )
        console.print(table)


class ScheduleValidator:
    """Prüft einen ScheduleReport gegen den Katalog, aus dem er entstand."""

    def validate(self, report: ScheduleReport, catalog: Catalog) -> ValidationReport:
        """Führt alle Checks durch und gibt einen ValidationReport zurück."""
        violations: list[ValidationViolation] = []

        violations.extend(self._check_grid_complete(report))
        violations.extend(self._check_teacher_double_booking(report))
        violations.extend(self._check_resource_double_booking(report))
        violations.extend(self._check_capacity(report, catalog))
        violations.extend(self._check_availability(report, catalog))
        violations.extend(self._check_fulfillment_accounting(report))

        has_errors = any(v.severity == "error" for v in violations)
        return ValidationReport(violations=violations, is_valid=not has_errors)

    # ── Einzelne Prüfungen ────────────────────────────────────────────────────

    def _check_grid_complete(self, report: ScheduleReport) -> list[ValidationViolation]:
        """Jedes konfigurierte (Tag, Slot)-Paar muss im Raster existieren."""
        violations: list[ValidationViolation] = []
        for day in report.days:
            for slot in report.slots:
                if slot not in report.grid.get(day, {}):
                    violations.append(ValidationViolation(
                        severity="error",
                        constraint="grid_incomplete",
                        entity=f"{day} {slot}",
                        description=f"Zelle {day} {slot} fehlt im Raster.",
                    ))
        return violations

    def _check_teacher_double_booking(self, report: ScheduleReport) -> list[ValidationViolation]:
        """Keine Lehrkraft zweimal im selben (Tag, Slot)."""
        violations: list[ValidationViolation] = []
        seen: dict[tuple, list[str]] = defaultdict(list)
        for s in report.sessions():
            seen[(s.teacher_id, s.day, s.slot)].append(s.course_code)

        for (teacher_id, day, slot), codes in seen.items():
            if len(codes) > 1:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="teacher_double_booking",
                    entity=teacher_id,
                    description=f"{day} {slot}: gleichzeitig in {', '.join(codes)} eingeplant.",
                ))
        return violations

    def _check_resource_double_booking(self, report: ScheduleReport) -> list[ValidationViolation]:
        """Kein Raum zweimal im selben (Tag, Slot)."""
        violations: list[ValidationViolation] = []
        seen: dict[tuple, list[str]] = defaultdict(list)
        for s in report.sessions():
            seen[(s.resource_id, s.day, s.slot)].append(s.course_code)

        for (resource_id, day, slot), codes in seen.items():
            if len(codes) > 1:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="resource_double_booking",
                    entity=resource_id,
                    description=f"{day} {slot}: gleichzeitig von {', '.join(codes)} belegt.",
                ))
        return violations

    def _check_capacity(
        self, report: ScheduleReport, catalog: Catalog
    ) -> list[ValidationViolation]:
        violations: list[ValidationViolation] = []
        resources = catalog.resource_by_id()
        for s in report.sessions():
            resource = resources.get(s.resource_id)
            if resource is None:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="unknown_resource",
                    entity=s.resource_id,
                    description=f"{s.course_code} in unbekanntem Raum '{s.resource_id}'.",
                ))
            elif resource.capacity < s.students:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="capacity_exceeded",
                    entity=s.resource_id,
                    description=(
                        f"{s.course_code} ({s.students} Teilnehmende) in {resource.name} "
                        f"mit nur {resource.capacity} Plätzen."
                    ),
                ))
        return violations

    def _check_availability(
        self, report: ScheduleReport, catalog: Catalog
    ) -> list[ValidationViolation]:
        """Jede Sitzung liegt in einem freien Slot der Lehrkraft."""
        violations: list[ValidationViolation] = []
        teachers = catalog.teacher_by_id()
        for s in report.sessions():
            teacher = teachers.get(s.teacher_id)
            if teacher is None or s.slot not in teacher.slots_on(s.day):
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="teacher_unavailable",
                    entity=s.teacher_id,
                    description=f"{s.day} {s.slot} ist kein freier Slot, aber {s.course_code} eingeplant.",
                ))
        return violations

    def _check_fulfillment_accounting(self, report: ScheduleReport) -> list[ValidationViolation]:
        """sessions_placed muss der tatsächlichen Anzahl im Raster entsprechen."""
        violations: list[ValidationViolation] = []
        actual: dict[str, int] = defaultdict(int)
        for s in report.sessions():
            actual[s.course_id] += 1

        for f in report.fulfillment:
            got = actual.get(f.course_id, 0)
            if got != f.sessions_placed:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="fulfillment_mismatch",
                    entity=f.course_id,
                    description=f"Bericht nennt {f.sessions_placed} Sitzungen, im Raster sind {got}.",
                ))
            if f.sessions_placed > f.sessions_requested:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="over_fulfillment",
                    entity=f.course_id,
                    description=(
                        f"{f.sessions_placed} Sitzungen platziert, nur "
                        f"{f.sessions_requested} angefragt."
                    ),
                ))
            elif f.sessions_placed < f.sessions_requested:
                violations.append(ValidationViolation(
                    severity="warning",
                    constraint="shortfall",
                    entity=f.course_id,
                    description=f"Nur {f.sessions_placed}/{f.sessions_requested} Sitzungen platziert.",
                ))
        return violations
