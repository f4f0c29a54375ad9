"""Zuweisungs-Engine: Kurs-Sitzungen → (Tag, Slot, Raum).

Ablauf (Standardmodus "greedy", ein Durchlauf, kein Backtracking):
  - Kurse in Eingabereihenfolge; frühere Kurse haben Vorrang
  - Raum = erster Raum (Katalogreihenfolge) mit capacity ≥ students_enrolled
  - Tage in Rasterreihenfolge, Slots in Verfügbarkeitsreihenfolge der Lehrkraft
  - Ein Slot wird genommen, wenn weder Lehrkraft noch Raum dort belegt sind

Datenprobleme (unbekannte Lehrkraft, kein passender Raum, zu wenig freie Slots)
brechen den Lauf nie ab, sondern erscheinen als ScheduleWarning. Nur
strukturell ungültige Eingaben führen zu StructuralError.
"""

import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Optional

from config.schema import EngineConfig, TimeGridConfig
from models.catalog import Catalog
from models.course import Course
from models.resource import Resource
from models.teacher import Teacher
from models.timeslot import TimeSlot
from solver.availability import AvailabilityIndex
from solver.errors import StructuralError
from solver.report import (
    FulfillmentRecord,
    ScheduledSession,
    ScheduleReport,
    ScheduleWarning,
)

logger = logging.getLogger(__name__)


# ─── Belegung ─────────────────────────────────────────────────────────────────

class OccupancyRecord:
    """Menge bereits belegter (Entität, Tag, Slot)-Tripel eines Laufs.

    Lehrkräfte und Räume liegen in getrennten Namensräumen, damit
    Lehrkraft "1" und Raum "1" sich nicht gegenseitig blockieren.
    Frühere Fassungen führten beide in einem gemeinsamen Schlüsselraum,
    dort sperrte eine Sitzung von Lehrkraft "1" auch Raum "1". Dieses
    Verhalten ist hier absichtlich nicht übernommen.
    """

    def __init__(self) -> None:
        self._taken: set[tuple[str, str, TimeSlot]] = set()

    def is_free(self, teacher_id: str, resource_id: str, ts: TimeSlot) -> bool:
        return (
            ("teacher", teacher_id, ts) not in self._taken
            and ("resource", resource_id, ts) not in self._taken
        )

    def occupy(self, teacher_id: str, resource_id: str, ts: TimeSlot) -> None:
        self._taken.add(("teacher", teacher_id, ts))
        self._taken.add(("resource", resource_id, ts))

    def __len__(self) -> int:
        return len(self._taken)


# ─── Gemeinsame Bausteine (auch für solver.optimal) ───────────────────────────

def validate_structure(catalog: Catalog, time_grid: TimeGridConfig) -> None:
    """Wirft StructuralError bei strukturell ungültiger Eingabe.

    Sammelt alle Probleme, damit die Oberfläche sie gemeinsam anzeigen kann.
    """
    problems: list[str] = []

    if not time_grid.days:
        problems.append("Zeitraster enthält keine Tage.")
    if not time_grid.slots:
        problems.append("Zeitraster enthält keine Slots.")
    for label, values in (("Tag", time_grid.days), ("Slot", time_grid.slots)):
        for value, count in Counter(values).items():
            if count > 1:
                problems.append(f"{label} '{value}' ist im Zeitraster {count}× angegeben.")
            if not str(value).strip():
                problems.append(f"Leerer {label}-Bezeichner im Zeitraster.")

    for course in catalog.courses:
        if course.sessions_per_week < 1:
            problems.append(
                f"Kurs {course.code}: sessions_per_week = {course.sessions_per_week} (< 1)."
            )
        if course.students_enrolled < 0:
            problems.append(
                f"Kurs {course.code}: students_enrolled = {course.students_enrolled} (< 0)."
            )
    for resource in catalog.resources:
        if resource.capacity < 1:
            problems.append(f"Raum {resource.id}: capacity = {resource.capacity} (< 1).")

    if problems:
        raise StructuralError(problems)


def empty_grid(days: list[str], slots: list[str]) -> dict[str, dict[str, list[ScheduledSession]]]:
    """Raster mit leerer Liste für jedes konfigurierte (Tag, Slot)-Paar."""
    return {day: {slot: [] for slot in slots} for day in days}


def make_session(
    course: Course, teacher: Teacher, resource: Resource, day: str, slot: str
) -> ScheduledSession:
    return ScheduledSession(
        day=day,
        slot=slot,
        course_id=course.id,
        course_name=course.name,
        course_code=course.code,
        teacher_id=teacher.id,
        teacher_name=teacher.name,
        resource_id=resource.id,
        resource_name=resource.name,
        students=course.students_enrolled,
        department=course.department,
        difficulty=course.difficulty,
    )


def department_mismatch(course: Course, teacher: Teacher) -> bool:
    """Kurs mit Fachbereich, der nicht dem der Lehrkraft entspricht."""
    return bool(course.department) and course.department != teacher.department


def unresolved_warning(course: Course, reason: str, detail: str) -> ScheduleWarning:
    warning = ScheduleWarning(
        kind="unresolved_reference",
        reason=reason,
        course_id=course.id,
        course_name=course.name,
        message=f"Kurs {course.name} ({course.code}) übersprungen: {detail}",
        sessions_requested=course.sessions_per_week,
        sessions_placed=0,
    )
    logger.warning(warning.message)
    return warning


def partial_warning(course: Course, placed: int, reason: str) -> ScheduleWarning:
    needed = course.sessions_per_week
    warning = ScheduleWarning(
        kind="partial_fulfillment",
        reason=reason,
        course_id=course.id,
        course_name=course.name,
        message=(
            f"Nur {placed}/{needed} Sitzungen für {course.name} ({course.code}) "
            f"platziert, es fehlen {needed - placed}."
        ),
        sessions_requested=needed,
        sessions_placed=placed,
    )
    logger.warning(warning.message)
    return warning


def fulfillment_record(course: Course, placed: int) -> FulfillmentRecord:
    return FulfillmentRecord(
        course_id=course.id,
        course_name=course.name,
        course_code=course.code,
        sessions_requested=course.sessions_per_week,
        sessions_placed=placed,
    )


# ─── Haupt-Engine ─────────────────────────────────────────────────────────────

class AssignmentEngine:
    """Erzeugt aus einem Catalog ein ScheduleReport.

    Verwendung:
        engine = AssignmentEngine(config)
        report = engine.generate(catalog)

    Jeder Aufruf von generate() besitzt eigene Belegung und eigenes Raster;
    parallele Aufrufe teilen keinen veränderlichen Zustand.
    """

    def __init__(self, config: EngineConfig) -> None:
        self.config = config

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def generate(self, catalog: Catalog) -> ScheduleReport:
        """Plant alle Kurse des Katalogs. Wirft nur StructuralError."""
        validate_structure(catalog, self.config.time_grid)

        if self.config.solver.mode == "optimal":
            from solver.optimal import OptimalAssigner
            report = OptimalAssigner(self.config).assign(catalog)
        else:
            report = self._assign_greedy(catalog)

        requested = sum(f.sessions_requested for f in report.fulfillment)
        logger.info(
            f"Planung beendet ({report.mode}): "
            f"{report.total_placed_sessions()}/{requested} Sitzungen | "
            f"{len(report.shortfalls())} Kurs(e) unvollständig | "
            f"{len(report.warnings)} Warnung(en)"
        )
        return report

    # ─── Greedy First-Fit ─────────────────────────────────────────────────────

    def _assign_greedy(self, catalog: Catalog) -> ScheduleReport:
        tg = self.config.time_grid
        sc = self.config.solver
        days, slots = list(tg.days), list(tg.slots)

        grid = empty_grid(days, slots)
        occupancy = OccupancyRecord()
        index = AvailabilityIndex(catalog.teachers, slots)
        teachers = catalog.teacher_by_id()
        teacher_load: Counter[str] = Counter()

        fulfillment: list[FulfillmentRecord] = []
        warnings: list[ScheduleWarning] = []

        for course in catalog.courses:
            teacher = teachers.get(course.teacher_id)
            if teacher is None:
                warnings.append(unresolved_warning(
                    course, "unknown_teacher",
                    f"Lehrkraft '{course.teacher_id}' existiert nicht.",
                ))
                continue

            if sc.require_department_match and department_mismatch(course, teacher):
                warnings.append(unresolved_warning(
                    course, "department_mismatch",
                    f"Fachbereich '{course.department}' passt nicht zu "
                    f"{teacher.name} ({teacher.department}).",
                ))
                continue

            resource = self._first_fitting_resource(course, catalog.resources)
            if resource is None:
                warnings.append(unresolved_warning(
                    course, "no_resource",
                    f"kein Raum mit mindestens {course.students_enrolled} Plätzen.",
                ))
                continue

            placed, capped = self._place_course(
                course, teacher, resource, days, index, occupancy, grid, teacher_load,
            )

            fulfillment.append(fulfillment_record(course, placed))
            if placed < course.sessions_per_week:
                warnings.append(partial_warning(
                    course, placed, "max_hours" if capped else "availability",
                ))

        return ScheduleReport(
            grid=grid,
            fulfillment=fulfillment,
            warnings=warnings,
            mode="greedy",
            days=days,
            slots=slots,
            generated_at=datetime.now(timezone.utc),
        )

    def _first_fitting_resource(
        self, course: Course, resources: list[Resource]
    ) -> Optional[Resource]:
        """Erster Raum in Katalogreihenfolge mit ausreichender Kapazität."""
        return next(
            (r for r in resources if r.capacity >= course.students_enrolled), None
        )

    def _place_course(
        self,
        course: Course,
        teacher: Teacher,
        resource: Resource,
        days: list[str],
        index: AvailabilityIndex,
        occupancy: OccupancyRecord,
        grid: dict[str, dict[str, list[ScheduledSession]]],
        teacher_load: Counter,
    ) -> tuple[int, bool]:
        """Platziert die Sitzungen eines Kurses; gibt (platziert, Obergrenze erreicht) zurück."""
        sc = self.config.solver
        needed = course.sessions_per_week
        placed = 0

        for day in days:
            if placed >= needed:
                break
            for slot in index.slots_for(teacher.id, day):
                if placed >= needed:
                    break
                if sc.enforce_max_hours and teacher_load[teacher.id] >= teacher.max_hours_per_week:
                    return placed, True
                if sc.respect_resource_availability and not resource.is_available(day, slot):
                    continue

                ts = TimeSlot(day, slot)
                if not occupancy.is_free(teacher.id, resource.id, ts):
                    logger.debug(f"Konflikt: {course.code} @ {ts} ({teacher.id}/{resource.id})")
                    continue

                grid[day][slot].append(make_session(course, teacher, resource, day, slot))
                occupancy.occupy(teacher.id, resource.id, ts)
                teacher_load[teacher.id] += 1
                placed += 1

        return placed, False


def generate_schedule(catalog: Catalog, config: Optional[EngineConfig] = None) -> ScheduleReport:
    """Kurzform: AssignmentEngine mit Default-Konfiguration."""
    if config is None:
        from config.defaults import default_engine_config
        config = default_engine_config()
    return AssignmentEngine(config).generate(catalog)
