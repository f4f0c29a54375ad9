"""Optionaler Modus "optimal": CP-SAT-Modell (Google OR-Tools).

Architektur:
  - Entscheidungsvariable place[c, day, slot, r] – Kurs c findet zu (day, slot)
    im Raum r statt; nur für freie Slots der Lehrkraft und Räume mit
    ausreichender Kapazität angelegt
  - Harte Constraints: höchstens sessions_per_week je Kurs, keine
    Doppelbelegung von Lehrkraft oder Raum, optional Wochenstunden-Obergrenze
  - Zielfunktion: maximale Anzahl platzierter Sitzungen, bei Gleichstand
    Vorrang für Kurse weiter vorne in der Eingabe

Anders als der Greedy-Lauf darf jede Sitzung einen anderen passenden Raum
bekommen. Warnungen und Erfüllungsbericht haben dieselbe Form.
"""

import logging
import time
from collections import defaultdict
from datetime import datetime, timezone

from ortools.sat.python import cp_model

from config.schema import EngineConfig
from models.catalog import Catalog
from models.course import Course
from models.resource import Resource
from models.teacher import Teacher
from solver.availability import AvailabilityIndex
from solver.engine import (
    department_mismatch,
    empty_grid,
    fulfillment_record,
    make_session,
    partial_warning,
    unresolved_warning,
)
from solver.report import FulfillmentRecord, ScheduleReport, ScheduleWarning

logger = logging.getLogger(__name__)


class SolveProgressCallback(cp_model.CpSolverSolutionCallback):
    """Protokolliert gefundene Zwischenlösungen."""

    def __init__(self) -> None:
        super().__init__()
        self._solution_count = 0
        self._start_time = time.time()

    def on_solution_callback(self) -> None:
        self._solution_count += 1
        elapsed = time.time() - self._start_time
        logger.info(
            f"  Lösung #{self._solution_count} | "
            f"Zeit: {elapsed:.1f}s | "
            f"Obj: {self.objective_value:.0f}"
        )

    @property
    def solution_count(self) -> int:
        return self._solution_count


class OptimalAssigner:
    """CP-SAT basierte Zuweisung, aufgerufen über AssignmentEngine."""

    def __init__(self, config: EngineConfig) -> None:
        self.config = config
        self._model = cp_model.CpModel()
        # (course_idx, day, slot, resource_id) -> BoolVar
        self._place: dict[tuple[int, str, str, str], cp_model.IntVar] = {}

    def assign(self, catalog: Catalog) -> ScheduleReport:
        tg = self.config.time_grid
        sc = self.config.solver
        days, slots = list(tg.days), list(tg.slots)

        teachers = catalog.teacher_by_id()
        index = AvailabilityIndex(catalog.teachers, slots)

        warnings: list[ScheduleWarning] = []
        # course_idx -> (course, teacher); nur auflösbare Kurse
        resolved: dict[int, tuple[Course, Teacher]] = {}

        for ci, course in enumerate(catalog.courses):
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
            candidates = self._fitting_resources(course, catalog.resources)
            if not candidates:
                warnings.append(unresolved_warning(
                    course, "no_resource",
                    f"kein Raum mit mindestens {course.students_enrolled} Plätzen.",
                ))
                continue

            resolved[ci] = (course, teacher)
            self._create_variables(ci, teacher, candidates, days, index)

        self._add_constraints(resolved, catalog)
        values = self._solve(resolved)

        resources = catalog.resource_by_id()
        grid = empty_grid(days, slots)
        placed_count: dict[int, int] = defaultdict(int)
        teacher_load: dict[str, int] = defaultdict(int)
        for (ci, day, slot, rid), var in self._place.items():
            if not values.get((ci, day, slot, rid)):
                continue
            course, teacher = resolved[ci]
            grid[day][slot].append(make_session(course, teacher, resources[rid], day, slot))
            placed_count[ci] += 1
            teacher_load[teacher.id] += 1

        fulfillment: list[FulfillmentRecord] = []
        for ci, course in enumerate(catalog.courses):
            if ci not in resolved:
                continue
            placed = placed_count.get(ci, 0)
            fulfillment.append(fulfillment_record(course, placed))
            if placed >= course.sessions_per_week:
                continue
            teacher = resolved[ci][1]
            capped = sc.enforce_max_hours and teacher_load[teacher.id] >= teacher.max_hours_per_week
            warnings.append(partial_warning(course, placed, "max_hours" if capped else "availability"))

        return ScheduleReport(
            grid=grid,
            fulfillment=fulfillment,
            warnings=warnings,
            mode="optimal",
            days=days,
            slots=slots,
            generated_at=datetime.now(timezone.utc),
        )

    # ─── Modellaufbau ─────────────────────────────────────────────────────────

    def _fitting_resources(self, course: Course, resources: list[Resource]) -> list[Resource]:
        seen: set[str] = set()
        fitting = []
        for r in resources:
            if r.id in seen:
                continue
            seen.add(r.id)
            if r.capacity >= course.students_enrolled:
                fitting.append(r)
        return fitting

    def _create_variables(
        self,
        ci: int,
        teacher: Teacher,
        candidates: list[Resource],
        days: list[str],
        index: AvailabilityIndex,
    ) -> None:
        respect = self.config.solver.respect_resource_availability
        for day in days:
            for slot in index.slots_for(teacher.id, day):
                for r in candidates:
                    if respect and not r.is_available(day, slot):
                        continue
                    self._place[(ci, day, slot, r.id)] = self._model.new_bool_var(
                        f"place_{ci}_{day}_{slot}_{r.id}"
                    )

    def _add_constraints(
        self, resolved: dict[int, tuple[Course, Teacher]], catalog: Catalog
    ) -> None:
        by_course: dict[int, list] = defaultdict(list)
        by_course_slot: dict[tuple, list] = defaultdict(list)
        by_teacher_slot: dict[tuple, list] = defaultdict(list)
        by_resource_slot: dict[tuple, list] = defaultdict(list)
        by_teacher: dict[str, list] = defaultdict(list)

        for (ci, day, slot, rid), var in self._place.items():
            teacher = resolved[ci][1]
            by_course[ci].append(var)
            by_course_slot[(ci, day, slot)].append(var)
            by_teacher_slot[(teacher.id, day, slot)].append(var)
            by_resource_slot[(rid, day, slot)].append(var)
            by_teacher[teacher.id].append(var)

        # C1: höchstens sessions_per_week Sitzungen je Kurs
        for ci, vars_ in by_course.items():
            self._model.add(sum(vars_) <= resolved[ci][0].sessions_per_week)

        # C2: je Kurs und (Tag, Slot) höchstens ein Raum
        for vars_ in by_course_slot.values():
            if len(vars_) > 1:
                self._model.add(sum(vars_) <= 1)

        # C3: keine Doppelbelegung der Lehrkraft
        for vars_ in by_teacher_slot.values():
            if len(vars_) > 1:
                self._model.add(sum(vars_) <= 1)

        # C4: keine Doppelbelegung des Raums
        for vars_ in by_resource_slot.values():
            if len(vars_) > 1:
                self._model.add(sum(vars_) <= 1)

        # C5 (optional): Wochenstunden-Obergrenze
        if self.config.solver.enforce_max_hours:
            teachers = catalog.teacher_by_id()
            for teacher_id, vars_ in by_teacher.items():
                self._model.add(sum(vars_) <= teachers[teacher_id].max_hours_per_week)

        # Zielfunktion: Gesamtzahl dominiert, Eingabereihenfolge entscheidet Gleichstand
        n = len(resolved)
        demand = sum(course.sessions_per_week for course, _ in resolved.values())
        base = demand * (n + 1) + 1
        ranks = {ci: rank for rank, ci in enumerate(sorted(resolved))}
        self._model.maximize(sum(
            (base + n - ranks[ci]) * var
            for (ci, _day, _slot, _rid), var in self._place.items()
        ))

    # ─── Lösen ────────────────────────────────────────────────────────────────

    def _solve(self, resolved: dict) -> dict[tuple[int, str, str, str], int]:
        """Löst das Modell; gibt Variablenwerte (0/1) zurück."""
        if not self._place:
            return {}

        sc = self.config.solver
        cp_solver = cp_model.CpSolver()
        cp_solver.parameters.max_time_in_seconds = sc.time_limit_seconds
        cp_solver.parameters.num_workers = sc.num_workers
        cp_solver.parameters.random_seed = sc.random_seed
        cp_solver.parameters.log_search_progress = False

        callback = SolveProgressCallback()
        t0 = time.time()
        status = cp_solver.solve(self._model, callback)
        status_name = cp_solver.status_name(status)

        logger.info(
            f"CP-SAT beendet: {status_name} | "
            f"Zeit: {time.time() - t0:.1f}s | "
            f"Variablen: {len(self._place)} | "
            f"Kurse: {len(resolved)}"
        )

        if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
            logger.error(f"CP-SAT fand keine Lösung ({status_name}) – keine Sitzung platziert")
            return {}
        return {key: cp_solver.value(var) for key, var in self._place.items()}
