"""Import der Nutzdaten der Web-Oberfläche ({teachers, courses, resources}).

Die Oberfläche liefert camelCase-Felder in zwei Varianten:
  - Verwaltungsansicht: weeklyHours, studentCount, maxHours
  - REST-Variante:      credits, studentsEnrolled, maxHoursPerWeek
Beide werden auf den Catalog abgebildet.
"""

import json
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from models.catalog import Catalog
from models.course import Course
from models.resource import Resource
from models.teacher import Teacher


class WebImportError(Exception):
    """Fehler beim Import der Web-Nutzdaten."""


def _first(raw: dict, *keys: str, default: Any = None) -> Any:
    """Wert des ersten vorhandenen Schlüssels."""
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return default


class WebPayloadImporter:
    """Wandelt ein Web-Payload-Dict in einen Catalog um."""

    def __init__(self, raw: dict) -> None:
        self.raw = raw
        self._errors: list[str] = []

    def _require(self, item: dict, where: str, *keys: str) -> Optional[Any]:
        value = _first(item, *keys)
        if value is None:
            self._errors.append(f"{where}: Feld '{keys[0]}' fehlt.")
        return value

    # ── Entitäten ─────────────────────────────────────────────────────────

    def import_teachers(self) -> list[Teacher]:
        teachers = []
        for i, item in enumerate(self.raw.get("teachers", []), 1):
            where = f"Lehrkraft #{i}"
            tid = self._require(item, where, "id")
            name = self._require(item, where, "name")
            if tid is None or name is None:
                continue
            try:
                teachers.append(Teacher(
                    id=tid,
                    name=name,
                    email=item.get("email"),
                    department=item.get("department", ""),
                    subjects=item.get("subjects", []),
                    weekly_availability=_first(item, "availability", "weeklyAvailability", default={}),
                    max_hours_per_week=_first(item, "maxHoursPerWeek", "maxHours", default=20),
                ))
            except ValidationError as e:
                self._errors.append(f"{where} ({tid}): {e.errors()[0]['msg']}")
        return teachers

    def import_courses(self) -> list[Course]:
        courses = []
        for i, item in enumerate(self.raw.get("courses", []), 1):
            where = f"Kurs #{i}"
            cid = self._require(item, where, "id")
            name = self._require(item, where, "name")
            teacher_id = self._require(item, where, "teacherId")
            sessions = self._require(item, where, "weeklyHours", "credits", "sessionsPerWeek")
            if None in (cid, name, teacher_id, sessions):
                continue
            try:
                courses.append(Course(
                    id=cid,
                    name=name,
                    code=item.get("code") or str(cid),
                    teacher_id=teacher_id,
                    department=item.get("department", ""),
                    sessions_per_week=sessions,
                    students_enrolled=_first(item, "studentCount", "studentsEnrolled", default=0),
                    difficulty=item.get("difficulty"),
                    semester=item.get("semester"),
                    duration_minutes=item.get("duration", 60),
                    requires_lab=bool(item.get("requiresLab", False)),
                ))
            except ValidationError as e:
                self._errors.append(f"{where} ({cid}): {e.errors()[0]['msg']}")
        return courses

    def import_resources(self) -> list[Resource]:
        resources = []
        for i, item in enumerate(self.raw.get("resources", []), 1):
            where = f"Raum #{i}"
            rid = self._require(item, where, "id")
            name = self._require(item, where, "name")
            capacity = self._require(item, where, "capacity")
            if None in (rid, name, capacity):
                continue
            try:
                resources.append(Resource(
                    id=rid,
                    name=name,
                    capacity=capacity,
                    type=item.get("type", "Classroom"),
                    equipment=item.get("equipment", []),
                    location=item.get("location", ""),
                    availability=item.get("availability"),
                ))
            except ValidationError as e:
                self._errors.append(f"{where} ({rid}): {e.errors()[0]['msg']}")
        return resources

    # ── Vollständiger Import ───────────────────────────────────────────────

    def import_all(self) -> Catalog:
        """Importiert alle Entitäten; sammelt Fehler und wirft sie gemeinsam."""
        if not isinstance(self.raw, dict):
            raise WebImportError("Nutzdaten müssen ein JSON-Objekt sein.")
        self._errors = []

        teachers = self.import_teachers()
        courses = self.import_courses()
        resources = self.import_resources()

        if self._errors:
            raise WebImportError(
                f"Import mit {len(self._errors)} Fehlern:\n"
                + "\n".join(f"  • {e}" for e in self._errors)
            )
        return Catalog(teachers=teachers, courses=courses, resources=resources)


def import_web_payload(raw: dict) -> Catalog:
    """Wandelt die Web-Nutzdaten in einen Catalog um.

    Raises:
        WebImportError: Bei fehlenden Pflichtfeldern oder ungültigen Werten.
    """
    return WebPayloadImporter(raw).import_all()


def import_web_file(path: Path) -> Catalog:
    """Liest Web-Nutzdaten aus einer JSON-Datei."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise WebImportError(f"Ungültiges JSON in {path}: {e}") from e
    return import_web_payload(raw)
