"""Datenmodell für einen Kurs (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, field_validator


class Course(BaseModel):
    """Ein Kurs, der pro Woche eine feste Anzahl Sitzungen benötigt.

    Wertebereiche (sessions_per_week ≥ 1, students_enrolled ≥ 0) prüft erst
    die Engine; ein einziger ungültiger Kurs bricht den gesamten Planungslauf
    mit StructuralError ab.
    """

    id: str
    name: str                          # "Advanced Mathematics"
    code: str                          # "MATH301", eindeutig im Katalog
    teacher_id: str                    # Fremdschlüssel auf Teacher.id
    department: str = ""
    sessions_per_week: int             # Wochenstunden bzw. Credits
    students_enrolled: int = 0
    difficulty: Optional[str] = None   # "low"/"medium"/"high" oder "Beginner"/...
    semester: Optional[str] = None     # "Fall 2024"
    duration_minutes: int = 60
    requires_lab: bool = False

    @field_validator("id", "teacher_id", mode="before")
    @classmethod
    def normalize_id(cls, v) -> str:
        return str(v).strip()
