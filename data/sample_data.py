"""Beispiel- und Zufallsdaten für die Stundenplan-Engine.

sample_catalog(): kleiner fester Katalog (3 Lehrkräfte, 3 Kurse, 3 Räume),
  wie ihn die Verwaltungsoberfläche als Startdaten anlegt.
SampleDataGenerator: reproduzierbare Zufallskataloge beliebiger Größe für
  Determinismus- und Lasttests. Enthält absichtlich Engpässe:
    1. Große Kurse, für die nur der größte Raum reicht
    2. Lehrkräfte mit weniger freien Slots als Kurs-Sitzungen
"""

import random
from typing import Optional

from config.schema import EngineConfig
from models.catalog import Catalog
from models.course import Course
from models.resource import Resource
from models.teacher import Teacher


def sample_catalog() -> Catalog:
    """Fester Beispielkatalog (Mathematik, Physik, Englisch)."""
    teachers = [
        Teacher(
            id="1",
            name="Dr. Sarah Smith",
            email="sarah.smith@university.edu",
            department="Mathematics",
            subjects=["Advanced Mathematics", "Calculus", "Statistics"],
            weekly_availability={
                "Monday": ["9:00", "10:00", "11:00"],
                "Tuesday": ["9:00", "14:00", "15:00"],
                "Wednesday": ["10:00", "11:00", "14:00"],
                "Thursday": ["9:00", "10:00", "15:00"],
                "Friday": ["9:00", "11:00"],
            },
            max_hours_per_week=20,
        ),
        Teacher(
            id="2",
            name="Prof. Michael Johnson",
            email="michael.johnson@university.edu",
            department="Physics",
            subjects=["General Physics", "Quantum Physics", "Thermodynamics"],
            weekly_availability={
                "Monday": ["10:00", "11:00", "14:00"],
                "Tuesday": ["9:00", "10:00", "11:00"],
                "Wednesday": ["9:00", "14:00", "15:00"],
                "Thursday": ["11:00", "14:00", "15:00"],
                "Friday": ["10:00", "14:00"],
            },
            max_hours_per_week=18,
        ),
        Teacher(
            id="3",
            name="Ms. Emily Davis",
            email="emily.davis@university.edu",
            department="English",
            subjects=["English Literature", "Creative Writing", "Grammar"],
            weekly_availability={
                "Monday": ["14:00", "15:00", "16:00"],
                "Tuesday": ["15:00", "16:00"],
                "Wednesday": ["11:00", "15:00", "16:00"],
                "Thursday": ["14:00", "15:00"],
                "Friday": ["15:00", "16:00"],
            },
            max_hours_per_week=16,
        ),
    ]

    courses = [
        Course(
            id="1", name="Advanced Mathematics", code="MATH301", teacher_id="1",
            department="Mathematics", sessions_per_week=4, students_enrolled=30,
            difficulty="high", semester="Fall 2024",
        ),
        Course(
            id="2", name="General Physics", code="PHYS201", teacher_id="2",
            department="Physics", sessions_per_week=3, students_enrolled=25,
            difficulty="medium", semester="Fall 2024",
        ),
        Course(
            id="3", name="English Literature", code="ENG101", teacher_id="3",
            department="English", sessions_per_week=3, students_enrolled=28,
            difficulty="low", semester="Fall 2024",
        ),
    ]

    resources = [
        Resource(
            id="1", name="Main Auditorium", type="Lecture Hall", capacity=100,
            equipment=["Projector", "Sound System", "Whiteboard"],
            location="Building A, Floor 1",
            availability=["9:00", "10:00", "11:00", "14:00", "15:00", "16:00"],
        ),
        Resource(
            id="2", name="Physics Laboratory A", type="Laboratory", capacity=30,
            equipment=["Lab Equipment", "Safety Gear", "Computers"],
            location="Building B, Floor 2",
            availability=["9:00", "10:00", "11:00", "14:00", "15:00"],
        ),
        Resource(
            id="3", name="Computer Lab 1", type="Computer Lab", capacity=35,
            equipment=["30 Computers", "Projector", "Network Access"],
            location="Building C, Floor 1",
            availability=["10:00", "11:00", "14:00", "15:00", "16:00"],
        ),
    ]

    return Catalog(teachers=teachers, courses=courses, resources=resources)


# ─── Zufallsgenerator ─────────────────────────────────────────────────────────

_DEPARTMENTS: list[tuple[str, str, list[str]]] = [
    ("Mathematics", "MATH", ["Calculus", "Linear Algebra", "Statistics", "Discrete Mathematics"]),
    ("Physics", "PHYS", ["Mechanics", "Electrodynamics", "Quantum Physics", "Thermodynamics"]),
    ("Computer Science", "CS", ["Algorithms", "Databases", "Operating Systems", "Compilers"]),
    ("English", "ENG", ["Literature", "Creative Writing", "Grammar", "Rhetoric"]),
    ("Chemistry", "CHEM", ["Organic Chemistry", "Biochemistry", "Analytical Chemistry"]),
]

_LAST_NAMES = [
    "Smith", "Johnson", "Davis", "Miller", "Wilson", "Moore", "Taylor",
    "Anderson", "Thomas", "Jackson", "White", "Harris", "Martin", "Garcia",
    "Clark", "Lewis", "Walker", "Young", "Allen", "King", "Wright", "Scott",
]

_TITLES = ["Dr.", "Prof.", "Ms.", "Mr."]

_RESOURCE_TYPES: list[tuple[str, int, int]] = [
    # (Typ, min. Plätze, max. Plätze)
    ("Lecture Hall", 80, 200),
    ("Classroom", 25, 45),
    ("Laboratory", 15, 30),
    ("Computer Lab", 20, 35),
]

_DIFFICULTIES = ["low", "medium", "high"]


class SampleDataGenerator:
    """Erzeugt reproduzierbare Zufallskataloge passend zum Zeitraster der Config."""

    def __init__(self, config: EngineConfig, seed: Optional[int] = None) -> None:
        self.config = config
        self.rng = random.Random(seed)

    def generate(
        self,
        num_teachers: int = 8,
        num_courses: int = 15,
        num_resources: int = 4,
    ) -> Catalog:
        """Erzeugt den vollständigen Katalog."""
        teachers = self._generate_teachers(num_teachers)
        resources = self._generate_resources(num_resources)
        courses = self._generate_courses(num_courses, teachers, resources)
        return Catalog(teachers=teachers, courses=courses, resources=resources)

    # ─── Lehrkräfte ───────────────────────────────────────────────────────────

    def _generate_teachers(self, count: int) -> list[Teacher]:
        tg = self.config.time_grid
        teachers = []
        for i in range(1, count + 1):
            department = _DEPARTMENTS[(i - 1) % len(_DEPARTMENTS)]
            last = self.rng.choice(_LAST_NAMES)
            availability: dict[str, list[str]] = {}
            for day in tg.days:
                # Zwischen 0 und 4 freie Slots pro Tag; Reihenfolge zufällig
                k = self.rng.randint(0, min(4, len(tg.slots)))
                availability[day] = self.rng.sample(tg.slots, k)
            teachers.append(Teacher(
                id=f"T{i:02d}",
                name=f"{self.rng.choice(_TITLES)} {last}",
                email=f"{last.lower()}{i}@university.edu",
                department=department[0],
                subjects=self.rng.sample(department[2], 2),
                weekly_availability=availability,
                max_hours_per_week=self.rng.choice([12, 16, 18, 20]),
            ))
        return teachers

    # ─── Räume ────────────────────────────────────────────────────────────────

    def _generate_resources(self, count: int) -> list[Resource]:
        resources = []
        for i in range(1, count + 1):
            rtype, lo, hi = _RESOURCE_TYPES[(i - 1) % len(_RESOURCE_TYPES)]
            resources.append(Resource(
                id=f"R{i:02d}",
                name=f"{rtype} {i}",
                type=rtype,
                capacity=self.rng.randint(lo, hi),
                location=f"Building {chr(ord('A') + (i - 1) % 4)}",
            ))
        return resources

    # ─── Kurse ────────────────────────────────────────────────────────────────

    def _generate_courses(
        self, count: int, teachers: list[Teacher], resources: list[Resource]
    ) -> list[Course]:
        largest = max((r.capacity for r in resources), default=1)
        courses = []
        for i in range(1, count + 1):
            teacher = self.rng.choice(teachers) if teachers else None
            dep = next(
                (d for d in _DEPARTMENTS if teacher and d[0] == teacher.department),
                _DEPARTMENTS[0],
            )
            # Jeder fünfte Kurs ist groß (Engpass 1)
            if i % 5 == 0:
                students = self.rng.randint(max(1, largest - 20), largest + 10)
            else:
                students = self.rng.randint(10, 40)
            courses.append(Course(
                id=f"C{i:02d}",
                name=self.rng.choice(dep[2]),
                code=f"{dep[1]}{100 + i}",
                teacher_id=teacher.id if teacher else "T00",
                department=dep[0],
                sessions_per_week=self.rng.randint(1, 4),
                students_enrolled=students,
                difficulty=self.rng.choice(_DIFFICULTIES),
                semester="Fall 2024",
            ))
        return courses

    # ─── Ausgabe ──────────────────────────────────────────────────────────────

    def print_summary(self, catalog: Catalog) -> None:
        """Gibt eine Rich-Tabelle mit Übersicht der erzeugten Kurse aus."""
        from rich.console import Console
        from rich.table import Table
        from rich import box

        console = Console()
        table = Table(title="Erzeugte Kurse", box=box.ROUNDED)
        table.add_column("Code")
        table.add_column("Kurs")
        table.add_column("Lehrkraft")
        table.add_column("Sitzungen", justify="right")
        table.add_column("Teilnehmende", justify="right")
        for c in catalog.courses:
            table.add_row(
                c.code, c.name, c.teacher_id,
                str(c.sessions_per_week), str(c.students_enrolled),
            )
        console.print(table)
