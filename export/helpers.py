"""Gemeinsame Hilfsfunktionen für Terminal- und Excel-Export."""

from collections import defaultdict
from datetime import date
from typing import Optional

from solver.report import ScheduledSession, ScheduleReport

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "low":      "B3FFB3",
    "medium":   "FFF2B3",
    "high":     "FFB3B3",
    "sonstig":  "E0E0E0",
    "free":     "F5F5F5",
    "short":    "FF9999",
    "header":   "4472C4",
}

FREE_PERIOD = "Free Period"


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


def slot_label(slot: str, slot_labels: Optional[dict[str, str]] = None) -> str:
    """Anzeigename eines Slots ("14:00" → "2:00 PM" wenn konfiguriert)."""
    if slot_labels:
        return slot_labels.get(slot, slot)
    return slot


def get_difficulty_color(difficulty: Optional[str]) -> str:
    """Zellfarbe anhand der Kurs-Schwierigkeit."""
    key = (difficulty or "").lower()
    # REST-Variante: Beginner/Intermediate/Advanced
    key = {"beginner": "low", "intermediate": "medium", "advanced": "high"}.get(key, key)
    return COLORS.get(key, COLORS["sonstig"])


# ─── Zellinhalte ──────────────────────────────────────────────────────────────

def format_session(session: ScheduledSession, mode: str = "grid") -> str:
    """Text für eine Sitzung.

    mode: 'grid'    → Kurs, Lehrkraft, Raum, Teilnehmende
          'teacher' → Kurs, Raum
          'resource'→ Kurs, Lehrkraft
    """
    if mode == "teacher":
        return f"{session.course_name}\nRoom: {session.resource_name}"
    if mode == "resource":
        return f"{session.course_name}\nTeacher: {session.teacher_name}"
    return (
        f"{session.course_name}\nTeacher: {session.teacher_name}\n"
        f"Room: {session.resource_name}\nStudents: {session.students}"
    )


def format_sessions(sessions: list[ScheduledSession], mode: str = "grid") -> str:
    """Mehrere Sitzungen einer Zelle, durch Leerzeile getrennt."""
    if not sessions:
        return FREE_PERIOD
    return "\n\n".join(format_session(s, mode) for s in sessions)


# ─── Auswertungen ─────────────────────────────────────────────────────────────

def count_teacher_sessions(report: ScheduleReport) -> dict[str, int]:
    """Platzierte Sitzungen je Lehrkraft."""
    counts: dict[str, int] = defaultdict(int)
    for s in report.sessions():
        counts[s.teacher_id] += 1
    return dict(counts)


def sessions_by_cell(
    sessions: list[ScheduledSession],
) -> dict[tuple[str, str], list[ScheduledSession]]:
    """Baut {(day, slot): [sessions]} für die übergebenen Sitzungen auf."""
    grid: dict[tuple[str, str], list[ScheduledSession]] = defaultdict(list)
    for s in sessions:
        grid[(s.day, s.slot)].append(s)
    return grid
