"""Gemeinsamer Renderer für die Terminal-Anzeige des Stundenplans.

Wird von cmd_show (Rich) verwendet.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from solver.report import ScheduleReport


def render_grid_rows(
    report: "ScheduleReport",
    slot_labels: Optional[dict[str, str]] = None,
) -> list[list[str]]:
    """Gibt Tabellenzeilen für den Gesamtplan zurück.

    Jede Zeile: [slot_label, <Zelle je Tag>]; leere Zellen als '—'.
    Mehrere Sitzungen einer Zelle werden untereinander aufgeführt.
    """
    from export.helpers import slot_label

    rows: list[list[str]] = []
    for slot in report.slots:
        cells = [slot_label(slot, slot_labels)]
        for day in report.days:
            here = report.grid.get(day, {}).get(slot, [])
            if not here:
                cells.append("—")
            else:
                cells.append("\n".join(
                    f"{s.course_code} · {s.teacher_name} · {s.resource_name}"
                    for s in here
                ))
        rows.append(cells)
    return rows


def render_teacher_rows(
    teacher_id: str,
    report: "ScheduleReport",
    slot_labels: Optional[dict[str, str]] = None,
) -> list[list[str]]:
    """Gibt Tabellenzeilen für den Plan einer Lehrkraft zurück."""
    from export.helpers import sessions_by_cell, slot_label

    cells_map = sessions_by_cell(report.get_teacher_schedule(teacher_id))
    rows: list[list[str]] = []
    for slot in report.slots:
        cells = [slot_label(slot, slot_labels)]
        for day in report.days:
            here = cells_map.get((day, slot), [])
            if not here:
                cells.append("—")
            else:
                s = here[0]
                cells.append(f"{s.course_name}\n{s.resource_name}")
        rows.append(cells)
    return rows


def render_resource_rows(
    resource_id: str,
    report: "ScheduleReport",
    slot_labels: Optional[dict[str, str]] = None,
) -> list[list[str]]:
    """Gibt Tabellenzeilen für die Belegung eines Raums zurück."""
    from export.helpers import format_session, sessions_by_cell, slot_label

    cells_map = sessions_by_cell(report.get_resource_schedule(resource_id))
    rows: list[list[str]] = []
    for slot in report.slots:
        cells = [slot_label(slot, slot_labels)]
        for day in report.days:
            here = cells_map.get((day, slot), [])
            cells.append(format_session(here[0], "resource") if here else "—")
        rows.append(cells)
    return rows
