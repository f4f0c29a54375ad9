"""Excel-Export für den Stundenplan (openpyxl)."""

from pathlib import Path
from typing import Optional

from solver.report import ScheduledSession, ScheduleReport

from export.helpers import (
    COLORS, count_teacher_sessions, format_sessions, get_difficulty_color,
    slot_label, today_str,
)


class ExcelExporter:
    """Exportiert einen ScheduleReport in eine Excel-Datei mit 3 Sheets.

    - "Weekly Timetable": Slots × Tage, darunter eine Zusammenfassung
    - "Teacher Schedule": eine Zeile je Sitzung
    - "Fulfillment":      angefragt / platziert / fehlend je Kurs
    """

    # Spaltenbreiten (Excel-Einheiten)
    COL_SLOT_W = 12
    COL_DAY_W  = 25

    # Zeilenhöhen (Punkte)
    ROW_HEADER_H = 22
    ROW_SLOT_H   = 64

    def __init__(
        self,
        report: ScheduleReport,
        slot_labels: Optional[dict[str, str]] = None,
        institution_name: str = "",
    ):
        self.report           = report
        self.slot_labels      = slot_labels or {}
        self.institution_name = institution_name

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path) -> Path:
        """Erstellt die Excel-Datei mit allen Sheets."""
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # Leeres Standard-Sheet entfernen

        self._sheet_weekly(wb)
        self._sheet_teacher_schedule(wb)
        self._sheet_fulfillment(wb)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        return output_path

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _center_align(self, wrap: bool = True):
        from openpyxl.styles import Alignment
        return Alignment(wrap_text=wrap, horizontal="center", vertical="center")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _write_header(self, ws, headers: list[str], row: int = 1) -> None:
        from openpyxl.styles import Font
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, text in enumerate(headers, 1):
            cell = ws.cell(row=row, column=col, value=text)
            cell.fill = fill
            cell.font = Font(bold=True, color="FFFFFF", size=10)
            cell.alignment = self._center_align(wrap=False)
            cell.border = border
        ws.row_dimensions[row].height = self.ROW_HEADER_H

    def _cell_color(self, sessions: list[ScheduledSession]) -> str:
        if not sessions:
            return COLORS["free"]
        return get_difficulty_color(sessions[0].difficulty)

    # ─── Sheet: Wochenplan ────────────────────────────────────────────────────

    def _sheet_weekly(self, wb) -> None:
        from openpyxl.styles import Font
        from openpyxl.utils import get_column_letter

        ws = wb.create_sheet(title="Weekly Timetable")
        days = self.report.days
        self._write_header(ws, ["Time Slot"] + days)

        ws.column_dimensions["A"].width = self.COL_SLOT_W
        for col in range(2, 2 + len(days)):
            ws.column_dimensions[get_column_letter(col)].width = self.COL_DAY_W

        border = self._thin_border()
        row = 2
        for slot in self.report.slots:
            c = ws.cell(row=row, column=1, value=slot_label(slot, self.slot_labels))
            c.font = Font(bold=True, size=9)
            c.alignment = self._center_align(wrap=False)
            c.border = border
            for col, day in enumerate(days, 2):
                here = self.report.grid.get(day, {}).get(slot, [])
                c = ws.cell(row=row, column=col, value=format_sessions(here))
                c.fill = self._fill(self._cell_color(here))
                c.alignment = self._center_align()
                c.border = border
                c.font = Font(size=8)
            ws.row_dimensions[row].height = self.ROW_SLOT_H
            row += 1

        # Zusammenfassung
        row += 1
        ws.cell(row=row, column=1, value="SUMMARY").font = Font(bold=True)
        row += 1
        requested = sum(f.sessions_requested for f in self.report.fulfillment)
        summary = [
            ("Institution:", self.institution_name),
            ("Courses:", len(self.report.fulfillment)),
            ("Sessions placed:", self.report.total_placed_sessions()),
            ("Sessions requested:", requested),
            ("Incomplete courses:", len(self.report.shortfalls())),
            ("Mode:", self.report.mode),
            ("Generated on:", today_str()),
        ]
        for label, value in summary:
            ws.cell(row=row, column=1, value=label)
            ws.cell(row=row, column=2, value=value)
            row += 1

    # ─── Sheet: Lehrkräfte ────────────────────────────────────────────────────

    def _sheet_teacher_schedule(self, wb) -> None:
        ws = wb.create_sheet(title="Teacher Schedule")
        self._write_header(ws, ["Teacher", "Course", "Day", "Time", "Room", "Students"])
        for col, width in zip("ABCDEF", (24, 28, 12, 10, 24, 10)):
            ws.column_dimensions[col].width = width

        row = 2
        for s in self.report.sessions():
            values = [s.teacher_name, s.course_name, s.day, s.slot, s.resource_name, s.students]
            for col, value in enumerate(values, 1):
                ws.cell(row=row, column=col, value=value)
            row += 1

        # Summe je Lehrkraft
        row += 1
        names = {s.teacher_id: s.teacher_name for s in self.report.sessions()}
        for teacher_id, count in count_teacher_sessions(self.report).items():
            ws.cell(row=row, column=1, value=names.get(teacher_id, teacher_id))
            ws.cell(row=row, column=2, value=f"{count} sessions")
            row += 1

    # ─── Sheet: Erfüllung ─────────────────────────────────────────────────────

    def _sheet_fulfillment(self, wb) -> None:
        ws = wb.create_sheet(title="Fulfillment")
        self._write_header(ws, ["Code", "Course", "Requested", "Placed", "Missing"])
        for col, width in zip("ABCDE", (12, 28, 11, 11, 11)):
            ws.column_dimensions[col].width = width

        row = 2
        for f in self.report.fulfillment:
            values = [f.course_code, f.course_name, f.sessions_requested,
                      f.sessions_placed, f.shortfall]
            for col, value in enumerate(values, 1):
                c = ws.cell(row=row, column=col, value=value)
                if not f.is_complete:
                    c.fill = self._fill(COLORS["short"])
            row += 1
