"""Tests für die nachträgliche Stundenplan-Validierung."""

import pytest

from analysis.schedule_validator import ScheduleValidator
from data.sample_data import sample_catalog
from models.catalog import Catalog
from models.course import Course
from models.resource import Resource
from models.teacher import Teacher
from solver.engine import generate_schedule
from solver.report import FulfillmentRecord, ScheduledSession, ScheduleReport


# ─── Testdaten-Hilfsfunktionen ────────────────────────────────────────────────

def _catalog() -> Catalog:
    return Catalog(
        teachers=[
            Teacher(id="T1", name="Dr. A", department="Math",
                    weekly_availability={"Monday": ["9:00", "10:00"]}),
            Teacher(id="T2", name="Dr. B", department="Math",
                    weekly_availability={"Monday": ["9:00"]}),
        ],
        courses=[
            Course(id="C1", name="Algebra", code="M1", teacher_id="T1", sessions_per_week=2,
                   students_enrolled=20),
            Course(id="C2", name="Analysis", code="M2", teacher_id="T2", sessions_per_week=1,
                   students_enrolled=20),
        ],
        resources=[Resource(id="R1", name="Raum 1", capacity=25)],
    )


def _session(course_id="C1", teacher_id="T1", resource_id="R1", day="Monday",
             slot="9:00", students=20) -> ScheduledSession:
    return ScheduledSession(
        day=day, slot=slot, course_id=course_id, course_name=f"Kurs {course_id}",
        course_code=course_id, teacher_id=teacher_id, teacher_name=teacher_id,
        resource_id=resource_id, resource_name=resource_id, students=students,
    )


def _report(sessions: list[ScheduledSession], fulfillment: list[FulfillmentRecord]) -> ScheduleReport:
    days, slots = ["Monday"], ["9:00", "10:00"]
    grid = {d: {s: [] for s in slots} for d in days}
    for s in sessions:
        grid[s.day][s.slot].append(s)
    return ScheduleReport(grid=grid, fulfillment=fulfillment, days=days, slots=slots)


def _record(course_id: str, requested: int, placed: int) -> FulfillmentRecord:
    return FulfillmentRecord(
        course_id=course_id, course_name=course_id, course_code=course_id,
        sessions_requested=requested, sessions_placed=placed,
    )


# ─── TESTS ────────────────────────────────────────────────────────────────────

class TestScheduleValidator:
    def test_engine_result_is_valid(self):
        catalog = sample_catalog()
        result = ScheduleValidator().validate(generate_schedule(catalog), catalog)
        assert result.is_valid
        assert result.violations == []

    def test_clean_manual_report(self):
        report = _report(
            [_session(slot="9:00"), _session(slot="10:00")],
            [_record("C1", 2, 2)],
        )
        assert ScheduleValidator().validate(report, _catalog()).is_valid

    def test_teacher_double_booking(self):
        report = _report(
            [_session("C1", "T1", "R1"), _session("C2", "T1", "R2")],
            [_record("C1", 2, 1), _record("C2", 1, 1)],
        )
        result = ScheduleValidator().validate(report, _catalog())
        assert not result.is_valid
        assert len(result.by_constraint("teacher_double_booking")) == 1

    def test_resource_double_booking(self):
        report = _report(
            [_session("C1", "T1", "R1"), _session("C2", "T2", "R1")],
            [_record("C1", 2, 1), _record("C2", 1, 1)],
        )
        result = ScheduleValidator().validate(report, _catalog())
        assert len(result.by_constraint("resource_double_booking")) == 1

    def test_capacity_exceeded(self):
        report = _report([_session(students=30)], [_record("C1", 2, 1)])
        result = ScheduleValidator().validate(report, _catalog())
        assert len(result.by_constraint("capacity_exceeded")) == 1

    def test_unknown_resource(self):
        report = _report([_session(resource_id="R9")], [_record("C1", 2, 1)])
        result = ScheduleValidator().validate(report, _catalog())
        assert len(result.by_constraint("unknown_resource")) == 1

    def test_teacher_unavailable(self):
        report = _report([_session("C2", "T2", slot="10:00")], [_record("C2", 1, 1)])
        result = ScheduleValidator().validate(report, _catalog())
        assert len(result.by_constraint("teacher_unavailable")) == 1

    def test_fulfillment_mismatch(self):
        report = _report([_session()], [_record("C1", 2, 2)])
        result = ScheduleValidator().validate(report, _catalog())
        assert len(result.by_constraint("fulfillment_mismatch")) == 1

    def test_over_fulfillment(self):
        report = _report(
            [_session(slot="9:00"), _session(slot="10:00")],
            [_record("C1", 1, 2)],
        )
        result = ScheduleValidator().validate(report, _catalog())
        assert len(result.by_constraint("over_fulfillment")) == 1

    def test_shortfall_is_only_warning(self):
        report = _report([_session()], [_record("C1", 2, 1)])
        result = ScheduleValidator().validate(report, _catalog())
        assert result.is_valid
        shortfall = result.by_constraint("shortfall")
        assert len(shortfall) == 1
        assert shortfall[0].severity == "warning"

    def test_missing_grid_cell(self):
        report = ScheduleReport(
            grid={"Monday": {"9:00": []}},
            fulfillment=[],
            days=["Monday"],
            slots=["9:00", "10:00"],
        )
        result = ScheduleValidator().validate(report, _catalog())
        assert len(result.by_constraint("grid_incomplete")) == 1


# ─── BERICHT ──────────────────────────────────────────────────────────────────

class TestScheduleReport:
    def test_queries(self):
        report = _report(
            [_session("C1", slot="10:00"), _session("C2", "T2", "R2", slot="9:00")],
            [_record("C1", 2, 1), _record("C2", 1, 1)],
        )
        assert [s.course_id for s in report.sessions()] == ["C2", "C1"]
        assert len(report.get_teacher_schedule("T2")) == 1
        assert len(report.get_resource_schedule("R1")) == 1
        assert [f.course_id for f in report.shortfalls()] == ["C1"]
        assert report.fulfillment_for("C9") is None

    def test_save_and_load(self, tmp_path):
        report = generate_schedule(sample_catalog())
        path = tmp_path / "plan.json"
        report.save_json(path)
        loaded = ScheduleReport.load_json(path)
        assert loaded.grid == report.grid
        assert loaded.fulfillment == report.fulfillment

    def test_load_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Stundenplan nicht gefunden"):
            ScheduleReport.load_json(tmp_path / "fehlt.json")
