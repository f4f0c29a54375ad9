"""Solver-Modul: Greedy-Zuweisung (Standard) und optionaler CP-SAT-Modus."""

from .engine import AssignmentEngine, OccupancyRecord, generate_schedule, validate_structure
from .availability import AvailabilityIndex
from .errors import StructuralError
from .report import FulfillmentRecord, ScheduledSession, ScheduleReport, ScheduleWarning

__all__ = [
    "AssignmentEngine",
    "OccupancyRecord",
    "generate_schedule",
    "validate_structure",
    "AvailabilityIndex",
    "StructuralError",
    "FulfillmentRecord",
    "ScheduledSession",
    "ScheduleReport",
    "ScheduleWarning",
]
