"""Datenmodell für eine Lehrkraft (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, field_validator


class Teacher(BaseModel):
    """Repräsentiert eine einzelne Lehrkraft mit Wochen-Verfügbarkeit."""

    id: str                                      # Stabil innerhalb des Katalogs
    name: str                                    # "Dr. Sarah Smith"
    department: str                              # Fachbereich, z.B. "Mathematics"
    weekly_availability: dict[str, list[str]] = {}  # Tag → freie Slots ("9:00", ...)
    max_hours_per_week: int = 20                 # Informativ, siehe SolverConfig.enforce_max_hours
    email: Optional[str] = None
    subjects: list[str] = []                     # Unterrichtbare Fächer (nur Anzeige)

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v) -> str:
        return str(v).strip()

    @field_validator("weekly_availability")
    @classmethod
    def _no_duplicate_slots(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        for day, slots in v.items():
            seen: set[str] = set()
            for slot in slots:
                if slot in seen:
                    raise ValueError(f"Slot {slot} am {day} mehrfach angegeben")
                seen.add(slot)
        return v

    def slots_on(self, day: str) -> list[str]:
        """Freie Slots an einem Tag; leere Liste wenn der Tag fehlt."""
        return list(self.weekly_availability.get(day, []))

    @property
    def available_slot_count(self) -> int:
        """Summe aller freien Slots über die Woche."""
        return sum(len(slots) for slots in self.weekly_availability.values())
