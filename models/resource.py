"""Datenmodell für einen Raum bzw. eine Ressource (Pydantic v2)."""

from typing import Union

from pydantic import BaseModel, field_validator

# Schlüssel für Verfügbarkeiten, die an jedem Tag gelten
ALL_DAYS = "*"
# Slot-Eintrag für "ganzer Tag"
ALL_SLOTS = "*"

WEEKDAY_NAMES = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)


class Resource(BaseModel):
    """Hörsaal, Labor o.ä. mit Sitzplatzkapazität."""

    id: str
    name: str                  # "Main Auditorium"
    capacity: int              # Sitzplätze (Prüfung ≥ 1 durch die Engine)
    type: str = "Classroom"    # Nur informativ
    equipment: list[str] = []
    location: str = ""
    # Tag → Slots. Flache Listen: Slots gelten an jedem Tag (Schlüssel "*"),
    # Wochentage öffnen jeweils den ganzen Tag (Slot "*").
    # Wird nur mit SolverConfig.respect_resource_availability ausgewertet.
    availability: dict[str, list[str]] = {}

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v) -> str:
        return str(v).strip()

    @field_validator("availability", mode="before")
    @classmethod
    def _expand_flat_list(cls, v: Union[list, dict, None]) -> dict:
        """Bringt die drei Eingabeformen auf Tag → Slots.

        - {"Monday": ["9:00"]}    bleibt unverändert
        - ["9:00", "10:00"]       → {"*": ["9:00", "10:00"]}
        - ["Monday", "Tuesday"]   → {"Monday": ["*"], "Tuesday": ["*"]}
        """
        if v is None:
            return {}
        if isinstance(v, list):
            entries = [str(e).strip() for e in v]
            if entries and all(e in WEEKDAY_NAMES for e in entries):
                return {day: [ALL_SLOTS] for day in entries}
            return {ALL_DAYS: entries}
        return v

    def is_available(self, day: str, slot: str) -> bool:
        """True wenn der Raum zu (Tag, Slot) laut Verfügbarkeit nutzbar ist.

        Ohne jede Angabe gilt der Raum als immer verfügbar.
        """
        if not self.availability:
            return True
        slots = self.availability.get(day, self.availability.get(ALL_DAYS))
        if slots is None:
            return False
        return ALL_SLOTS in slots or slot in slots
