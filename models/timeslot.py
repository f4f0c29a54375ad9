"""Datenmodell für einen Zeitslot im Wochenraster."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TimeSlot:
    """Kombination aus Wochentag und Slot-Bezeichner.

    Immutable (frozen=True) damit es als Dict-Key / Set-Element nutzbar ist.
    """

    # Wochentag wie im Zeitraster konfiguriert ("Monday")
    day: str
    # Slot-Bezeichner ("9:00")
    slot: str

    def __repr__(self) -> str:
        return f"TimeSlot({self.day[:3]}, {self.slot})"

    def __str__(self) -> str:
        return f"{self.day} {self.slot}"
