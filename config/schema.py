from typing import Literal

from pydantic import BaseModel, Field


# ─── ZEITRASTER (Konfiguration, nicht aus Daten abgeleitet) ───

class TimeGridConfig(BaseModel):
    """Wochenraster: geordnete Tage und geordnete Zeitslots.

    Die Reihenfolge ist bedeutsam: Der Greedy-Lauf probiert Tage in genau
    dieser Reihenfolge. Leere oder doppelte Einträge werden NICHT hier,
    sondern beim Start der Planung als StructuralError abgewiesen.
    """
    # Unterrichtstage in Planungsreihenfolge
    days: list[str] = Field(
        description="Unterrichtstage in Planungsreihenfolge")
    # Slot-Bezeichner, z.B. "9:00"
    slots: list[str] = Field(
        description="Slot-Bezeichner in Planungsreihenfolge")
    # Anzeigenamen für Export/Terminal ("14:00" → "2:00 PM"); rein kosmetisch
    slot_labels: dict[str, str] = Field(
        default_factory=dict,
        description="Anzeigenamen der Slots (nur Darstellung)")

    def label(self, slot: str) -> str:
        """Anzeigename eines Slots, Fallback ist der Bezeichner selbst."""
        return self.slot_labels.get(slot, slot)


# ─── SOLVER ───

class SolverConfig(BaseModel):
    """Planungsmodus und optionale Erweiterungen (alle standardmäßig aus)."""
    # "greedy" = First-Fit in Eingabereihenfolge, "optimal" = CP-SAT
    mode: Literal["greedy", "optimal"] = Field(
        "greedy", description="Planungsmodus")
    # max_hours_per_week der Lehrkräfte als harte Obergrenze erzwingen
    enforce_max_hours: bool = Field(
        False, description="Wochenstunden-Obergrenze der Lehrkräfte erzwingen")
    # Raum-Verfügbarkeit zusätzlich zur Belegung prüfen
    respect_resource_availability: bool = Field(
        False, description="Verfügbarkeitsangaben der Räume beachten")
    # Kurs und Lehrkraft müssen zum selben Fachbereich gehören
    require_department_match: bool = Field(
        False, description="Fachbereich von Kurs und Lehrkraft muss übereinstimmen")
    # Nur Modus "optimal"
    time_limit_seconds: int = Field(30, ge=1, le=3600,
        description="Zeitlimit CP-SAT (Sekunden)")
    # Nur Modus "optimal"; 1 = deterministisch
    num_workers: int = Field(1, ge=1,
        description="CPU-Kerne für CP-SAT")
    # Nur Modus "optimal"
    random_seed: int = Field(0, ge=0,
        description="Zufalls-Seed für CP-SAT")


# ─── GESAMT-CONFIG ───

class EngineConfig(BaseModel):
    """Gesamtkonfiguration der Stundenplan-Erzeugung."""
    # Name der Einrichtung (nur Anzeige)
    institution_name: str = Field("Muster-Hochschule",
        description="Name der Einrichtung")
    # Tage und Slots
    time_grid: TimeGridConfig
    # Modus und Erweiterungen
    solver: SolverConfig = Field(default_factory=SolverConfig)
