"""Standardwerte: Wochenraster Montag–Freitag mit sechs Stunden-Slots."""

from config.schema import EngineConfig, SolverConfig, TimeGridConfig


DEFAULT_DAYS: list[str] = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]

DEFAULT_SLOTS: list[str] = ["9:00", "10:00", "11:00", "14:00", "15:00", "16:00"]

# Anzeigenamen wie im Tabellen-Export
DEFAULT_SLOT_LABELS: dict[str, str] = {
    "9:00": "9:00 AM",
    "10:00": "10:00 AM",
    "11:00": "11:00 AM",
    "14:00": "2:00 PM",
    "15:00": "3:00 PM",
    "16:00": "4:00 PM",
}


def default_time_grid() -> TimeGridConfig:
    """Standard-Zeitraster: 5 Tage × 6 Slots."""
    return TimeGridConfig(
        days=list(DEFAULT_DAYS),
        slots=list(DEFAULT_SLOTS),
        slot_labels=dict(DEFAULT_SLOT_LABELS),
    )


def default_engine_config() -> EngineConfig:
    """Vollständige Default-Konfiguration (Greedy, keine Erweiterungen)."""
    return EngineConfig(
        time_grid=default_time_grid(),
        solver=SolverConfig(),
    )
