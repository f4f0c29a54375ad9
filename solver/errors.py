"""Fehler, die einen Planungslauf vollständig abbrechen."""


class StructuralError(ValueError):
    """Strukturell ungültige Eingabe (leeres Zeitraster, sessions_per_week < 1, ...).

    Wird vor jeder Platzierung geworfen; es gibt kein Teilergebnis.
    """

    def __init__(self, problems: list[str]) -> None:
        self.problems = list(problems)
        super().__init__(
            "Ungültige Eingabe für die Stundenplan-Erzeugung:\n"
            + "\n".join(f"  - {p}" for p in self.problems)
        )
