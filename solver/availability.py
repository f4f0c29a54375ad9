"""Verfügbarkeits-Index: freie Slots je Lehrkraft und Tag."""

from models.teacher import Teacher


class AvailabilityIndex:
    """Beantwortet slots_for(teacher_id, day) in Iterationsreihenfolge.

    Slots, die nicht im konfigurierten Zeitraster vorkommen, werden
    herausgefiltert. Die Reihenfolge entspricht der Reihenfolge in
    Teacher.weekly_availability und ist damit über Läufe stabil.
    """

    def __init__(self, teachers: list[Teacher], slots: list[str]) -> None:
        known = set(slots)
        self._index: dict[str, dict[str, tuple[str, ...]]] = {}
        for teacher in teachers:
            if teacher.id in self._index:
                continue
            self._index[teacher.id] = {
                day: tuple(s for s in day_slots if s in known)
                for day, day_slots in teacher.weekly_availability.items()
            }

    def slots_for(self, teacher_id: str, day: str) -> tuple[str, ...]:
        """Freie Slots der Lehrkraft an diesem Tag; leer wenn unbekannt."""
        return self._index.get(teacher_id, {}).get(day, ())
