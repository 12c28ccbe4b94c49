"""Level-scaled toxicity limits."""

from __future__ import annotations

from typing import Dict, Mapping

from .errors import ConfigurationError

#: Default level floor -> toxicity limit mapping.
DEFAULT_TOXICITY_LEVELS: Dict[int, int] = {
    1: 3,
    4: 4,
    8: 5,
    12: 6,
    16: 7,
    20: 8,
}


def _positive_int(value, what: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{what} must be an integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{what} must be an integer, got {value!r}") from None
    if isinstance(value, float) and number != value:
        raise ConfigurationError(f"{what} must be an integer, got {value!r}")
    if number < 1:
        raise ConfigurationError(f"{what} must be positive, got {value!r}")
    return number


class ThresholdTable:
    """Read-only mapping of level floors to toxicity limits.

    Keys may be given as strings (as they come out of JSON or a settings
    file) and are normalised to integers. The floors are sorted once on
    construction.
    """

    def __init__(self, levels: Mapping = DEFAULT_TOXICITY_LEVELS) -> None:
        if levels is None:
            raise ConfigurationError("Threshold table is missing")
        try:
            items = list(levels.items())
        except AttributeError:
            raise ConfigurationError(
                f"Threshold table must be a mapping, got {type(levels).__name__}"
            ) from None
        table: Dict[int, int] = {}
        for floor, limit in items:
            floor = _positive_int(floor, "Threshold level")
            if floor in table:
                raise ConfigurationError(f"Duplicate threshold level {floor}")
            table[floor] = _positive_int(limit, f"Limit for level {floor}")
        self._limits = table
        self._floors = sorted(table)

    def __len__(self) -> int:
        return len(self._floors)

    def __bool__(self) -> bool:
        return bool(self._floors)

    def __repr__(self) -> str:
        return f"ThresholdTable({self.as_dict()!r})"

    @property
    def floors(self) -> tuple:
        return tuple(self._floors)

    def as_dict(self) -> Dict[int, int]:
        return {floor: self._limits[floor] for floor in self._floors}

    def limit_for(self, level: int) -> int:
        """Return the toxicity limit for an entity of ``level``.

        Uses the greatest floor not above ``level``; levels below every
        floor get the smallest floor's limit. Levels under 1 are treated
        as level 1.
        """
        if not self._floors:
            raise ConfigurationError("Threshold table is empty")
        level = max(1, int(level))
        limit = self._limits[self._floors[0]]
        for floor in self._floors:
            if floor > level:
                break
            limit = self._limits[floor]
        return limit


def toxicity_limit(level: int, table: ThresholdTable | Mapping) -> int:
    """Return the maximum toxicity sustainable at ``level``."""
    if not isinstance(table, ThresholdTable):
        table = ThresholdTable(table)
    return table.limit_for(level)


__all__ = ["DEFAULT_TOXICITY_LEVELS", "ThresholdTable", "toxicity_limit"]
