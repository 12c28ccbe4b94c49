"""Combat system package."""

from .damage_types import DamageType, ResistanceType, get_damage_multiplier

__all__ = [
    "DamageType",
    "ResistanceType",
    "get_damage_multiplier",
]
