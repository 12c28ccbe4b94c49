# State manager for temporary effects on characters

import math
from typing import Dict, Optional

from world.effects import EFFECTS
from .constants import SECONDS_PER_TICK, TICKS_PER_ROUND


def _get_status_dict(chara) -> Dict[str, Optional[int]]:
    return getattr(chara.db, "status_effects", None) or {}


def _save_status_dict(chara, data):
    chara.db.status_effects = data


def _get_effect_dict(chara) -> Dict[str, dict]:
    return getattr(chara.db, "active_effects", None) or {}


def _save_effect_dict(chara, data):
    chara.db.active_effects = data


def duration_to_ticks(rounds: int | None = None, seconds: int | None = None) -> Optional[int]:
    """Convert a round or second count into global ticks.

    Returns None for an indefinite duration. Any positive duration lasts
    at least one tick.
    """
    if rounds is not None:
        return max(1, rounds * TICKS_PER_ROUND)
    if seconds is not None:
        return max(1, math.ceil(seconds / SECONDS_PER_TICK))
    return None


def _longest(current: Optional[int], new: Optional[int]) -> Optional[int]:
    if current is None or new is None:
        return None
    return max(current, new)


def add_status_effect(chara, status: str, duration: Optional[int]):
    """Add a status effect tag lasting ``duration`` ticks.

    A ``duration`` of None keeps the status until it is removed. Reapplying
    an active status keeps whichever duration is longer.
    """
    statuses = _get_status_dict(chara)
    if status in statuses:
        duration = _longest(statuses[status], duration)
    statuses[status] = duration
    chara.tags.add(status, category="status")
    _save_status_dict(chara, statuses)


def remove_status_effect(chara, status: str):
    """Remove ``status`` from ``chara``."""
    statuses = _get_status_dict(chara)
    if status in statuses:
        del statuses[status]
        chara.tags.remove(status, category="status")
        _save_status_dict(chara, statuses)


def has_status(chara, status: str) -> bool:
    """Return True if ``chara`` currently has ``status`` active."""
    return status in _get_status_dict(chara)


def add_effect(chara, key: str, duration: Optional[int], mods: Dict[str, int] | None = None):
    """Add an active effect with a duration and optional stat modifiers.

    Modifiers default to those of the matching entry in ``EFFECTS``.
    """
    if mods is None:
        effect = EFFECTS.get(key)
        mods = dict(effect.mods or {}) if effect else {}
    effects = _get_effect_dict(chara)
    previous = effects.get(key)
    if previous:
        duration = _longest(previous.get("duration"), duration)
    effects[key] = {"duration": duration, "mods": dict(mods)}
    _save_effect_dict(chara, effects)
    chara.tags.add(key, category="status")


def remove_effect(chara, key: str):
    """Remove an active effect from ``chara``."""
    effects = _get_effect_dict(chara)
    if key in effects:
        del effects[key]
        _save_effect_dict(chara, effects)
        chara.tags.remove(key, category="status")


def get_effect_mods(chara) -> Dict[str, int]:
    """Return aggregated stat modifiers from active effects."""
    mods: Dict[str, int] = {}
    for entry in _get_effect_dict(chara).values():
        for stat, amt in (entry.get("mods") or {}).items():
            mods[stat] = mods.get(stat, 0) + amt
    return mods


def tick_character(chara):
    """Advance effect timers on ``chara`` and expire as needed.

    Indefinite entries are left alone.
    """
    effects = _get_effect_dict(chara)
    effect_changed = False
    for key, entry in list(effects.items()):
        dur = entry.get("duration")
        if dur is None:
            continue
        dur -= 1
        if dur <= 0:
            del effects[key]
            chara.tags.remove(key, category="status")
        else:
            entry["duration"] = dur
        effect_changed = True
    if effect_changed:
        _save_effect_dict(chara, effects)

    statuses = _get_status_dict(chara)
    status_changed = False
    for status, dur in list(statuses.items()):
        if dur is None:
            continue
        dur -= 1
        if dur <= 0:
            del statuses[status]
            chara.tags.remove(status, category="status")
        else:
            statuses[status] = dur
        status_changed = True
    if status_changed:
        _save_status_dict(chara, statuses)
