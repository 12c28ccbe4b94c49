"""Toxicity host backed by game character objects.

Characters are looked up by id in a weak registry (or through an optional
``lookup`` callable) and are expected to look like the game's typeclassed
objects: a ``db`` attribute namespace, a ``tags`` handler, ``msg`` and,
usually, ``at_damage``.
"""

from __future__ import annotations

import logging
from weakref import WeakValueDictionary

from combat.damage_types import DamageType, get_damage_multiplier
from toxicity import events
from toxicity.ledger import LEDGER_KEY
from world.system import state_manager

logger = logging.getLogger(__name__)

__all__ = ["CharacterHost", "toxicity_value", "is_potion"]


def toxicity_value(item) -> int:
    """Return the toxicity value stored on ``item``, 0 if unset."""
    value = getattr(getattr(item, "db", None), "toxicity", None)
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed toxicity value %r on %s", value, item)
        return 0


def is_potion(item) -> bool:
    db = getattr(item, "db", None)
    return str(getattr(db, "consumable_type", "") or "").lower() == "potion"


def _current_hp(obj) -> int:
    if hasattr(obj, "hp"):
        try:
            return int(obj.hp)
        except (TypeError, ValueError):
            return 0
    hp_trait = getattr(getattr(obj, "traits", None), "health", None)
    if hp_trait is not None:
        try:
            return int(hp_trait.current)
        except (TypeError, ValueError):
            return 0
    return 0


class CharacterHost:
    """Apply toxicity results to characters and store their ledger values."""

    def __init__(self, characters=None, lookup=None) -> None:
        self.characters = WeakValueDictionary() if characters is None else characters
        self._lookup = lookup

    # -------------------------------------------------------------
    # registry
    # -------------------------------------------------------------
    def register(self, char):
        self.characters[char.id] = char
        return char.id

    def unregister(self, char) -> None:
        self.characters.pop(char.id, None)

    def on_tick(self, sender=None, **kwargs) -> None:
        """Count down timed effects on every registered character."""
        for chara in list(self.characters.values()):
            state_manager.tick_character(chara)

    def get(self, entity_id):
        obj = self.characters.get(entity_id)
        if obj is None and self._lookup:
            obj = self._lookup(entity_id)
            if obj is not None:
                self.characters[entity_id] = obj
        if obj is None:
            raise LookupError(f"No character with id {entity_id!r}")
        return obj

    def display_name(self, entity_id) -> str:
        return getattr(self.get(entity_id), "key", str(entity_id))

    # -------------------------------------------------------------
    # ledger store
    # -------------------------------------------------------------
    def read_ledger_value(self, entity_id):
        return getattr(self.get(entity_id).db, LEDGER_KEY, None)

    def persist_ledger_value(self, entity_id, value: int) -> None:
        setattr(self.get(entity_id).db, LEDGER_KEY, value)

    # -------------------------------------------------------------
    # outbound hooks
    # -------------------------------------------------------------
    def apply_status_effects(self, entity_id, effects) -> None:
        chara = self.get(entity_id)
        for spec in effects:
            ticks = state_manager.duration_to_ticks(
                rounds=spec.duration.rounds, seconds=spec.duration.seconds
            )
            if spec.mods or not spec.statuses:
                state_manager.add_effect(chara, spec.key, ticks, dict(spec.mods) or None)
            for status in spec.statuses:
                state_manager.add_status_effect(chara, status, ticks)

    def apply_damage(self, entity_id, amount: int, damage_type=DamageType.POISON) -> int:
        """Deal ``amount`` damage of ``damage_type`` to the character.

        Characters with ``at_damage`` handle resistances themselves.
        Anything else has its resistances applied here and its health
        lowered directly.
        """
        chara = self.get(entity_id)
        dtype = DamageType(damage_type) if damage_type else DamageType.POISON
        at_damage = getattr(chara, "at_damage", None)
        if callable(at_damage):
            return at_damage(None, amount, damage_type=dtype.value)

        resistances = getattr(chara.db, "resistances", None) or []
        damage = int(round(amount * get_damage_multiplier(resistances, dtype)))
        remaining = max(_current_hp(chara) - damage, 0)
        if hasattr(chara, "hp"):
            chara.hp = remaining
        else:
            hp_trait = getattr(getattr(chara, "traits", None), "health", None)
            if hp_trait is not None:
                hp_trait.current = remaining
        if remaining <= 0 and hasattr(chara, "tags"):
            chara.tags.add("unconscious", category="status")
        return damage

    def narrate(self, entity_id, text: str) -> None:
        chara = self.get(entity_id)
        location = getattr(chara, "location", None)
        if location is not None and hasattr(location, "msg_contents"):
            location.msg_contents(text)
        elif hasattr(chara, "msg"):
            chara.msg(text)

    def warn(self, entity_id, text: str) -> None:
        logger.warning("Toxicity warning for %s: %s", entity_id, text)
        try:
            chara = self.get(entity_id)
        except LookupError:
            return
        if hasattr(chara, "msg"):
            chara.msg(f"|rToxicity: {text}|n")

    # -------------------------------------------------------------
    # game events
    # -------------------------------------------------------------
    def consume(self, chara, item):
        """Report that ``chara`` drank ``item``.

        Only potions with a positive toxicity value are reported. Returns
        the signal responses, or an empty list if nothing was sent.
        """
        if not is_potion(item):
            return []
        value = toxicity_value(item)
        if value <= 0:
            return []
        entity_id = self.register(chara)
        level = int(getattr(chara.db, "level", None) or 1)
        return events.potion_consumed.send(
            sender=self.__class__,
            entity_id=entity_id,
            toxicity_value=value,
            entity_level=level,
        )

    def rest(self, chara, long_rest: bool = True):
        entity_id = self.register(chara)
        return events.rest_completed.send(
            sender=self.__class__, entity_id=entity_id, long_rest=long_rest
        )
