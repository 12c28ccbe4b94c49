"""Consumption and rest handling.

:class:`ToxicityHandler` ties the ledger, threshold table and overflow
engine together and reports to a host object. The host supplies::

    narrate(entity_id, text)
    apply_status_effects(entity_id, effects)
    apply_damage(entity_id, amount, damage_type)
    read_ledger_value(entity_id) -> int | None
    persist_ledger_value(entity_id, value)

and optionally ``display_name(entity_id)`` and ``warn(entity_id, text)``.
The ledger hooks may live on a separate store object instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from utils.dice import DiceRoller

from . import events
from .conf import ToxicitySettings, load_settings
from .errors import InvalidAmountError, MissingCollaboratorError
from .ledger import ToxicityLedger
from .overflow import OverflowEngine, OverflowOutcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConsumptionResult:
    """What happened when an entity consumed something toxic."""

    entity_id: object
    amount: int
    total: int
    limit: int
    outcome: Optional[OverflowOutcome] = None

    @property
    def overflowed(self) -> bool:
        return self.outcome is not None


@dataclass(frozen=True)
class ToxicityStatus:
    current: int
    limit: int

    @property
    def exceeded(self) -> bool:
        return self.current > self.limit

    def __str__(self) -> str:
        return f"{self.current} / {self.limit}"


class ToxicityHandler:
    """Handle consumption and long-rest events for one host."""

    def __init__(
        self,
        host,
        settings: ToxicitySettings | None = None,
        rng=None,
        engine: OverflowEngine | None = None,
        store=None,
    ) -> None:
        self.host = host
        self.settings = settings or load_settings()
        self.rng = rng or DiceRoller()
        self.engine = engine or OverflowEngine()
        self.ledger = ToxicityLedger(store if store is not None else host)

    # ------------------------------------------------------------------
    # host helpers
    # ------------------------------------------------------------------
    def _hook(self, name: str):
        hook = getattr(self.host, name, None)
        if not callable(hook):
            raise MissingCollaboratorError(name)
        return hook

    def _name(self, entity_id) -> str:
        display_name = getattr(self.host, "display_name", None)
        if callable(display_name):
            return str(display_name(entity_id))
        return str(entity_id)

    def _bundle_hooks(self, outcome: OverflowOutcome | None) -> Dict[str, object]:
        """Look up every hook needed before issuing any outbound call."""
        hooks = {"narrate": self._hook("narrate")}
        if outcome is not None:
            if outcome.effects:
                hooks["apply_status_effects"] = self._hook("apply_status_effects")
            if outcome.damage is not None:
                hooks["apply_damage"] = self._hook("apply_damage")
        return hooks

    def _apply_outcome(self, entity_id, outcome: OverflowOutcome, hooks) -> None:
        if outcome.effects:
            hooks["apply_status_effects"](entity_id, list(outcome.effects))
        if outcome.damage is not None:
            hooks["apply_damage"](entity_id, outcome.damage, outcome.damage_type)
        hooks["narrate"](entity_id, outcome.narration())
        logger.info(
            "Toxicity overflow on %s: roll %s -> %s",
            entity_id,
            outcome.roll_total,
            outcome.label,
        )
        events.toxicity_overflowed.send(
            sender=self.__class__,
            entity_id=entity_id,
            outcome=outcome,
            roll_table=self.settings.roll_table,
        )

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------
    def get_toxicity(self, entity_id) -> int:
        return self.ledger.get(entity_id)

    def limit(self, level: int) -> int:
        return self.settings.thresholds.limit_for(level)

    def status(self, entity_id, level: int) -> ToxicityStatus:
        return ToxicityStatus(self.ledger.get(entity_id), self.limit(level))

    # ------------------------------------------------------------------
    # events
    # ------------------------------------------------------------------
    def on_consume(self, entity_id, toxicity_value, entity_level: int) -> ConsumptionResult | None:
        """Add ``toxicity_value`` to the entity and resolve any overflow.

        Returns None when the value is zero or missing. The ledger is only
        written once the overflow outcome, if any, has been resolved.

        Raises:
            InvalidAmountError: If ``toxicity_value`` is negative. Nothing
                is changed in that case.
        """
        if not toxicity_value:
            return None
        if isinstance(toxicity_value, bool) or not isinstance(toxicity_value, int):
            raise InvalidAmountError(
                f"Toxicity value must be an integer, got {toxicity_value!r}"
            )
        if toxicity_value < 0:
            raise InvalidAmountError(f"Toxicity value must not be negative, got {toxicity_value}")

        with self.ledger.locked(entity_id):
            limit = self.limit(entity_level)
            projected = self.ledger.get(entity_id) + toxicity_value
            outcome = None
            if projected > limit:
                outcome = self.engine.resolve(projected - limit, self.rng)
            total = self.ledger.increment(entity_id, toxicity_value)

        hooks = self._bundle_hooks(outcome)
        hooks["narrate"](
            entity_id,
            f"{self._name(entity_id)} consumed a potion, increasing toxicity to {total}.",
        )
        logger.debug("%s toxicity %s / %s", entity_id, total, limit)
        if outcome is not None:
            self._apply_outcome(entity_id, outcome, hooks)
        return ConsumptionResult(entity_id, toxicity_value, total, limit, outcome)

    def handle_overflow(self, entity_id, excess: int) -> OverflowOutcome:
        """Resolve and apply an overflow without touching the ledger."""
        outcome = self.engine.resolve(excess, self.rng)
        self._apply_outcome(entity_id, outcome, self._bundle_hooks(outcome))
        return outcome

    def set_toxicity(self, entity_id, value: int) -> int:
        return self.ledger.set(entity_id, value)

    def on_long_rest_completed(self, entity_id, long_rest: bool = True) -> bool:
        """Reset toxicity after a long rest when enabled.

        Returns True if the entity's toxicity was reset.
        """
        if not long_rest or not self.settings.reset_on_long_rest:
            return False
        narrate = self._hook("narrate")
        self.ledger.reset(entity_id)
        narrate(
            entity_id,
            f"{self._name(entity_id)}'s toxicity has been reset after a long rest.",
        )
        logger.info("Toxicity of %s reset after a long rest", entity_id)
        events.toxicity_reset.send(sender=self.__class__, entity_id=entity_id)
        return True


__all__ = ["ConsumptionResult", "ToxicityStatus", "ToxicityHandler"]
