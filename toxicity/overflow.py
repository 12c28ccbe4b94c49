"""Overflow resolution.

When accumulated toxicity passes an entity's limit, the excess is added to
a d10 roll and the total picks a severity tier. Tiers with damage get a
second, independent draw for their damage dice. Nothing is applied here;
the outcome is handed back for the host to act on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .errors import InvalidAmountError, MissingCollaboratorError
from .severity import (
    SEVERITY_TIERS,
    SeverityTier,
    StatusEffectSpec,
    tier_for_roll,
    validate_severity_table,
)

logger = logging.getLogger(__name__)

OVERFLOW_DIE = "1d10"


@dataclass(frozen=True)
class OverflowOutcome:
    """Result of one overflow resolution."""

    tier: SeverityTier
    roll_total: int
    excess: int
    damage: Optional[int] = None

    @property
    def label(self) -> str:
        return self.tier.label

    @property
    def effects(self) -> Tuple[StatusEffectSpec, ...]:
        return self.tier.effects

    @property
    def damage_type(self):
        return self.tier.damage.damage_type if self.tier.damage else None

    @property
    def die_roll(self) -> int:
        return self.roll_total - self.excess

    def narration(self) -> str:
        """Text the host shows when the overflow is applied."""
        lines = [
            "Toxicity Overflow!",
            f"Result ({self.roll_total}): {self.tier.label}",
            self.tier.description,
        ]
        if self.damage is not None:
            lines.append(f"Poison damage taken: {self.damage}")
        return "\n".join(lines)


class OverflowEngine:
    """Map an overflow roll onto the severity table.

    The engine keeps no state between calls; identical random sequences
    give identical outcomes.
    """

    def __init__(self, tiers: Sequence[SeverityTier] = SEVERITY_TIERS) -> None:
        self.tiers = validate_severity_table(tiers)

    def tier_for(self, total: int) -> SeverityTier:
        return tier_for_roll(total, self.tiers)

    def resolve(self, excess: int, rng) -> OverflowOutcome:
        """Roll ``1d10 + excess`` and build the matching outcome.

        Args:
            excess: Amount by which toxicity exceeds the limit.
            rng: RandomSource with a ``roll(expression) -> int`` method.

        Raises:
            InvalidAmountError: If ``excess`` is negative.
            ConfigurationError: If no tier matches the total.
        """
        if isinstance(excess, bool) or not isinstance(excess, int) or excess < 0:
            raise InvalidAmountError(f"Excess toxicity must be a non-negative integer, got {excess!r}")
        roll = getattr(rng, "roll", None)
        if not callable(roll):
            raise MissingCollaboratorError("roll")

        total = int(roll(OVERFLOW_DIE)) + excess
        tier = self.tier_for(total)
        damage = None
        if tier.damage is not None:
            damage = int(roll(tier.damage.dice))
        logger.debug(
            "Overflow roll %s (excess %s) -> %s, damage %s",
            total,
            excess,
            tier.label,
            damage,
        )
        return OverflowOutcome(tier=tier, roll_total=total, excess=excess, damage=damage)


__all__ = ["OVERFLOW_DIE", "OverflowOutcome", "OverflowEngine"]
