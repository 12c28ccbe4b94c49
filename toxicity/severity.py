"""Severity tiers for toxicity overflow.

Each tier covers an inclusive range of overflow roll totals and carries the
conditions and damage that a roll in that range inflicts. The table below
is fixed; hosts receive it through :class:`~toxicity.overflow.OverflowOutcome`
and never mutate it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from combat.damage_types import DamageType

from .errors import ConfigurationError


@dataclass(frozen=True)
class Duration:
    """How long a status effect lasts.

    Exactly one of ``rounds`` or ``seconds`` may be set. With neither set
    the effect is indefinite and lasts until removed by other means.
    """

    rounds: Optional[int] = None
    seconds: Optional[int] = None

    def __post_init__(self):
        if self.rounds is not None and self.seconds is not None:
            raise ConfigurationError("A duration is either rounds or seconds, not both")
        for value in (self.rounds, self.seconds):
            if value is not None and value <= 0:
                raise ConfigurationError(f"Duration must be positive, got {value}")

    @property
    def indefinite(self) -> bool:
        return self.rounds is None and self.seconds is None

    def __str__(self) -> str:
        if self.rounds is not None:
            return f"{self.rounds} round" + ("s" if self.rounds != 1 else "")
        if self.seconds is not None:
            return f"{self.seconds} seconds"
        return "indefinite"


ONE_ROUND = Duration(rounds=1)
ONE_HOUR = Duration(seconds=3600)
INDEFINITE = Duration()


@dataclass(frozen=True)
class StatusEffectSpec:
    """A condition to place on an entity."""

    label: str
    icon: str
    statuses: Tuple[str, ...] = ()
    duration: Duration = INDEFINITE
    mods: Tuple[Tuple[str, int], ...] = ()

    @property
    def key(self) -> str:
        """Identifier used when the host stores the effect."""
        if self.statuses:
            return self.statuses[0]
        return self.label.lower().replace(" ", "_")


@dataclass(frozen=True)
class DamageSpec:
    """Dice to roll for damage and the kind of damage dealt."""

    dice: str
    damage_type: DamageType = DamageType.POISON


@dataclass(frozen=True)
class SeverityTier:
    """One bracket of the overflow table. ``high`` of None is unbounded."""

    low: int
    high: Optional[int]
    label: str
    description: str
    effects: Tuple[StatusEffectSpec, ...] = ()
    damage: Optional[DamageSpec] = None

    def matches(self, total: int) -> bool:
        if total < self.low:
            return False
        return self.high is None or total <= self.high

    @property
    def range_label(self) -> str:
        if self.high is None:
            return f"{self.low}+"
        if self.low == self.high:
            return str(self.low)
        return f"{self.low}-{self.high}"


_POISON_ICON = "icons/svg/poison.svg"


def _poisoned(duration: Duration = ONE_ROUND) -> StatusEffectSpec:
    return StatusEffectSpec("Poisoned", _POISON_ICON, ("poisoned",), duration)


SEVERITY_TIERS: Tuple[SeverityTier, ...] = (
    SeverityTier(
        1,
        3,
        "Minor Discomfort",
        "Minor discomfort, no mechanical effect.",
    ),
    SeverityTier(
        4,
        4,
        "Mild Impairment",
        "-1 to ability checks and attack rolls for 1 hour.",
        effects=(
            StatusEffectSpec(
                "Mild Impairment",
                _POISON_ICON,
                duration=ONE_HOUR,
                mods=(("ability_checks", -1), ("attack_rolls", -1)),
            ),
        ),
    ),
    SeverityTier(
        5,
        7,
        "Moderate Poisoning",
        "Poisoned for 1 round and 1d6 poison damage.",
        effects=(_poisoned(),),
        damage=DamageSpec("1d6"),
    ),
    SeverityTier(
        8,
        9,
        "Severe Reaction",
        "Incapacitated and poisoned for 1 round and 2d6 poison damage.",
        effects=(
            StatusEffectSpec(
                "Incapacitated", "icons/svg/paralysis.svg", ("incapacitated",), ONE_ROUND
            ),
            _poisoned(),
        ),
        damage=DamageSpec("2d6"),
    ),
    SeverityTier(
        10,
        11,
        "Critical Impairment",
        "Unconscious, prone and poisoned for 1 round and 3d6 poison damage.",
        effects=(
            StatusEffectSpec(
                "Unconscious", "icons/svg/unconscious.svg", ("unconscious",), ONE_ROUND
            ),
            StatusEffectSpec("Prone", "icons/svg/falling.svg", ("prone",), ONE_ROUND),
            _poisoned(),
        ),
        damage=DamageSpec("3d6"),
    ),
    SeverityTier(
        12,
        None,
        "Catastrophic Overdose",
        "Comatose and poisoned until treated, and 3d6 poison damage.",
        effects=(
            StatusEffectSpec("Comatose", "icons/svg/unconscious.svg", ("unconscious",)),
            _poisoned(INDEFINITE),
        ),
        damage=DamageSpec("3d6"),
    ),
)


def validate_severity_table(tiers: Sequence[SeverityTier]) -> Tuple[SeverityTier, ...]:
    """Check that ``tiers`` partition the positive integers in order.

    Returns the tiers as a tuple. Raises ConfigurationError on gaps,
    overlaps, descending ranges or a bounded final tier.
    """
    tiers = tuple(tiers)
    if not tiers:
        raise ConfigurationError("Severity table is empty")
    expected_low = 1
    for index, tier in enumerate(tiers):
        last = index == len(tiers) - 1
        if tier.low != expected_low:
            raise ConfigurationError(
                f"Tier {tier.label!r} starts at {tier.low}, expected {expected_low}"
            )
        if tier.high is None:
            if not last:
                raise ConfigurationError(
                    f"Only the last tier may be unbounded, not {tier.label!r}"
                )
            continue
        if tier.high < tier.low:
            raise ConfigurationError(
                f"Tier {tier.label!r} has an empty range {tier.low}-{tier.high}"
            )
        if last:
            raise ConfigurationError(
                f"Last tier {tier.label!r} must be unbounded, ends at {tier.high}"
            )
        expected_low = tier.high + 1
    return tiers


def tier_for_roll(total: int, tiers: Sequence[SeverityTier] = SEVERITY_TIERS) -> SeverityTier:
    """Return the tier whose range contains ``total``."""
    for tier in tiers:
        if tier.matches(total):
            return tier
    raise ConfigurationError(f"No severity tier covers roll total {total}")


__all__ = [
    "Duration",
    "ONE_ROUND",
    "ONE_HOUR",
    "INDEFINITE",
    "StatusEffectSpec",
    "DamageSpec",
    "SeverityTier",
    "SEVERITY_TIERS",
    "validate_severity_table",
    "tier_for_roll",
]
