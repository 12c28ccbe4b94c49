"""Toxicity accumulation and overflow resolution."""

from .errors import (
    ToxicityError,
    ConfigurationError,
    InvalidAmountError,
    MissingCollaboratorError,
)
from .thresholds import DEFAULT_TOXICITY_LEVELS, ThresholdTable, toxicity_limit
from .ledger import MemoryLedgerStore, ToxicityLedger
from .severity import (
    Duration,
    StatusEffectSpec,
    DamageSpec,
    SeverityTier,
    SEVERITY_TIERS,
    validate_severity_table,
    tier_for_roll,
)
from .overflow import OverflowEngine, OverflowOutcome
from .conf import ToxicitySettings, load_settings
from .handler import ConsumptionResult, ToxicityHandler, ToxicityStatus

__all__ = [
    "ToxicityError",
    "ConfigurationError",
    "InvalidAmountError",
    "MissingCollaboratorError",
    "DEFAULT_TOXICITY_LEVELS",
    "ThresholdTable",
    "toxicity_limit",
    "MemoryLedgerStore",
    "ToxicityLedger",
    "Duration",
    "StatusEffectSpec",
    "DamageSpec",
    "SeverityTier",
    "SEVERITY_TIERS",
    "validate_severity_table",
    "tier_for_roll",
    "OverflowEngine",
    "OverflowOutcome",
    "ToxicitySettings",
    "load_settings",
    "ConsumptionResult",
    "ToxicityHandler",
    "ToxicityStatus",
]
