"""Load toxicity configuration from Django settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import ConfigurationError
from .thresholds import DEFAULT_TOXICITY_LEVELS, ThresholdTable

logger = logging.getLogger(__name__)

DEFAULT_ROLL_TABLE = "Toxicity Effects"


@dataclass(frozen=True)
class ToxicitySettings:
    """Validated, read-only toxicity configuration."""

    thresholds: ThresholdTable
    reset_on_long_rest: bool = True
    roll_table: str = DEFAULT_ROLL_TABLE


def load_settings(source=None) -> ToxicitySettings:
    """Build :class:`ToxicitySettings` from ``source``.

    ``source`` is any object exposing ``TOXICITY_*`` attributes and
    defaults to ``django.conf.settings``. Missing attributes fall back to
    the defaults.

    Raises:
        ConfigurationError: If any value is malformed.
    """
    if source is None:
        from django.conf import settings as source

    levels = getattr(source, "TOXICITY_LEVELS", DEFAULT_TOXICITY_LEVELS)
    thresholds = ThresholdTable(levels)
    if not thresholds:
        raise ConfigurationError("TOXICITY_LEVELS must define at least one level")

    reset = getattr(source, "TOXICITY_RESET_ON_LONG_REST", True)
    if not isinstance(reset, bool):
        raise ConfigurationError(
            f"TOXICITY_RESET_ON_LONG_REST must be a boolean, got {reset!r}"
        )

    roll_table = getattr(source, "TOXICITY_ROLL_TABLE", DEFAULT_ROLL_TABLE)
    if not isinstance(roll_table, str) or not roll_table.strip():
        raise ConfigurationError(
            f"TOXICITY_ROLL_TABLE must be a non-empty string, got {roll_table!r}"
        )

    logger.debug("Loaded toxicity thresholds %s", thresholds.as_dict())
    return ToxicitySettings(
        thresholds=thresholds,
        reset_on_long_rest=reset,
        roll_table=roll_table.strip(),
    )


__all__ = ["DEFAULT_ROLL_TABLE", "ToxicitySettings", "load_settings"]
