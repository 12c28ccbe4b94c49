"""Utility imports for world.system package."""

from . import state_manager
from . import constants

__all__ = ["state_manager", "constants"]
