r"""
Game settings file.

Only the settings the toxicity system and its tests need live here. The
``TOXICITY_*`` values are read once by ``toxicity.conf.load_settings`` when
the server starts; changing them needs a reload.
"""

from pathlib import Path

######################################################################
# Base server config
######################################################################

GAME_DIR = str(Path(__file__).resolve().parent.parent.parent)

SERVERNAME = "MiniMUD the RPG"

SECRET_KEY = "toxicity-dev-only"

INSTALLED_APPS = []

USE_TZ = True

######################################################################
# Toxicity
######################################################################

# Level floor -> highest toxicity a character sustains before overflowing.
# A character uses the entry with the greatest floor not above their level.
TOXICITY_LEVELS = {
    1: 3,
    4: 4,
    8: 5,
    12: 6,
    16: 7,
    20: 8,
}

# Clear accumulated toxicity when a character finishes a long rest.
TOXICITY_RESET_ON_LONG_REST = True

# Name of the flavor table hosts may draw from when an overflow is rolled.
TOXICITY_ROLL_TABLE = "Toxicity Effects"
