# Constants used across the world.system package

# Highest level a player character can reach.
MAX_LEVEL = 100

# Real seconds between global ticks; timed effects count down once per tick.
SECONDS_PER_TICK = 60

# Ticks a single combat round lasts.
TICKS_PER_ROUND = 1

__all__ = [
    "MAX_LEVEL",
    "SECONDS_PER_TICK",
    "TICKS_PER_ROUND",
]
