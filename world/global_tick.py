"""Global tick broadcaster."""

from django.dispatch import Signal

# ----------------------------------------------------------------------------
# Tick signal
# ----------------------------------------------------------------------------
#
# The game loop sends this once every ``SECONDS_PER_TICK`` seconds. Systems
# with timed state ``connect`` a handler; handlers receive ``sender`` and any
# keyword arguments passed to :func:`send_tick`.

TICK = Signal()


def send_tick(sender=None, **kwargs):
    """Emit one global tick and return the receiver responses."""
    return TICK.send(sender=sender, **kwargs)


__all__ = ["TICK", "send_tick"]
