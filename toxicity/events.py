"""Signals for toxicity events.

Inbound signals are sent by the game when something happens to a
character; :func:`connect_handler` routes them to a
:class:`~toxicity.handler.ToxicityHandler`. Outbound signals are sent by
the handler after it has acted.
"""

import logging

from django.dispatch import Signal

from .errors import ToxicityError

logger = logging.getLogger(__name__)

#: sent by the game when an entity consumes something with a toxicity value
#: kwargs: entity_id, toxicity_value, entity_level
potion_consumed = Signal()

#: sent by the game when an entity finishes resting
#: kwargs: entity_id, long_rest
rest_completed = Signal()

#: sent after an overflow outcome has been applied
#: kwargs: entity_id, outcome, roll_table
toxicity_overflowed = Signal()

#: sent after an entity's toxicity was reset by a long rest
#: kwargs: entity_id
toxicity_reset = Signal()

_RECEIVERS = {}


def _report(handler, entity_id, err) -> None:
    logger.warning("Toxicity event for %s rejected: %s", entity_id, err)
    warn = getattr(handler.host, "warn", None)
    if callable(warn):
        warn(entity_id, str(err))


def connect_handler(handler) -> None:
    """Wire the inbound signals to ``handler``.

    Toxicity errors raised while handling a signal are logged and passed
    to the host's optional ``warn`` hook instead of propagating.
    """

    def on_consumed(sender=None, entity_id=None, toxicity_value=0, entity_level=1, **kwargs):
        try:
            return handler.on_consume(entity_id, toxicity_value, entity_level)
        except ToxicityError as err:
            _report(handler, entity_id, err)

    def on_rest(sender=None, entity_id=None, long_rest=True, **kwargs):
        try:
            return handler.on_long_rest_completed(entity_id, long_rest=long_rest)
        except ToxicityError as err:
            _report(handler, entity_id, err)

    disconnect_handler(handler)
    potion_consumed.connect(on_consumed, weak=False)
    rest_completed.connect(on_rest, weak=False)
    _RECEIVERS[id(handler)] = (on_consumed, on_rest)


def disconnect_handler(handler) -> None:
    receivers = _RECEIVERS.pop(id(handler), None)
    if not receivers:
        return
    on_consumed, on_rest = receivers
    potion_consumed.disconnect(on_consumed)
    rest_completed.disconnect(on_rest)


__all__ = [
    "potion_consumed",
    "rest_completed",
    "toxicity_overflowed",
    "toxicity_reset",
    "connect_handler",
    "disconnect_handler",
]
