"""
Server startstop hooks

This module contains functions called at various points during the
server's startup and shutdown sequence.

at_server_start()
at_server_stop()
at_server_reload_start()
"""

import logging

from toxicity import ToxicityHandler, load_settings
from toxicity.errors import ConfigurationError
from toxicity.events import connect_handler, disconnect_handler
from world.global_tick import TICK
from world.mechanics.toxicity_host import CharacterHost

logger = logging.getLogger(__name__)

HOST = None
HANDLER = None


def at_server_start(lookup=None):
    """Validate toxicity settings and connect the toxicity handler and tick.

    Bad settings are logged and leave toxicity disabled rather than
    stopping the server.
    """
    global HOST, HANDLER
    at_server_stop()
    try:
        settings = load_settings()
    except ConfigurationError as err:
        logger.error("Toxicity disabled, invalid settings: %s", err)
        return None
    HOST = CharacterHost(lookup=lookup)
    HANDLER = ToxicityHandler(HOST, settings=settings)
    connect_handler(HANDLER)
    TICK.connect(HOST.on_tick)
    logger.info("Toxicity handler connected (roll table %r)", settings.roll_table)
    return HANDLER


def at_server_stop():
    """Disconnect the toxicity handler and tick."""
    global HOST, HANDLER
    if HANDLER is not None:
        disconnect_handler(HANDLER)
        TICK.disconnect(HOST.on_tick)
        logger.info("Toxicity handler disconnected")
    HOST = None
    HANDLER = None


def at_server_reload_start():
    """Re-read settings on reload."""
    lookup = HOST._lookup if HOST is not None else None
    return at_server_start(lookup=lookup)
