"""Dispatch of remote control messages.

A remote display server forwards button presses as short text messages.  Only
three of them are meaningful to the game.
"""

from __future__ import annotations

import logging

from .simulation import FalldownSimulation


LOGGER = logging.getLogger(__name__)

CTL_LEFT = "1"
CTL_RIGHT = "3"
CTL_SPECIAL = "0"


def apply_remote_command(simulation: FalldownSimulation, message: str) -> bool:
    """Apply ``message`` to ``simulation``.

    ``CTL_LEFT`` and ``CTL_RIGHT`` move the player, ``CTL_SPECIAL`` restarts
    the game.  Surrounding whitespace is ignored.

    Returns:
        ``True`` if the message was recognised.
    """

    command = message.strip()
    if command == CTL_LEFT:
        simulation.move_player_left()
        LOGGER.info("Client received message: LEFT")
    elif command == CTL_RIGHT:
        simulation.move_player_right()
        LOGGER.info("Client received message: RIGHT")
    elif command == CTL_SPECIAL:
        simulation.reset_and_purge()
        LOGGER.info("Client received message: SPECIAL")
    else:
        LOGGER.debug("Ignoring unknown message %r", message)
        return False
    return True
