"""Controller module for TwixT.

Contains the game controller, session and logger.
"""

from controller.twixt_game_controller import TwixtGameController

__all__ = ["TwixtGameController"]
