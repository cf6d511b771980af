"""Players."""

from .random_twixt_player import RandomTwixtPlayer
from .replay_twixt_player import ReplayTwixtPlayer
from .twixt_player import TwixtPlayer

__all__ = ["TwixtPlayer", "ReplayTwixtPlayer", "RandomTwixtPlayer"]
