"""Game loop orchestration for TwixT."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class _LoopTask:
    """Internal task representation passed to `update_game`."""

    def __post_init__(self) -> None:
        self.done = object()
        self.again = object()


class GameLoop:
    """Drives the controller update cycle until it signals completion."""

    def __init__(self, controller) -> None:
        self._controller = controller

    def run(self) -> None:
        """Run the game loop until the controller signals completion."""
        while not self._tick():
            pass

    def _tick(self) -> bool:
        task = _LoopTask()
        result = self._controller.update_game(task)
        return result is task.done
