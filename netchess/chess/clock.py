"""
Per-turn countdown clock.

Only the side on turn loses time. Every committed move resets the mover's counter to the full budget.
Running out of time is final: the clock stops and never ticks again.
"""

from dataclasses import dataclass, field
from typing import Optional

from netchess.chess.pieces import Color


@dataclass
class TurnClock:
    budget: int
    active: Color = Color.WHITE
    stopped: bool = False
    _remaining: dict[Color, int] = field(init=False)

    def __post_init__(self) -> None:
        self._remaining = {color: self.budget for color in Color}

    def remaining(self, color: Color) -> int:
        return self._remaining[color]

    def snapshot(self) -> dict[Color, int]:
        return dict(self._remaining)

    def tick(self) -> Optional[Color]:
        """One second passes for the active color. Returns that color if its time just ran out."""
        if self.stopped:
            return None

        self._remaining[self.active] = max(self._remaining[self.active] - 1, 0)
        if self._remaining[self.active] == 0:
            self.stop()
            return self.active
        return None

    def switch_turn(self, mover: Color) -> None:
        """`mover` just completed a move: their counter is refilled, the opponent's time starts running."""
        if self.stopped:
            return
        self._remaining[mover] = self.budget
        self.active = mover.opponent

    def stop(self) -> None:
        self.stopped = True
