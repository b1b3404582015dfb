from __future__ import annotations

import os
from typing import List, Optional

from .board import QR
from .moves import move_ball_to_board, move_ball_to_pile, remove_cell
from .pieces import PileId
from .state import DEFAULT_RADIUS, GameState, initial_state


def _debug_enabled() -> bool:
    return os.getenv('ZERTZ_DEBUG', '0').lower() in ('1', 'true', 'yes', 'on')


class Zertz:
    """
    Owns the game history: a list of snapshots that starts with the initial
    setup and is never empty. Each command validates against latest(), and on
    success appends exactly one new snapshot. A rejected command returns False
    and leaves the history as it was.
    Set ZERTZ_DEBUG=1 to print a trace of every command.
    """

    def __init__(self, n: int = DEFAULT_RADIUS) -> None:
        self.n = n
        self._history: List[GameState] = [initial_state(n)]

    def latest(self) -> GameState:
        return self._history[-1]

    @property
    def history_size(self) -> int:
        return len(self._history)

    def move_ball_to_board(self, ball_id: int, to: QR) -> bool:
        return self._evolve(f'ball {ball_id} -> ({to.q},{to.r})', move_ball_to_board(self.latest(), ball_id, to))

    def move_ball_to_pile(self, ball_id: int, to: PileId) -> bool:
        return self._evolve(f'ball {ball_id} -> {to.value}', move_ball_to_pile(self.latest(), ball_id, to))

    def remove_cell(self, pos: QR) -> bool:
        return self._evolve(f'remove ({pos.q},{pos.r})', remove_cell(self.latest(), pos))

    def undo(self) -> bool:
        if len(self._history) == 1:
            self._trace('undo rejected: only the initial snapshot is left')
            return False
        self._history.pop()
        self._trace(f'undo -> {len(self._history)} snapshot(s)')
        return True

    def reset(self, n: Optional[int] = None) -> None:
        """Starts over from a fresh initial snapshot."""
        n = self.n if n is None else n
        self._history = [initial_state(n)]
        self.n = n
        self._trace(f'reset radius={self.n}')

    def _evolve(self, what: str, new_state: Optional[GameState]) -> bool:
        if new_state is None:
            self._trace(f'{what} rejected')
            return False
        self._history.append(new_state)
        self._trace(f'{what} ok ({len(self._history)} snapshot(s))')
        return True

    def _trace(self, msg: str) -> None:
        if _debug_enabled():
            print(f"[zertz] {msg}")
