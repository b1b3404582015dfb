from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple, Union

from .board import QR


class Color(Enum):
    WHITE = 'white'
    GREY = 'grey'
    BLACK = 'black'


class PileId(Enum):
    PLAYER1 = 'player1'
    PLAYER2 = 'player2'
    TABLE = 'table'


# A ball sits either in a pile or on a board cell, never both.
Position = Union[PileId, QR]


@dataclass(frozen=True)
class Ball:
    """A marble. Id and color never change; moving a ball produces a new Ball."""
    id: int
    color: Color
    position: Position

    def on_board(self) -> bool:
        return isinstance(self.position, QR)

    def pile(self) -> PileId:
        if not isinstance(self.position, PileId):
            raise ValueError(f'ball {self.id} is on the board, not in a pile')
        return self.position

    def qr(self) -> QR:
        if not isinstance(self.position, QR):
            raise ValueError(f'ball {self.id} is in pile {self.position.value}, not on the board')
        return self.position

    def moved_to(self, position: Position) -> 'Ball':
        return Ball(self.id, self.color, position)


@dataclass(frozen=True)
class Pile:
    """Ordered ball ids with a reverse index (ball id -> position in pile)."""
    id: PileId
    ball_ids: Tuple[int, ...] = ()
    _index: Dict[int, int] = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self) -> None:
        index = {ball_id: i for i, ball_id in enumerate(self.ball_ids)}
        if len(index) != len(self.ball_ids):
            raise ValueError(f'pile {self.id.value} lists a ball twice: {self.ball_ids}')
        object.__setattr__(self, '_index', index)

    def add(self, ball_id: int) -> 'Pile':
        """Returns a pile with ball_id appended at the end."""
        if ball_id in self._index:
            raise ValueError(f'ball {ball_id} is already in pile {self.id.value}')
        return Pile(self.id, self.ball_ids + (ball_id,))

    def remove(self, ball_id: int) -> 'Pile':
        """Returns a pile without ball_id; the rest keep their order."""
        i = self._index.get(ball_id)
        if i is None:
            raise ValueError(f'ball {ball_id} is not in pile {self.id.value}')
        return Pile(self.id, self.ball_ids[:i] + self.ball_ids[i + 1:])

    def index_of(self, ball_id: int) -> Optional[int]:
        return self._index.get(ball_id)

    def __contains__(self, ball_id: object) -> bool:
        return ball_id in self._index

    def __len__(self) -> int:
        return len(self.ball_ids)

    def __iter__(self) -> Iterator[int]:
        return iter(self.ball_ids)
