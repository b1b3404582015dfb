from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from .board import Board
from .pieces import Ball, Color, Pile, PileId

# Marble supply, in ball-id order.
BALL_SUPPLY: Tuple[Tuple[Color, int], ...] = (
    (Color.WHITE, 6),
    (Color.GREY, 8),
    (Color.BLACK, 10),
)
DEFAULT_RADIUS = 3
# Largest board radius accepted from callers.
MAX_RADIUS = 10


@dataclass(frozen=True)
class GameState:
    """One snapshot of the game: the board, every ball, and the three piles.

    Snapshots are never changed in place; the with_* helpers return copies.
    """
    board: Board
    balls: Tuple[Ball, ...]  # indexed by ball id
    piles: Tuple[Pile, ...]  # one per PileId, in PileId order

    def has_ball(self, ball_id: int) -> bool:
        return 0 <= ball_id < len(self.balls)

    def ball(self, ball_id: int) -> Ball:
        return self.balls[ball_id]

    def pile(self, pile_id: PileId) -> Pile:
        return self.piles[_PILE_ORDER[pile_id]]

    def pile_map(self) -> Dict[PileId, Pile]:
        return {p.id: p for p in self.piles}

    def with_board(self, board: Board) -> 'GameState':
        return GameState(board, self.balls, self.piles)

    def with_ball(self, ball: Ball) -> 'GameState':
        balls = list(self.balls)
        balls[ball.id] = ball
        return GameState(self.board, tuple(balls), self.piles)

    def with_pile(self, pile: Pile) -> 'GameState':
        piles = list(self.piles)
        piles[_PILE_ORDER[pile.id]] = pile
        return GameState(self.board, self.balls, tuple(piles))

    def check_invariants(self) -> None:
        """Raises ValueError naming the first broken invariant, if any."""
        seen: Dict[int, str] = {}
        for pile in self.piles:
            for i, ball_id in enumerate(pile.ball_ids):
                if pile.index_of(ball_id) != i:
                    raise ValueError(f'pile {pile.id.value}: index of ball {ball_id} is stale')
                if ball_id in seen:
                    raise ValueError(f'ball {ball_id} is in {seen[ball_id]} and pile {pile.id.value}')
                seen[ball_id] = f'pile {pile.id.value}'
                if self.ball(ball_id).position != pile.id:
                    raise ValueError(f'ball {ball_id} is listed in pile {pile.id.value} but positioned elsewhere')
        for pos in self.board.coords():
            cell = self.board.hex(pos)
            if cell.occupant is None:
                continue
            if not cell.present:
                raise ValueError(f'absent cell ({pos.q},{pos.r}) holds ball {cell.occupant}')
            if cell.occupant in seen:
                raise ValueError(f'ball {cell.occupant} is in {seen[cell.occupant]} and on ({pos.q},{pos.r})')
            seen[cell.occupant] = f'cell ({pos.q},{pos.r})'
            if self.ball(cell.occupant).position != pos:
                raise ValueError(f'cell ({pos.q},{pos.r}) holds ball {cell.occupant} positioned elsewhere')
        missing = [b.id for b in self.balls if b.id not in seen]
        if missing:
            raise ValueError(f'balls neither in a pile nor on the board: {missing}')


_PILE_ORDER: Dict[PileId, int] = {pid: i for i, pid in enumerate(PileId)}


def check_radius(n: int) -> int:
    """Returns n if it is a usable board radius, else raises ValueError."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise ValueError(f'radius must be an integer, got {n!r}')
    if not 1 <= n <= MAX_RADIUS:
        raise ValueError(f'radius must be between 1 and {MAX_RADIUS}, got {n}')
    return n


def initial_state(n: int = DEFAULT_RADIUS) -> GameState:
    """Hexagon board of radius n, all marbles on the table, both player piles empty."""
    check_radius(n)
    balls: List[Ball] = []
    for color, count in BALL_SUPPLY:
        for _ in range(count):
            balls.append(Ball(len(balls), color, PileId.TABLE))
    piles = tuple(
        Pile(pid, tuple(b.id for b in balls) if pid is PileId.TABLE else ())
        for pid in PileId
    )
    return GameState(board=Board.hexagon(n), balls=tuple(balls), piles=piles)
