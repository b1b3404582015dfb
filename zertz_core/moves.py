from __future__ import annotations

from typing import List, Optional

from .board import Cell, QR
from .pieces import Ball, PileId
from .state import GameState


def _lift(state: GameState, ball: Ball) -> GameState:
    """Takes a ball off its current cell or out of its current pile."""
    if ball.on_board():
        pos = ball.qr()
        return state.with_board(state.board.with_cell(pos, Cell(present=True)))
    return state.with_pile(state.pile(ball.pile()).remove(ball.id))


def move_ball_to_board(state: GameState, ball_id: int, to: QR) -> Optional[GameState]:
    """Places a ball on a present, empty cell. Returns None if the move is illegal."""
    if not state.has_ball(ball_id) or not state.board.contains(to.q, to.r):
        return None
    dest = state.board.hex(to)
    if not dest.present or dest.occupant is not None:
        return None
    ball = state.ball(ball_id)
    next_state = _lift(state, ball)
    next_state = next_state.with_board(next_state.board.with_cell(to, Cell(present=True, occupant=ball_id)))
    return next_state.with_ball(ball.moved_to(to))


def move_ball_to_pile(state: GameState, ball_id: int, to: PileId) -> Optional[GameState]:
    """Puts a ball at the end of a pile. Moving a ball into the pile it is already in is illegal."""
    if not state.has_ball(ball_id):
        return None
    ball = state.ball(ball_id)
    if not ball.on_board() and ball.pile() == to:
        return None
    next_state = _lift(state, ball)
    next_state = next_state.with_pile(next_state.pile(to).add(ball_id))
    return next_state.with_ball(ball.moved_to(to))


def remove_cell(state: GameState, pos: QR) -> Optional[GameState]:
    """Takes an empty cell off the board for good."""
    if not state.board.contains(pos.q, pos.r):
        return None
    cell = state.board.hex(pos)
    if not cell.present or cell.occupant is not None:
        return None
    return state.with_board(state.board.with_cell(pos, Cell(present=False)))


def free_cells(state: GameState) -> List[QR]:
    """Cells a ball can be placed on."""
    return [pos for pos in state.board.present_coords() if state.board.hex(pos).occupant is None]


def balls_in(state: GameState, pile_id: PileId) -> List[Ball]:
    return [state.ball(ball_id) for ball_id in state.pile(pile_id)]


def balls_on_board(state: GameState) -> List[Ball]:
    return [b for b in state.balls if b.on_board()]
