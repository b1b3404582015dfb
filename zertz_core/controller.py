from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .board import QR
from .engine import Zertz
from .pieces import PileId


class ObjType(Enum):
    BALL = 'ball'
    PILE = 'pile'
    CELL = 'cell'
    UNDO_BUTTON = 'undo'


@dataclass(frozen=True)
class ObjIndex:
    """Something the user clicked on."""
    type: ObjType
    qr: Optional[QR] = None
    ball_id: Optional[int] = None
    pile_id: Optional[PileId] = None

    def get_qr(self) -> QR:
        if self.type is not ObjType.CELL or self.qr is None:
            raise ValueError(f'{self.type.value} click carries no cell')
        return self.qr

    def get_ball_id(self) -> int:
        if self.type is not ObjType.BALL or self.ball_id is None:
            raise ValueError(f'{self.type.value} click carries no ball')
        return self.ball_id

    def get_pile_id(self) -> PileId:
        if self.type is not ObjType.PILE or self.pile_id is None:
            raise ValueError(f'{self.type.value} click carries no pile')
        return self.pile_id


class ActionResult(Enum):
    SELECTED = 'selected'
    SUCCESS = 'success'
    FAIL = 'fail'


@dataclass
class Action:
    src: Optional[ObjIndex] = None
    dst: Optional[ObjIndex] = None

    def push(self, idx: ObjIndex) -> None:
        if self.src is None:
            self.src = idx
        else:
            self.dst = idx

    def clear(self) -> None:
        self.src = None
        self.dst = None

    def is_full(self) -> bool:
        return self.src is not None and self.dst is not None


class ZController:
    """Turns pairs of clicks (source, destination) into engine commands.

    Clicking the same cell twice removes it; that gesture is a UI convention
    and the engine itself accepts removal of any present, empty cell.
    """

    def __init__(self, zertz: Zertz) -> None:
        self.zertz = zertz
        self.action = Action()

    def on_click(self, idx: ObjIndex) -> ActionResult:
        if idx.type is ObjType.UNDO_BUTTON:
            self.action.clear()
            return self._result(self.zertz.undo())

        self.action.push(idx)
        if not self.action.is_full():
            return ActionResult.SELECTED
        try:
            return self._apply()
        finally:
            self.action.clear()

    def _apply(self) -> ActionResult:
        src = self.action.src
        dst = self.action.dst
        if src is None or dst is None:
            return ActionResult.FAIL
        if src.type is ObjType.BALL:
            if dst.type is ObjType.CELL:
                return self._result(self.zertz.move_ball_to_board(src.get_ball_id(), dst.get_qr()))
            if dst.type is ObjType.PILE:
                return self._result(self.zertz.move_ball_to_pile(src.get_ball_id(), dst.get_pile_id()))
            return ActionResult.FAIL
        if src.type is ObjType.CELL:
            if dst.type is ObjType.CELL and src.get_qr() == dst.get_qr():
                return self._result(self.zertz.remove_cell(src.get_qr()))
            return ActionResult.FAIL
        # Piles are only ever destinations.
        return ActionResult.FAIL

    @staticmethod
    def _result(is_success: bool) -> ActionResult:
        return ActionResult.SUCCESS if is_success else ActionResult.FAIL
