from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class QR:
    """Axial coordinate of a board cell: q is the row, r the column."""
    q: int
    r: int


@dataclass(frozen=True)
class Cell:
    present: bool = False
    occupant: Optional[int] = None  # ball id


@dataclass(frozen=True)
class Board:
    """Square grid of cells with a hexagonal mask. Cells outside the mask are absent for good."""
    size: int
    grid: Tuple[Cell, ...]  # row-major, length == size * size

    @classmethod
    def hexagon(cls, n: int) -> 'Board':
        """Builds a flat-sided hexagon of radius n inside a (2n + 1) square grid."""
        size = 2 * n + 1
        cells: List[Cell] = []
        for q in range(size):
            for r in range(size):
                # The two corners of the square lie outside the hexagon.
                outside = (r < n and q < n - r) or (r > n and q > 3 * n - r)
                cells.append(Cell(present=not outside))
        return cls(size=size, grid=tuple(cells))

    def contains(self, q: int, r: int) -> bool:
        return 0 <= q < self.size and 0 <= r < self.size

    def index(self, q: int, r: int) -> int:
        """Calculates the 1D index for a given row and column."""
        if not self.contains(q, r):
            raise IndexError(f'cell ({q},{r}) is outside a {self.size}x{self.size} board')
        return q * self.size + r

    def cell_at(self, q: int, r: int) -> Cell:
        return self.grid[self.index(q, r)]

    def hex(self, pos: QR) -> Cell:
        return self.cell_at(pos.q, pos.r)

    def with_cell(self, pos: QR, cell: Cell) -> 'Board':
        """Returns a copy of the board with one cell replaced."""
        i = self.index(pos.q, pos.r)
        old = self.grid[i]
        if cell.present and not old.present:
            raise ValueError(f'cell ({pos.q},{pos.r}) was removed and cannot come back')
        if cell.occupant is not None and not cell.present:
            raise ValueError(f'absent cell ({pos.q},{pos.r}) cannot hold a ball')
        grid = list(self.grid)
        grid[i] = cell
        return Board(size=self.size, grid=tuple(grid))

    def coords(self) -> Iterable[QR]:
        for q in range(self.size):
            for r in range(self.size):
                yield QR(q, r)

    def present_coords(self) -> List[QR]:
        return [pos for pos in self.coords() if self.hex(pos).present]

    def pretty(self, labels: Optional[Dict[int, str]] = None) -> str:
        """Text rendering: '.' free cell, ball label (or 'o') for occupied, blank for absent.

        Each row is shifted right by half a cell so the axial skew reads as a hexagon.
        """
        lines: List[str] = []
        for q in range(self.size):
            row: List[str] = []
            for r in range(self.size):
                cell = self.cell_at(q, r)
                if not cell.present:
                    row.append('  ')
                elif cell.occupant is None:
                    row.append(' .')
                else:
                    label = labels.get(cell.occupant, 'o') if labels else 'o'
                    row.append(f'{label:>2}')
            lines.append(' ' * (3 * q // 2) + ' '.join(row).rstrip())
        return '\n'.join(lines)
