from __future__ import annotations

# Facade module that re-exports Zertz core functionality.
# The Flask app and tests import from here; single-responsibility modules
# live under zertz_core/*.

# Prefer relative imports when loaded as part of a package, then the installed package.
try:
    from .zertz_core.board import Board, Cell, QR  # type: ignore
    from .zertz_core.pieces import Ball, Color, Pile, PileId, Position  # type: ignore
    from .zertz_core.state import (  # type: ignore
        BALL_SUPPLY,
        DEFAULT_RADIUS,
        MAX_RADIUS,
        GameState,
        check_radius,
        initial_state,
    )
    from .zertz_core.moves import (  # type: ignore
        move_ball_to_board,
        move_ball_to_pile,
        remove_cell,
        free_cells,
        balls_in,
        balls_on_board,
    )
    from .zertz_core.engine import Zertz  # type: ignore
    from .zertz_core.controller import (  # type: ignore
        Action,
        ActionResult,
        ObjIndex,
        ObjType,
        ZController,
    )
except ImportError:
    from zertz_core.board import Board, Cell, QR  # type: ignore
    from zertz_core.pieces import Ball, Color, Pile, PileId, Position  # type: ignore
    from zertz_core.state import (  # type: ignore
        BALL_SUPPLY,
        DEFAULT_RADIUS,
        MAX_RADIUS,
        GameState,
        check_radius,
        initial_state,
    )
    from zertz_core.moves import (  # type: ignore
        move_ball_to_board,
        move_ball_to_pile,
        remove_cell,
        free_cells,
        balls_in,
        balls_on_board,
    )
    from zertz_core.engine import Zertz  # type: ignore
    from zertz_core.controller import (  # type: ignore
        Action,
        ActionResult,
        ObjIndex,
        ObjType,
        ZController,
    )


def main() -> None:
    # CLI driver delegated to zertz_core.cli
    try:
        from .zertz_core.cli import main as _main  # type: ignore
    except ImportError:
        from zertz_core.cli import main as _main  # type: ignore
    _main()


if __name__ == '__main__':
    main()
