"""
Zertz core Python package.

Game-state engine for a Zertz-like marble game on a hexagonal board with
removable cells. Everything here is pure logic; app.py and cli.py only read
snapshots and call the engine's commands.
Modules:
- board.py: QR, Cell, Board
- pieces.py: Color, PileId, Ball, Pile
- state.py: GameState, initial_state
- moves.py: move validation and application
- engine.py: Zertz (history + undo)
- controller.py: click-to-command bridge
- cli.py: text-mode driver
"""
