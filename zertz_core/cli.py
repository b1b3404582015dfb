from __future__ import annotations

import argparse
import sys
from typing import Dict, Iterable, Iterator, List, Optional, TextIO

from .board import QR
from .engine import Zertz
from .moves import balls_in, balls_on_board, free_cells
from .pieces import Color, PileId
from .state import DEFAULT_RADIUS, MAX_RADIUS, GameState, check_radius

HELP = """Commands:
  show                      print the board and piles
  place BALL Q R            put a ball on cell (Q,R)
  pile BALL player1|player2|table
                            move a ball to a pile
  remove Q R                take an empty cell off the board
  undo                      take back the last command
  quit                      leave"""

_COLOR_LETTER = {Color.WHITE: 'w', Color.GREY: 'g', Color.BLACK: 'b'}


def ball_labels(state: GameState) -> Dict[int, str]:
    return {b.id: _COLOR_LETTER[b.color] for b in state.balls}


def render(state: GameState) -> str:
    lines: List[str] = [state.board.pretty(ball_labels(state)), '']
    for pid in PileId:
        ids = ' '.join(f'{b.id}{_COLOR_LETTER[b.color]}' for b in balls_in(state, pid))
        lines.append(f'{pid.value:>8}: {ids}')
    placed = ' '.join(f'{b.id}{_COLOR_LETTER[b.color]}@{b.qr().q},{b.qr().r}' for b in balls_on_board(state))
    lines.append(f'{"board":>8}: {placed}')
    lines.append(f'{"free":>8}: {len(free_cells(state))} cell(s)')
    return '\n'.join(lines)


def parse_pile(text: str) -> PileId:
    try:
        return PileId(text.strip().lower())
    except ValueError:
        raise ValueError(f'unknown pile {text!r}') from None


def run_command(zertz: Zertz, words: List[str]) -> Optional[bool]:
    """Applies one parsed command. Returns the engine's verdict, or None for show/help."""
    cmd = words[0].lower()
    if cmd == 'place':
        _, ball, q, r = words
        return zertz.move_ball_to_board(int(ball), QR(int(q), int(r)))
    if cmd == 'pile':
        _, ball, pile = words
        return zertz.move_ball_to_pile(int(ball), parse_pile(pile))
    if cmd == 'remove':
        _, q, r = words
        return zertz.remove_cell(QR(int(q), int(r)))
    if cmd == 'undo' and len(words) == 1:
        return zertz.undo()
    if cmd in ('show', 'help') and len(words) == 1:
        return None
    raise ValueError(f'unknown command {cmd!r}')


def play(zertz: Zertz, lines: Iterable[str], out: Optional[TextIO] = None, prompt: bool = False) -> None:
    if out is None:
        out = sys.stdout
    print(render(zertz.latest()), file=out)
    for text in _prompted(lines, out, prompt):
        words = text.split()
        if not words or words[0].startswith('#'):
            continue
        if words[0].lower() in ('quit', 'exit'):
            break
        try:
            verdict = run_command(zertz, words)
        except ValueError:
            print('Could not parse. Try again.', file=out)
            continue
        if words[0].lower() == 'help':
            print(HELP, file=out)
        elif verdict is False:
            print('Illegal move.', file=out)
        else:
            print(render(zertz.latest()), file=out)


def _prompted(lines: Iterable[str], out: TextIO, prompt: bool) -> Iterator[str]:
    if prompt:
        print('> ', end='', file=out, flush=True)
    for text in lines:
        yield text
        if prompt:
            print('> ', end='', file=out, flush=True)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Zertz board in the terminal')
    parser.add_argument('--radius', type=int, default=DEFAULT_RADIUS, help='Board radius N (board is 2N+1 across)')
    parser.add_argument('--script', default=None, help='Read commands from a file instead of stdin')
    args = parser.parse_args(argv)
    try:
        check_radius(args.radius)
    except ValueError:
        parser.error(f'--radius must be between 1 and {MAX_RADIUS}')

    zertz = Zertz(args.radius)
    if args.script:
        with open(args.script, encoding='utf-8') as fh:
            play(zertz, fh)
        return
    print(HELP)
    play(zertz, sys.stdin, prompt=sys.stdin.isatty())
