from __future__ import annotations

import os
import sys
import threading
from typing import Any, Callable, Dict

from flask import Flask, jsonify, request

# Ensure package imports work when executed directly from repo root
if __package__ in (None, ""):
    sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

try:
    from .game import (  # type: ignore
        Ball,
        Board,
        GameState,
        Pile,
        PileId,
        QR,
        Zertz,
        ZController,
        ObjIndex,
        ObjType,
        DEFAULT_RADIUS,
        check_radius,
    )
except ImportError:
    from game import (  # type: ignore
        Ball,
        Board,
        GameState,
        Pile,
        PileId,
        QR,
        Zertz,
        ZController,
        ObjIndex,
        ObjType,
        DEFAULT_RADIUS,
        check_radius,
    )

DEFAULT_RADIUS_ENV = check_radius(int(os.getenv("ZERTZ_RADIUS", str(DEFAULT_RADIUS))))

app = Flask(__name__)

# One game per process. Flask may serve requests on several threads, so every
# engine call goes through this lock.
_LOCK = threading.Lock()
ENGINE = Zertz(DEFAULT_RADIUS_ENV)
CONTROLLER = ZController(ENGINE)


# ---------- JSON codec ----------

def qr_to_json(pos: QR) -> Dict[str, int]:
    return {"q": int(pos.q), "r": int(pos.r)}


def board_to_json(b: Board) -> Dict[str, Any]:
    cells = []
    for pos in b.coords():
        cell = b.hex(pos)
        cells.append({"q": pos.q, "r": pos.r, "present": cell.present, "occupant": cell.occupant})
    return {"size": int(b.size), "cells": cells}


def ball_to_json(ball: Ball) -> Dict[str, Any]:
    out: Dict[str, Any] = {"id": ball.id, "color": ball.color.value}
    if ball.on_board():
        out["cell"] = qr_to_json(ball.qr())
    else:
        out["pile"] = ball.pile().value
    return out


def pile_to_json(p: Pile) -> Dict[str, Any]:
    return {"id": p.id.value, "balls": list(p.ball_ids)}


def state_to_json(s: GameState) -> Dict[str, Any]:
    return {
        "board": board_to_json(s.board),
        "balls": [ball_to_json(b) for b in s.balls],
        "piles": {p.id.value: pile_to_json(p) for p in s.piles},
    }


def pile_id_from_json(value: Any) -> PileId:
    return PileId(str(value).lower())


def _as_int(value: Any, name: str) -> int:
    # JSON true/false would otherwise pass as 1/0
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return int(value)


def _qr_from_body(body: Dict[str, Any]) -> QR:
    return QR(_as_int(body["q"], "q"), _as_int(body["r"], "r"))


def _obj_from_json(body: Dict[str, Any]) -> ObjIndex:
    kind = ObjType(str(body["type"]).lower())
    if kind is ObjType.BALL:
        return ObjIndex(kind, ball_id=_as_int(body["ball"], "ball"))
    if kind is ObjType.PILE:
        return ObjIndex(kind, pile_id=pile_id_from_json(body["pile"]))
    if kind is ObjType.CELL:
        return ObjIndex(kind, qr=_qr_from_body(body))
    return ObjIndex(kind)


def _snapshot() -> Dict[str, Any]:
    return {"ok": True, "state": state_to_json(ENGINE.latest()), "historySize": ENGINE.history_size}


def _command(parse: Callable[[Dict[str, Any]], Callable[[], bool]]) -> Any:
    """Parses the body into an engine call, runs it under the lock, reports the outcome."""
    body = request.get_json(force=True, silent=True) or {}
    try:
        call = parse(body)
    except Exception as e:
        return jsonify({"ok": False, "error": f"bad request: {e}"}), 400
    with _LOCK:
        ok = call()
        out = _snapshot()
    if not ok:
        out["ok"] = False
        out["error"] = "Illegal move"
        return jsonify(out), 400
    return jsonify(out)


# ---------- Game API ----------

@app.get("/api/state")
def api_state() -> Any:
    with _LOCK:
        return jsonify(_snapshot())


@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        radius = check_radius(_as_int(body.get("radius", DEFAULT_RADIUS_ENV), "radius"))
    except Exception as e:
        return jsonify({"ok": False, "error": f"bad request: {e}"}), 400
    with _LOCK:
        ENGINE.reset(radius)
        CONTROLLER.action.clear()
        return jsonify(_snapshot())


@app.post("/api/move/board")
def api_move_board() -> Any:
    def parse(body: Dict[str, Any]) -> Callable[[], bool]:
        ball_id, to = _as_int(body["ball"], "ball"), _qr_from_body(body)
        return lambda: ENGINE.move_ball_to_board(ball_id, to)
    return _command(parse)


@app.post("/api/move/pile")
def api_move_pile() -> Any:
    def parse(body: Dict[str, Any]) -> Callable[[], bool]:
        ball_id, to = _as_int(body["ball"], "ball"), pile_id_from_json(body["pile"])
        return lambda: ENGINE.move_ball_to_pile(ball_id, to)
    return _command(parse)


@app.post("/api/remove")
def api_remove() -> Any:
    def parse(body: Dict[str, Any]) -> Callable[[], bool]:
        pos = _qr_from_body(body)
        return lambda: ENGINE.remove_cell(pos)
    return _command(parse)


@app.post("/api/undo")
def api_undo() -> Any:
    return _command(lambda body: ENGINE.undo)


@app.post("/api/click")
def api_click() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        idx = _obj_from_json(body)
    except Exception as e:
        return jsonify({"ok": False, "error": f"bad request: {e}"}), 400
    with _LOCK:
        result = CONTROLLER.on_click(idx)
        out = _snapshot()
    out["result"] = result.value
    return jsonify(out)


def main() -> None:
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)


# Entrypoint for "python app.py"
if __name__ == "__main__":
    main()
