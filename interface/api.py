"""FastAPI REST interface for the engine."""

import threading

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Optional

from reversi.config import CONFIG
from reversi.core.board import OutOfRangeError
from reversi.main import Engine, parse_color

app = FastAPI(title=CONFIG.ui.engine_name, version="1.0.0")

# Shared engine instance (keeps search metrics across requests).
engine = Engine()
_board_lock = threading.Lock()


class MoveRequest(BaseModel):
    move: int  # cell index 0..63, row-major


class SearchRequest(BaseModel):
    playouts: Optional[int] = None
    play: bool = False  # apply the chosen move


class ResetRequest(BaseModel):
    first: Optional[str] = None  # "light" or "dark"


def _board_state():
    board = engine.board
    light, dark = board.score()
    over = board.is_game_over()
    return {
        "cells": list(board.cells),
        "turn": board.turn.name.lower(),
        "legal_moves": board.legal_moves(),
        "score": {"light": light, "dark": dark},
        "is_game_over": over,
        "result": engine.winner().value if over else None,
    }


@app.get("/board")
def get_board():
    with _board_lock:
        return _board_state()


@app.post("/move")
def make_move(req: MoveRequest):
    with _board_lock:
        try:
            legal = engine.make_move(req.move)
        except OutOfRangeError as e:
            raise HTTPException(status_code=400, detail=str(e))
        if not legal:
            raise HTTPException(status_code=400, detail=f"Illegal move: {req.move}")
        return {"move": req.move, **_board_state()}


@app.post("/pass")
def pass_turn():
    with _board_lock:
        if engine.legal_moves():
            raise HTTPException(status_code=400, detail="Cannot pass while a legal move exists")
        engine.pass_turn()
        return _board_state()


@app.post("/search")
def search_move(req: SearchRequest = SearchRequest()):
    with _board_lock:
        if engine.is_game_over():
            raise HTTPException(status_code=400, detail="Game is already over")
        search_board = engine.board.copy()

    # Per-request budget; the engine serializes searches and returns each report.
    report = engine.search.search(search_board, playouts=req.playouts)
    best = report.best_move

    played = False
    if req.play and best is not None:
        with _board_lock:
            # the board may have moved on while we were searching
            if engine.board == search_board:
                played = engine.make_move(best)

    return {
        "best_move": best,
        "score": report.best_score,
        "rollouts": report.total_rollouts,
        "elapsed": report.elapsed,
        "played": played,
    }


@app.get("/metrics")
def get_metrics():
    return {
        "avg_rollouts_per_second": engine.get_average_rollouts_per_second(),
        "avg_search_seconds": engine.get_average_search_seconds(),
    }


@app.post("/reset")
def reset_board(req: ResetRequest = ResetRequest()):
    with _board_lock:
        try:
            first = parse_color(req.first or CONFIG.game.first_mover)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        engine.new_game(first)
        return _board_state()
