"""
Board router - geometria planszy i mapy klawiszy dla renderera.
"""

from fastapi import APIRouter, HTTPException, Query, status
from typing import Any, Dict

from hexmerge.core.board import Board
from hexmerge.core.config_loader import ConfigLoader
from hexmerge.input.keymap import Keymap
from hexmerge.render.text import screen_position


router = APIRouter()

_loader = ConfigLoader()

MAX_DIAMETER = 41


@router.get("/board")
def get_board(diameter: int = Query(11, ge=1, le=MAX_DIAMETER)) -> Dict[str, Any]:
    """
    Zwraca pola planszy o danej średnicy.

    Każde pole ma współrzędne (x, y) i pozycję na ekranie
    [wiersz, kolumna] w połówkach pola.
    """
    board = Board.generate(diameter)
    return {
        "diameter": diameter,
        "radius": board.radius,
        "size": len(board),
        "cells": [
            {
                "coordinate": cell.as_list(),
                "screen": list(screen_position(board, cell)),
            }
            for cell in board.sorted_cells()
        ],
    }


@router.get("/keymaps")
def list_keymaps() -> Dict[str, Any]:
    """Lista dostępnych map klawiszy."""
    return {"keymaps": _loader.get_keymap_names()}


@router.get("/keymaps/{name}")
def get_keymap(name: str) -> Dict[str, Any]:
    """
    Zwraca mapę klawiszy: klawisz -> [oś, kierunek].
    """
    try:
        keymap = Keymap.from_config(_loader.load_keymap(name))
    except KeyError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return {
        "name": name,
        "axes": [a.value for a in keymap.axes],
        "bindings": keymap.to_dict(),
    }
