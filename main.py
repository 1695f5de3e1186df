#!/usr/bin/env python3
"""
HexMerge - 2048 na planszy hexagonalnej - Entry Point
═══════════════════════════════════════════════════════════════════════════

Uruchamia sesję gry w terminalu.

Użycie:
    python main.py                        # Gra interaktywna (q w e / a s d)
    python main.py --seed 12345           # Konkretny seed
    python main.py --diameter 5           # Mniejsza plansza
    python main.py --axes XY              # Plansza dwuosiowa (w a s d)
    python main.py --moves sdsdaq         # Odtwórz ruchy bez interakcji
    python main.py --log output/game.json # Zapisz log zdarzeń

Sterowanie (three_axis):
    q = w lewo-górę   w = w górę   e = w prawo-górę
    a = w lewo-dół    s = w dół    d = w prawo-dół
    x = koniec gry
"""

import argparse
import sys
from typing import Iterable, List, Optional

import yaml

from hexmerge.core.config_loader import ConfigLoader, GameConfig
from hexmerge.core.coordinate import Axis
from hexmerge.events.event_logger import EventLogger, EventType
from hexmerge.input.keymap import Keymap
from hexmerge.render.text import render_board
from hexmerge.session.game import GameSession

QUIT_KEYS = {"x", "quit", "exit"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="HexMerge - 2048 on a hexagonal board",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Ziarno losowości (domyślnie: losowe)"
    )
    parser.add_argument(
        "--diameter",
        type=int,
        default=None,
        help="Średnica planszy (domyślnie z data/defaults.yaml)"
    )
    parser.add_argument(
        "--axes",
        type=str,
        default=None,
        help="Włączone osie, np. XYZ albo XY"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Plik YAML nadpisujący defaults"
    )
    parser.add_argument(
        "--keymap",
        type=str,
        default=None,
        help="Nazwa mapy klawiszy (domyślnie three_axis / two_axis wg osi)"
    )
    parser.add_argument(
        "--moves",
        type=str,
        default=None,
        help="Ciąg klawiszy do wykonania bez interakcji"
    )
    parser.add_argument(
        "--log",
        type=str,
        default=None,
        help="Zapisz log zdarzeń do pliku JSON"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Szczegółowy output"
    )
    return parser


def load_setup(args: argparse.Namespace) -> tuple[GameConfig, Keymap]:
    """
    Buduje konfigurację sesji i mapę klawiszy z argumentów CLI.

    Raises:
        ValueError: Dla niepoprawnej konfiguracji lub mapy niezgodnej z osiami
        KeyError: Dla nieznanej mapy klawiszy
        yaml.YAMLError: Dla pliku --config, który nie jest poprawnym YAML
    """
    loader = ConfigLoader(override_path=args.config)
    axes = list(args.axes) if args.axes else None
    config = loader.load_game_config(
        diameter=args.diameter,
        seed=args.seed,
        axes=axes,
    )

    keymap_name = args.keymap
    if keymap_name is None:
        keymap_name = "three_axis" if Axis.Z in config.axes else "two_axis"
    keymap = Keymap.from_config(loader.load_keymap(keymap_name))
    keymap.check_axes(config.axes)
    return config, keymap


def play(
    session: GameSession,
    keymap: Keymap,
    keys: Iterable[str],
    verbose: bool = False,
) -> int:
    """
    Wykonuje ruchy dla kolejnych klawiszy aż do końca gry.

    Args:
        session: Wystartowana sesja
        keymap: Mapa klawiszy
        keys: Źródło klawiszy (lista albo stdin)
        verbose: Wypisuj planszę po każdym ruchu

    Returns:
        int: Liczba wykonanych (niezablokowanych) ruchów
    """
    applied = 0
    for key in keys:
        key = key.strip()
        if not key:
            continue
        if key.lower() in QUIT_KEYS:
            break
        if key not in keymap:
            print(f"Nieznany klawisz: {key!r}")
            continue

        axis, direction = keymap.resolve(key)
        report = session.apply_move(axis, direction)
        if report.changed:
            applied += 1
        elif verbose:
            print(f"Ruch {axis.value}{direction:+d} zablokowany")

        if verbose:
            print(render_board(session.board, session.registry))
            print()

        if report.terminal:
            break
    return applied


def split_keys(line: str, keymap: Keymap) -> List[str]:
    """
    Dzieli linię na klawisze.

    "sdq" -> [s, d, q]; "up, left" -> [up, left]; "up" -> [up]
    """
    line = line.strip()
    if "," in line or " " in line:
        return [k for k in line.replace(",", " ").split() if k]
    if line in keymap or line.lower() in QUIT_KEYS:
        return [line]
    return list(line)


def _stdin_keys(keymap: Keymap) -> Iterable[str]:
    while True:
        try:
            line = input("> ")
        except EOFError:
            return
        yield from split_keys(line, keymap)


def main(argv: Optional[List[str]] = None) -> int:
    """Główna funkcja."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config, keymap = load_setup(args)
    except (ValueError, KeyError, FileNotFoundError, yaml.YAMLError) as e:
        print(f"Błąd konfiguracji: {e}", file=sys.stderr)
        return 2

    session = GameSession(config)
    logger = EventLogger()
    session.subscribe(logger)
    session.start()

    print("=" * 60)
    print("HEXMERGE")
    print("=" * 60)
    print(f"Seed: {session.rng.seed}")
    print(f"Plansza: średnica {config.diameter}, {len(session.board)} pól")
    print(f"Osie: {', '.join(a.value for a in config.axes)}")
    print("Klawisze: " + " ".join(
        f"{k}={a.value}{d:+d}" for k, (a, d) in keymap.bindings.items()
    ))
    print()
    print(render_board(session.board, session.registry))
    print()

    if args.moves is not None:
        applied = play(session, keymap, split_keys(args.moves, keymap), verbose=args.verbose)
    else:
        applied = play(session, keymap, _stdin_keys(keymap), verbose=True)

    print("=" * 60)
    print("WYNIK")
    print("=" * 60)
    print(render_board(session.board, session.registry))
    print()
    print(f"Ruchy: {session.move_number} (zmieniające planszę: {applied})")
    tiles = session.registry.tiles()
    if tiles:
        print(f"Największa płytka: {max(t.value for t in tiles)}")
    if session.is_terminal:
        print("Plansza pełna - koniec gry!")

    if args.log:
        logger.save(args.log)
        print(f"Log zapisany: {args.log}")

    if args.verbose:
        print()
        print("-" * 60)
        print("STATYSTYKI ZDARZEŃ")
        print("-" * 60)
        print(f"  Zdarzeń łącznie: {logger.get_event_count()}")
        for event_type in EventType:
            count = len(logger.get_events_by_type(event_type))
            if count > 0:
                print(f"  {event_type.name}: {count}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
