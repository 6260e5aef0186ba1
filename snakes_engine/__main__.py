"""CLI entry point: python -m snakes_engine {show,play,simulate}."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import TextIO

from snakes_engine.autoplay import simulate
from snakes_engine.chart import make_moves_chart
from snakes_engine.config import Difficulty, SessionConfig
from snakes_engine.game import Session
from snakes_engine.inputs import decode_key
from snakes_engine.layout import LAYOUTS
from snakes_engine.render import TextDisplay, apply_effects


def _config_from_args(args: argparse.Namespace, board: int | None = None) -> SessionConfig:
    return SessionConfig(
        board=board if board is not None else args.board,
        difficulty=Difficulty(args.difficulty),
        two_player=args.players == 2,
        seed=args.seed,
    )


def _status(session: Session) -> str:
    parts = [f"P{p.id} {p.position} moves={p.moves}" for p in session.players]
    parts.append(f"dice={session.dice.candidate if session.dice.rolling else session.dice.value}")
    for p in session.players:
        left = session.clock.remaining(p.id)
        if left is not None:
            parts.append(f"P{p.id} time={left / 1000:.1f}s")
    if session.config.two_player:
        parts.append(f"turn=P{session.active}")
    if session.paused:
        parts.append("PAUSED")
    return "  ".join(parts)


# ── show ─────────────────────────────────────────────────────────────

def cmd_show(args: argparse.Namespace) -> None:
    """Print a layout, finish at the top left."""
    session = Session.start(SessionConfig(board=args.board))
    display = TextDisplay()
    apply_effects(display, session.render_all())
    print(f"Layout {args.board}")
    print(display.render())


# ── play ─────────────────────────────────────────────────────────────

def play(session: Session, stdin: TextIO, clock=time.monotonic) -> None:
    """Line-driven play: each line is a run of keys, one event per tick."""
    t0 = clock()
    display = TextDisplay()
    apply_effects(display, session.render_all())

    def now_ms() -> int:
        return int((clock() - t0) * 1000)

    print(display.render())
    print(_status(session))
    for line in stdin:
        keys = line.strip()
        if keys.lower() == "q":
            break
        apply_effects(display, session.tick(now_ms()))
        for char in keys:
            apply_effects(display, session.tick(now_ms(), decode_key(char)))
            if session.over:
                break
        print(display.render())
        print(_status(session))
        if session.over:
            break

    result = session.result
    if result is None:
        print("Game abandoned.")
    elif result.winner is None:
        print(f"GAME OVER: {result.reason} after {result.moves} moves")
    else:
        print(f"GAME OVER: player {result.winner} wins ({result.reason}) after {result.moves} moves")


def cmd_play(args: argparse.Namespace) -> None:
    print("Keys: w/a/s/d nudge, 1/2 step, r roll (again to stop), p pause, q quit.")
    play(Session.start(_config_from_args(args)), sys.stdin)


# ── simulate ─────────────────────────────────────────────────────────

def cmd_simulate(args: argparse.Namespace) -> None:
    """Autoplay sessions on each requested layout and summarise them."""
    boards = args.boards or sorted(LAYOUTS)
    mean_moves: dict[str, float] = {}

    print(f"\nSimulation ({args.sessions} sessions per layout, {args.difficulty}, {args.players}P)")
    print("=" * 60)
    for board in boards:
        summary = simulate(_config_from_args(args, board=board), args.sessions, seed=args.seed)
        label = f"Layout {board}"
        mean_moves[label] = summary.mean_moves
        line = (
            f"  {label:10s} wins={summary.count('win'):4d}"
            f" timeouts={summary.count('timeout'):4d}"
            f" forfeits={summary.count('forfeit'):4d}"
            f" mean moves={summary.mean_moves:6.1f}"
        )
        if args.players == 2:
            line += f" P1/P2={summary.wins_for(1)}/{summary.wins_for(2)}"
        if summary.unfinished:
            line += f" unfinished={summary.unfinished}"
        print(line)

    if args.chart:
        make_moves_chart(mean_moves, output_path=args.chart)
        print(f"Chart saved to {args.chart}")


# ── main ─────────────────────────────────────────────────────────────

def _add_session_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--difficulty", choices=[d.value for d in Difficulty], default="easy")
    p.add_argument("--players", type=int, choices=[1, 2], default=1)
    p.add_argument("--seed", type=int, help="Seed for the dice")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="snakes_engine",
        description="Snakes & Ladders game engine",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log engine events")
    sub = parser.add_subparsers(dest="command")

    p_show = sub.add_parser("show", help="Print a board layout")
    p_show.add_argument("--board", type=int, choices=sorted(LAYOUTS), default=1)

    p_play = sub.add_parser("play", help="Play in the terminal")
    p_play.add_argument("--board", type=int, choices=sorted(LAYOUTS), default=1)
    _add_session_args(p_play)

    p_sim = sub.add_parser("simulate", help="Autoplay sessions and summarise")
    p_sim.add_argument("--sessions", type=int, default=100, help="Sessions per layout (default 100)")
    p_sim.add_argument("--boards", type=int, nargs="*", choices=sorted(LAYOUTS), help="Layouts to simulate")
    p_sim.add_argument("--chart", "-o", help="Write a PNG chart of average moves")
    _add_session_args(p_sim)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "show":
        cmd_show(args)
    elif args.command == "play":
        cmd_play(args)
    elif args.command == "simulate":
        if args.sessions < 1:
            print("--sessions must be at least 1", file=sys.stderr)
            sys.exit(1)
        cmd_simulate(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
