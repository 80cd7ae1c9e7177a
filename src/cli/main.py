from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import uvicorn

from ..games.match import DEFAULT_DEPTH, Match
from ..games.registry import available
from ..protocol.text.loop import run_text
from ..search.errors import SearchError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazy-minimax", description="Minimax over lazily generated game trees"
    )
    parser.add_argument(
        "--log-level", default="INFO", help="Logging level (default: INFO)"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)

    text = sub.add_parser("text", help="Run the line protocol on stdin/stdout")
    text.add_argument("--game", choices=available(), default="tictactoe")

    search = sub.add_parser("search", help="Search one position and print the result")
    search.add_argument("--game", choices=available(), default="tictactoe")
    search.add_argument("--position", default=None, help="Position text (default: initial)")
    search.add_argument(
        "--depth", type=int, default=DEFAULT_DEPTH, help=f"Plies to search (default: {DEFAULT_DEPTH})"
    )
    search.add_argument("--movetime", type=int, default=None, help="Soft time limit in ms")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.INFO))

    if args.command == "serve":
        uvicorn.run(
            "src.protocol.http.app:create_app", factory=True, host=args.host, port=args.port
        )
    elif args.command == "text":
        run_text(args.game)
    elif args.command == "search":
        try:
            match = Match.new(args.game, args.position)
            res = match.search(depth=args.depth, movetime_ms=args.movetime)
        except (ValueError, SearchError) as e:
            parser.error(str(e))
        best = match.rules.render(res.best_move) if res.best_move is not None else "(none)"
        print(
            f"bestmove={best} value={res.value} depth={res.depth} nodes={res.nodes} "
            f"leaves={res.leaves} time_ms={res.time_ms} complete={res.complete}"
        )


if __name__ == "__main__":
    main()
