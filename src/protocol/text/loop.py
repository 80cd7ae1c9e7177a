from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Callable, List, Optional

from ...games.match import DEFAULT_DEPTH, Match
from ...games.registry import available
from ...search.errors import SearchError
from ...search.service import SearchResult, SearchService


logger = logging.getLogger(__name__)

Writer = Callable[[str], None]


@dataclass
class GoParams:
    depth: Optional[int] = None
    movetime_ms: Optional[int] = None


class TextEngine:
    """Line-oriented protocol adapter around the search service.

    Modelled on UCI. Commands: hello, isready, games, newgame <kind>,
    position <kind> [state <text...>] [moves m1 ...], go [depth N] [movetime M], quit.
    Positions and moves use each game's rendered board text.
    """

    def __init__(self, kind: str = "tictactoe") -> None:
        self.match: Match = Match.new(kind)
        self.search = SearchService()
        self.default_depth = DEFAULT_DEPTH

    # ---- Command handlers ----
    def cmd_hello(self, write: Writer) -> None:
        write("id name lazy-minimax")
        write(f"option name Depth type spin default {self.default_depth} min 0 max 64")
        write("hellook")

    def cmd_isready(self, write: Writer) -> None:
        write("readyok")

    def cmd_games(self, write: Writer) -> None:
        write("games " + " ".join(available()))

    def cmd_newgame(self, args: List[str]) -> None:
        kind = args[0] if args else self.match.rules.name
        try:
            self.match = Match.new(kind)
        except KeyError:
            logger.info("ignoring newgame for unknown game %r", kind)

    def cmd_position(self, args: List[str]) -> None:
        # position <kind> [state <text...>] [moves m1 m2 ...]
        if not args:
            return
        idx = 1
        state_tokens: List[str] = []
        if idx < len(args) and args[idx] == "state":
            idx += 1
            while idx < len(args) and args[idx] != "moves":
                state_tokens.append(args[idx])
                idx += 1
        try:
            match = Match.new(args[0], " ".join(state_tokens) or None)
        except (KeyError, ValueError):
            # Keep the previous position on bad input
            return
        if idx < len(args) and args[idx] == "moves":
            for mv in args[idx + 1 :]:
                try:
                    match.apply(mv)
                except ValueError:
                    break
        self.match = match

    def cmd_setoption(self, args: List[str]) -> None:
        # setoption name depth value <n>
        tokens = [a.lower() for a in args]
        if tokens[:2] == ["name", "depth"] and len(tokens) == 4 and tokens[2] == "value":
            try:
                self.default_depth = max(0, min(64, int(tokens[3])))
            except ValueError:
                pass

    def cmd_go(self, args: List[str], write: Writer) -> None:
        params = self._parse_go_args(args)
        depth = params.depth if params.depth is not None else self.default_depth
        try:
            res = self.match.search(depth, params.movetime_ms, service=self.search)
        except SearchError as e:
            write(f"info string {e}")
            write("bestmove (none)")
            return
        self._emit_info(res, write)
        best = self.match.rules.render(res.best_move) if res.best_move is not None else "(none)"
        write(f"bestmove {best}")

    # ---- Utilities ----
    def _parse_go_args(self, args: List[str]) -> GoParams:
        gp = GoParams()
        i = 0
        while i < len(args):
            tok = args[i]
            if tok in ("depth", "movetime") and i + 1 < len(args):
                try:
                    val = int(args[i + 1])
                except ValueError:
                    val = None
                if tok == "depth":
                    gp.depth = val
                else:
                    gp.movetime_ms = val
                i += 2
                continue
            i += 1
        return gp

    def _emit_info(self, res: SearchResult, write: Writer) -> None:
        time_ms = max(0, res.time_ms)
        nps = int(res.nodes * 1000 / max(1, time_ms))
        write(
            f"info depth {res.depth} seldepth {res.seldepth} time {time_ms} nodes {res.nodes} "
            f"leaves {res.leaves} nps {nps} value {res.value}"
        )


def _default_writer(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def run_text(kind: str = "tictactoe") -> None:
    eng = TextEngine(kind)
    for raw in sys.stdin:
        line = raw.strip()
        if not line:
            continue
        parts = line.split()
        cmd, args = parts[0], parts[1:]

        if cmd == "hello":
            eng.cmd_hello(_default_writer)
        elif cmd == "isready":
            eng.cmd_isready(_default_writer)
        elif cmd == "games":
            eng.cmd_games(_default_writer)
        elif cmd == "setoption":
            eng.cmd_setoption(args)
        elif cmd == "newgame":
            eng.cmd_newgame(args)
        elif cmd == "position":
            eng.cmd_position(args)
        elif cmd == "go":
            eng.cmd_go(args, _default_writer)
        elif cmd == "quit":
            break
        # Unknown commands are ignored
