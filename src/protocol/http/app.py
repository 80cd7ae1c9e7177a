from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field

from .error import (
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
    search_error_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemorySessionStore
from ...games.match import DEFAULT_DEPTH, Match
from ...games.registry import available
from ...search.errors import SearchError
from ...search.service import SearchResult


logger = logging.getLogger(__name__)

# Plain minimax has no transposition table; keep HTTP searches bounded
MAX_HTTP_DEPTH = 12


class CreateGameRequest(BaseModel):
    kind: str = Field(..., description="Game name, e.g. tictactoe or nim")
    position: Optional[str] = Field(default=None, description="Starting position text")


class CreateGameResponse(BaseModel):
    game_id: str
    kind: str
    position: str


class SetPositionRequest(BaseModel):
    position: str = Field(..., description="Position text in the game's notation")


class MoveRequest(BaseModel):
    move: str = Field(..., description="Position reached by the move")


class SearchRequest(BaseModel):
    depth: int = Field(default=DEFAULT_DEPTH, ge=0, le=MAX_HTTP_DEPTH)
    movetime_ms: Optional[int] = Field(default=None, ge=1)


class AnalyzeRequest(BaseModel):
    kind: str
    position: Optional[str] = None
    # No lower bound here: negative depths reach the engine and surface as InvalidDepth
    depth: int = Field(default=DEFAULT_DEPTH, le=MAX_HTTP_DEPTH)
    movetime_ms: Optional[int] = Field(default=None, ge=1)


class GameState(BaseModel):
    game_id: str
    kind: str
    position: str
    to_move: str
    legal_moves: List[str]
    terminal: bool
    history: List[str]


def create_app() -> FastAPI:
    app = FastAPI(title="Lazy Minimax API", version="0.1.0")

    logging.basicConfig(level=logging.INFO)

    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(SearchError, search_error_handler)
    app.add_exception_handler(Exception, exception_handler)

    store = InMemorySessionStore()

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/games/kinds")
    async def kinds() -> Dict[str, List[str]]:
        return {"kinds": available()}

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game(req: CreateGameRequest) -> CreateGameResponse:
        match = _new_match(req.kind, req.position)
        game_id = store.create(match)
        logger.info("created %s game %s", match.rules.name, game_id)
        return CreateGameResponse(game_id=game_id, kind=match.rules.name, position=match.render())

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    async def get_state(game_id: str) -> GameState:
        return _state(game_id, _require_match(store, game_id))

    @app.post("/api/games/{game_id}/position", response_model=GameState)
    async def set_position(game_id: str, req: SetPositionRequest) -> GameState:
        match = _require_match(store, game_id)
        try:
            match.set_position(req.position)
        except ValueError:
            raise HTTPException(status_code=400, detail="invalid position")
        return _state(game_id, match)

    @app.post("/api/games/{game_id}/move", response_model=GameState)
    async def make_move(game_id: str, req: MoveRequest) -> GameState:
        match = _require_match(store, game_id)
        try:
            match.apply(req.move)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _state(game_id, match)

    @app.post("/api/games/{game_id}/undo", response_model=GameState)
    async def undo(game_id: str) -> GameState:
        match = _require_match(store, game_id)
        try:
            match.undo()
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _state(game_id, match)

    @app.delete("/api/games/{game_id}")
    async def delete_game(game_id: str) -> Dict[str, bool]:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        return {"deleted": True}

    @app.post("/api/games/{game_id}/search")
    async def search(game_id: str, req: SearchRequest) -> Dict[str, Any]:
        match = _require_match(store, game_id)
        return _result(match, match.search(depth=req.depth, movetime_ms=req.movetime_ms))

    @app.post("/api/search")
    async def analyze(req: AnalyzeRequest) -> Dict[str, Any]:
        match = _new_match(req.kind, req.position)
        return _result(match, match.search(depth=req.depth, movetime_ms=req.movetime_ms))

    return app


def _new_match(kind: str, position: Optional[str]) -> Match:
    try:
        return Match.new(kind, position)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"unknown game kind: {kind}")
    except ValueError:
        raise HTTPException(status_code=400, detail="invalid position")


def _require_match(store: InMemorySessionStore, game_id: str) -> Match:
    match = store.get(game_id)
    if match is None:
        raise HTTPException(status_code=404, detail="game not found")
    return match


def _state(game_id: str, match: Match) -> GameState:
    return GameState(
        game_id=game_id,
        kind=match.rules.name,
        position=match.render(),
        to_move=match.rules.side_to_move(match.position),
        legal_moves=match.legal_moves(),
        terminal=match.is_terminal(),
        history=[match.rules.render(b) for b in match.history],
    )


def _result(match: Match, res: SearchResult) -> Dict[str, Any]:
    return {
        "best_move": match.rules.render(res.best_move) if res.best_move is not None else None,
        "value": res.value,
        "depth": res.depth,
        "nodes": res.nodes,
        "leaves": res.leaves,
        "seldepth": res.seldepth,
        "time_ms": res.time_ms,
        "complete": res.complete,
    }


# Default app for non-factory servers
app = create_app()
