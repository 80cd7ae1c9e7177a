from __future__ import annotations

import threading
import uuid
from typing import Dict, Optional

from ...games.match import Match


class InMemorySessionStore:
    """Thread-safe in-memory store of matches keyed by `game_id`."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._matches: Dict[str, Match] = {}

    def create(self, match: Match) -> str:
        """Store `match` under a fresh `game_id` and return the id."""
        gid = str(uuid.uuid4())
        with self._lock:
            self._matches[gid] = match
        return gid

    def get(self, game_id: str) -> Optional[Match]:
        with self._lock:
            return self._matches.get(game_id)

    def delete(self, game_id: str) -> bool:
        with self._lock:
            return self._matches.pop(game_id, None) is not None
