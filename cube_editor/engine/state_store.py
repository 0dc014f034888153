from __future__ import annotations

import json
import logging
from typing import Protocol

from cube_editor.engine import catalog
from cube_editor.engine.models import CubeState, SavedCube
from cube_editor.engine.stickers import tracked_stickers

logger = logging.getLogger(__name__)

PERMUTATION_KEY = "permutation"
ORIENTATION_KEY = "orientation"


class StateStoreProtocol(Protocol):
    """Protocol for cube persistence (Redis)."""

    async def save(self, state: CubeState, stickers: dict[str, str] | None = None) -> None:
        """Write stickers and both vectors."""
        ...

    async def load(self) -> SavedCube | None:
        """Read stickers and both vectors, or None if nothing was saved."""
        ...

    async def clear(self) -> None:
        ...


class StateStore:
    """Redis-backed key-value store, one key per tracked cubie plus the vectors."""

    def __init__(self, redis_client, key_prefix: str = "") -> None:
        self.redis = redis_client
        self.key_prefix = key_prefix

    def _key(self, name: str) -> str:
        return f"{self.key_prefix}{name}"

    async def save(self, state: CubeState, stickers: dict[str, str] | None = None) -> None:
        """Write every key unconditionally from the given state."""
        if stickers is None:
            stickers = tracked_stickers(state)
        for name in catalog.POSITIONS:
            await self.redis.set(self._key(name), stickers.get(name, ""))
        await self.redis.set(self._key(PERMUTATION_KEY), json.dumps(state.storage_permutation()))
        await self.redis.set(self._key(ORIENTATION_KEY), json.dumps(state.orientation))
        logger.info(f"Saved cube state under prefix {self.key_prefix!r}")

    async def load(self) -> SavedCube | None:
        permutation = await self.redis.get(self._key(PERMUTATION_KEY))
        orientation = await self.redis.get(self._key(ORIENTATION_KEY))
        if permutation is None or orientation is None:
            return None

        state = CubeState.from_storage(json.loads(permutation), json.loads(orientation))
        stickers: dict[str, str] = {}
        for name in catalog.POSITIONS:
            value = await self.redis.get(self._key(name))
            if isinstance(value, bytes):
                value = value.decode("utf-8")
            stickers[name] = value
        logger.info(f"Loaded cube state under prefix {self.key_prefix!r}")
        return SavedCube(state=state, stickers=stickers)

    async def clear(self) -> None:
        keys = [self._key(name) for name in (*catalog.POSITIONS, PERMUTATION_KEY, ORIENTATION_KEY)]
        await self.redis.delete(*keys)
