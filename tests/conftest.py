from __future__ import annotations

from contextlib import asynccontextmanager

import pytest
from httpx import ASGITransport, AsyncClient

from cube_editor.engine.controller import AssignmentController
from cube_editor.engine.models import Candidate, CubeState, ParityReport
from cube_editor.engine.session import EditorSession
from cube_editor.engine.state_store import StateStore


class FakeRedis:
    """In-memory fake Redis for tests (avoids requiring real Redis)."""

    def __init__(self):
        self._store: dict[str, bytes] = {}

    async def set(self, key: str, value: str | bytes, **kwargs) -> None:
        if isinstance(value, str):
            value = value.encode("utf-8")
        self._store[key] = value

    async def get(self, key: str) -> bytes | None:
        return self._store.get(key)

    async def delete(self, *keys: str) -> None:
        for key in keys:
            self._store.pop(key, None)

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        pass


class StubParityOracle:
    """Parity oracle double returning fixed residues and recording each vector."""

    def __init__(self, edge: int = 0, corner: int = 0, permutation: int = 0):
        self.edge = edge
        self.corner = corner
        self.permutation = permutation
        self.calls: list[list[int]] = []

    def edge_parity(self, state: list[int]) -> int:
        self.calls.append(list(state))
        return self.edge

    def corner_parity(self, state: list[int]) -> int:
        return self.corner

    def permutation_parity(self, state: list[int]) -> int:
        return self.permutation


class RecordingSurface:
    def __init__(self, picks: dict[tuple[float, float], str] | None = None):
        self.stickers: dict[str, str] = {}
        self.highlighted: str | None = None
        self.highlight_locked = False
        self._picks = picks or {}

    def show_stickers(self, position: str, stickers: str) -> None:
        self.stickers[position] = stickers

    def highlight(self, position: str | None, locked: bool = False) -> None:
        self.highlighted = position
        self.highlight_locked = locked

    def pick(self, x: float, y: float) -> str | None:
        return self._picks.get((x, y))


class RecordingPicker:
    def __init__(self):
        self.candidates: list[Candidate] = []
        self.locked = False
        self.cleared = 0

    def show_candidates(self, candidates: list[Candidate], locked: bool) -> None:
        self.candidates = list(candidates)
        self.locked = locked

    def clear(self) -> None:
        self.candidates = []
        self.cleared += 1


class RecordingObserver:
    def __init__(self):
        self.reports: list[ParityReport] = []

    def on_parity(self, report: ParityReport) -> None:
        self.reports.append(report)


@pytest.fixture
def test_redis():
    """Create a fake Redis for tests."""
    return FakeRedis()


@pytest.fixture
def oracle():
    return StubParityOracle()


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def picker():
    return RecordingPicker()


@pytest.fixture
def observer():
    return RecordingObserver()


@pytest.fixture
def controller(oracle, surface, picker, observer):
    """Controller over an identity cube and identity answer, never saved."""
    return AssignmentController(
        answer=CubeState.identity(),
        oracle=oracle,
        surface=surface,
        picker=picker,
        observers=[observer],
    )


@pytest.fixture
def state_store(test_redis):
    return StateStore(test_redis)


@pytest.fixture
def session(controller, state_store):
    return EditorSession(controller, state_store)


@pytest.fixture
async def app(test_redis, session):
    """Create a test FastAPI application with test dependencies."""
    from fastapi import FastAPI

    from cube_editor.api.editor import router as editor_router
    from cube_editor.api.health import router as health_router

    # Create app without real lifespan (we set up state manually)
    @asynccontextmanager
    async def test_lifespan(app: FastAPI):
        yield

    test_app = FastAPI(title="cube-editor-test", lifespan=test_lifespan)
    test_app.include_router(editor_router, prefix="/api/v1")
    test_app.include_router(health_router)

    test_app.state.redis = test_redis
    test_app.state.editor_session = session
    await session.start()

    yield test_app


@pytest.fixture
async def client(app):
    """Create a test HTTP client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
