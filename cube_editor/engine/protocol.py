from __future__ import annotations

from typing import Protocol, runtime_checkable

from cube_editor.engine.models import Candidate, ParityReport


@runtime_checkable
class RenderSurface(Protocol):
    """Visual collaborator that draws the cube. It never mutates state."""

    def show_stickers(self, position: str, stickers: str) -> None:
        ...

    def highlight(self, position: str | None, locked: bool = False) -> None:
        """Highlight the selected cubie, or hide the highlight when None."""
        ...

    def pick(self, x: float, y: float) -> str | None:
        """Resolve a screen point to a cubie name."""
        ...


@runtime_checkable
class PickerUI(Protocol):
    """Piece picker shown for the selected slot."""

    def show_candidates(self, candidates: list[Candidate], locked: bool) -> None:
        """Render one control per candidate; locked disables every control."""
        ...

    def clear(self) -> None:
        ...


@runtime_checkable
class ParityObserver(Protocol):
    def on_parity(self, report: ParityReport) -> None:
        ...
