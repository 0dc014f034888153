from __future__ import annotations

from cube_editor.engine import catalog
from cube_editor.engine.models import CubeState


def is_locked(name: str, snapshot: CubeState | None, answer: CubeState) -> bool:
    """Whether a cubie may no longer be edited.

    Centers and the core are always locked. A tracked slot is locked once the
    last saved state had the answer's piece and orientation there; live
    edits made since do not matter. Nothing tracked is locked before the
    first save.
    """
    slot = catalog.index(name)
    if slot is None:
        return True
    if snapshot is None:
        return False
    return snapshot.matches_at(answer, slot)


def is_won(snapshot: CubeState | None, answer: CubeState) -> bool:
    return snapshot is not None and snapshot.matches(answer)
