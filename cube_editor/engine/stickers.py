"""Color assignment strings shown on each cubie.

A cubie's stickers are the face letters of the piece it shows, starting from
the position's first face. Rotating a piece by one step shifts the letters
left by one.
"""

from __future__ import annotations

from cube_editor.engine import catalog
from cube_editor.engine.models import CubeState


def orient(piece: str, orientation: int) -> str:
    if not piece:
        return piece
    shift = orientation % len(piece)
    return piece[shift:] + piece[:shift]


def stickers_at(state: CubeState, name: str) -> str:
    """Stickers for any cubie; fixed cubies always show their own name."""
    slot = catalog.index(name)
    if slot is None:
        if not catalog.is_cubie(name):
            raise ValueError(f"Unknown cubie: {name!r}")
        return name
    piece = state.permutation[slot]
    if piece is None:
        return ""
    return orient(catalog.name_at(piece), state.orientation[slot])


def tracked_stickers(state: CubeState) -> dict[str, str]:
    return {name: stickers_at(state, name) for name in catalog.POSITIONS}
