"""Fixed catalog of cubie positions.

Twenty positions are tracked by the state vectors: the 12 edges (two face
letters) followed by the 8 corners (three face letters). The 6 centers and
the hidden core never move and are never tracked.
"""

from __future__ import annotations

from enum import Enum

# Order of cubies in the permutation and orientation vectors.
POSITIONS: tuple[str, ...] = (
    "UF", "UR", "UB", "UL", "DF", "DR", "DB", "DL", "FR", "FL", "BR", "BL",
    "UFR", "URB", "UBL", "ULF", "DRF", "DFL", "DLB", "DBR",
)
NUM_POSITIONS = len(POSITIONS)  # 20

# Candidate pieces in the order the picker presents them.
EDGE_PIECES: tuple[str, ...] = (
    "UB", "UL", "DB", "DL", "BL", "FL", "UF", "UR", "DF", "DR", "BR", "FR",
)
CORNER_PIECES: tuple[str, ...] = (
    "UBL", "ULF", "UFR", "URB", "DLB", "DFL", "DRF", "DBR",
)

# 3x3x3 layout; the cubie at (i-1, j-1, k-1) is LAYOUT[i * 9 + j * 3 + k].
LAYOUT: tuple[str, ...] = (
    "DLB", "DL", "DFL", "BL", "L", "FL", "UBL", "UL", "ULF",
    "DB", "D", "DF", "B", "", "F", "UB", "U", "UF",
    "DBR", "DR", "DRF", "BR", "R", "FR", "URB", "UR", "UFR",
)

_INDEX: dict[str, int] = {name: i for i, name in enumerate(POSITIONS)}
_COORDINATES: dict[str, tuple[int, int, int]] = {
    name: (n // 9 - 1, n // 3 % 3 - 1, n % 3 - 1) for n, name in enumerate(LAYOUT)
}


class PieceKind(str, Enum):
    EDGE = "edge"
    CORNER = "corner"
    CENTER = "center"
    CORE = "core"

    @property
    def orientations(self) -> int:
        """Number of distinct rotation states for a piece of this kind."""
        return {
            PieceKind.EDGE: 2,
            PieceKind.CORNER: 3,
        }.get(self, 1)

    @property
    def tracked(self) -> bool:
        return self in (PieceKind.EDGE, PieceKind.CORNER)


def index(name: str) -> int | None:
    """Return the state-vector index of a position, or None if untracked.

    None is not an error: it marks a fixed piece (center or core) that can
    never be edited.
    """
    return _INDEX.get(name)


def name_at(idx: int) -> str:
    if not 0 <= idx < NUM_POSITIONS:
        raise IndexError(f"Position index out of range: {idx}")
    return POSITIONS[idx]


def is_cubie(name: str) -> bool:
    return name in _COORDINATES


def kind(name: str) -> PieceKind:
    if not is_cubie(name):
        raise ValueError(f"Unknown cubie: {name!r}")
    return {
        0: PieceKind.CORE,
        1: PieceKind.CENTER,
        2: PieceKind.EDGE,
        3: PieceKind.CORNER,
    }[len(name)]


def kind_at(idx: int) -> PieceKind:
    return kind(name_at(idx))


def pieces_of_kind(piece_kind: PieceKind) -> tuple[str, ...]:
    """All piece identities that may occupy a slot of the given kind."""
    if piece_kind is PieceKind.EDGE:
        return EDGE_PIECES
    if piece_kind is PieceKind.CORNER:
        return CORNER_PIECES
    return ()


def coordinates_of(name: str) -> tuple[int, int, int]:
    if name not in _COORDINATES:
        raise ValueError(f"Unknown cubie: {name!r}")
    return _COORDINATES[name]


def cubie_at(x: int, y: int, z: int) -> str:
    """Inverse of coordinates_of for grid coordinates in {-1, 0, 1}."""
    if not all(-1 <= c <= 1 for c in (x, y, z)):
        raise ValueError(f"Coordinates outside the cube: {(x, y, z)}")
    return LAYOUT[(x + 1) * 9 + (y + 1) * 3 + (z + 1)]
