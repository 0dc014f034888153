from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from cube_editor.engine import catalog
from cube_editor.engine.catalog import NUM_POSITIONS

# Storage / oracle encoding of an empty slot.
EMPTY_SENTINEL = -1


def _identity_permutation() -> list[int | None]:
    return list(range(NUM_POSITIONS))


def _zero_orientation() -> list[int]:
    return [0] * NUM_POSITIONS


# --- Cube State ---
class CubeState(BaseModel):
    """Permutation and orientation vectors over the 20 tracked positions.

    permutation[i] is the piece identity (a catalog index) occupying slot i,
    or None when the slot is empty. orientation[i] is the rotation count of
    that piece and is meaningless while the slot is empty.
    """

    permutation: list[int | None] = Field(default_factory=_identity_permutation)
    orientation: list[int] = Field(default_factory=_zero_orientation)

    @model_validator(mode="after")
    def check_invariants(self) -> CubeState:
        errors = self.invariant_errors()
        if errors:
            raise ValueError("; ".join(errors))
        return self

    def invariant_errors(self) -> list[str]:
        """Return invariant violations (empty = OK)."""
        errors: list[str] = []
        if len(self.permutation) != NUM_POSITIONS:
            errors.append(f"permutation must have {NUM_POSITIONS} entries")
        if len(self.orientation) != NUM_POSITIONS:
            errors.append(f"orientation must have {NUM_POSITIONS} entries")
        if errors:
            return errors

        for i, value in enumerate(self.orientation):
            limit = catalog.kind_at(i).orientations
            if not 0 <= value < limit:
                errors.append(
                    f"orientation of {catalog.name_at(i)} must be in 0..{limit - 1}, got {value}"
                )

        seen: set[int] = set()
        for i, piece in enumerate(self.permutation):
            if piece is None:
                continue
            if not 0 <= piece < NUM_POSITIONS:
                errors.append(f"piece index out of range at {catalog.name_at(i)}: {piece}")
            elif piece in seen:
                errors.append(f"piece {catalog.name_at(piece)} occupies more than one slot")
            seen.add(piece)
        return errors

    @classmethod
    def identity(cls) -> CubeState:
        return cls()

    @classmethod
    def from_vector(cls, values: list[int]) -> CubeState:
        """Build a state from permutation followed by orientation (40 ints)."""
        if len(values) != 2 * NUM_POSITIONS:
            raise ValueError(f"state vector must have {2 * NUM_POSITIONS} entries, got {len(values)}")
        return cls.from_storage(values[:NUM_POSITIONS], values[NUM_POSITIONS:])

    @classmethod
    def from_storage(cls, permutation: list[int], orientation: list[int]) -> CubeState:
        return cls(
            permutation=[None if p == EMPTY_SENTINEL else p for p in permutation],
            orientation=list(orientation),
        )

    def storage_permutation(self) -> list[int]:
        return [EMPTY_SENTINEL if p is None else p for p in self.permutation]

    def to_vector(self) -> list[int]:
        return self.storage_permutation() + list(self.orientation)

    def is_active(self, piece: int) -> bool:
        """Whether a piece identity currently occupies any slot."""
        return piece in self.permutation

    def matches_at(self, other: CubeState, slot: int) -> bool:
        return (
            self.permutation[slot] == other.permutation[slot]
            and self.orientation[slot] == other.orientation[slot]
        )

    def matches(self, other: CubeState) -> bool:
        return all(self.matches_at(other, i) for i in range(NUM_POSITIONS))


# --- Selection ---
class Selection(BaseModel):
    position: str
    locked: bool = False


class Candidate(BaseModel):
    name: str
    available: bool


# --- Parity ---
class ParityReport(BaseModel):
    edge: int
    corner: int
    permutation: int

    @property
    def consistent(self) -> bool:
        return self.edge == 0 and self.corner == 0 and self.permutation == 0

    def summary(self) -> str:
        return f"EP: {self.edge}, CP: {self.corner}, PP: {self.permutation}"


# --- Intents ---
class IntentType(str, Enum):
    SELECT = "select"
    ASSIGN = "assign"
    ERASE = "erase"
    ROTATE = "rotate"


class Intent(BaseModel):
    intent_type: IntentType
    position: str | None = None
    piece: str | None = None


# --- Saved data ---
class SavedCube(BaseModel):
    """Everything the persistence gateway stores for one cube."""

    state: CubeState
    stickers: dict[str, str] = Field(default_factory=dict)


# --- Editor View ---
class EditorView(BaseModel):
    permutation: list[int | None]
    orientation: list[int]
    selection: Selection | None = None
    candidates: list[Candidate] = Field(default_factory=list)
    stickers: dict[str, str] = Field(default_factory=dict)
    parity: ParityReport | None = None
    consistent: bool | None = None
    solved: bool = False
    has_snapshot: bool = False
