from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cube_editor.engine.parity import ParityOracle
    from cube_editor.engine.protocol import ParityObserver, PickerUI, RenderSurface

from cube_editor.engine import catalog
from cube_editor.engine.errors import (
    CategoryMismatchError,
    NoSelectionError,
    PieceUnavailableError,
    PuzzleSolvedError,
    SlotLockedError,
    UnknownPositionError,
)
from cube_editor.engine.locking import is_locked, is_won
from cube_editor.engine.models import Candidate, CubeState, ParityReport, Selection
from cube_editor.engine.parity import evaluate_parity
from cube_editor.engine.stickers import stickers_at

logger = logging.getLogger(__name__)


class AssignmentController:
    """
    Selection / assignment state machine over one cube.

    The controller is either idle (no selection) or has one cubie selected,
    flagged locked or editable. Assign, erase and rotate act only on the
    selected, editable slot; each successful mutation re-runs the parity
    oracle and notifies observers. Rejected intents raise and leave the
    state untouched.
    """

    def __init__(
        self,
        answer: CubeState,
        oracle: ParityOracle,
        state: CubeState | None = None,
        snapshot: CubeState | None = None,
        surface: RenderSurface | None = None,
        picker: PickerUI | None = None,
        observers: list[ParityObserver] | None = None,
    ) -> None:
        self._answer = answer.model_copy(deep=True)
        self._oracle = oracle
        self.state = state if state is not None else CubeState.identity()
        self._snapshot = snapshot
        self._surface = surface
        self._picker = picker
        self._observers: list[ParityObserver] = list(observers or [])
        self.selection: Selection | None = None
        self.last_parity: ParityReport | None = None

    @property
    def answer(self) -> CubeState:
        return self._answer

    @property
    def snapshot(self) -> CubeState | None:
        return self._snapshot

    @property
    def surface(self) -> RenderSurface | None:
        return self._surface

    @property
    def won(self) -> bool:
        """Whether the last saved state already matches the answer."""
        return is_won(self._snapshot, self._answer)

    @property
    def solved(self) -> bool:
        return self.state.matches(self._answer)

    def add_observer(self, observer: ParityObserver) -> None:
        self._observers.append(observer)

    # ------------------------------------------------------------------ #
    #  Selection
    # ------------------------------------------------------------------ #

    def is_locked(self, name: str) -> bool:
        return is_locked(name, self._snapshot, self._answer)

    def select_slot(self, name: str) -> Selection | None:
        """Select a cubie, or deselect it if it is already selected."""
        if not catalog.is_cubie(name):
            raise UnknownPositionError(f"Unknown cubie: {name!r}", name)
        if self.won:
            raise PuzzleSolvedError("Cube is already solved", name)

        if self.selection is not None and self.selection.position == name:
            self.deselect()
            return None

        self.selection = Selection(position=name, locked=self.is_locked(name))
        logger.debug(f"Selected {name!r} (locked={self.selection.locked})")
        if self._surface is not None:
            self._surface.highlight(name, self.selection.locked)
        self._refresh_picker()
        return self.selection

    def select_at(self, x: float, y: float) -> Selection | None:
        """Select whatever cubie the render surface finds under a click."""
        if self._surface is None:
            raise RuntimeError("No render surface to pick from")
        name = self._surface.pick(x, y)
        if name is None:
            return self.selection
        return self.select_slot(name)

    def deselect(self) -> None:
        self.selection = None
        if self._surface is not None:
            self._surface.highlight(None)
        if self._picker is not None:
            self._picker.clear()

    def candidates(self) -> list[Candidate]:
        """Pieces that may go into the selected slot, with availability.

        Every slot of a kind accepts every piece of that kind; a piece is
        unavailable while it occupies any slot, including the selected one.
        """
        if self.selection is None or self.selection.locked:
            return []
        piece_kind = catalog.kind(self.selection.position)
        return [
            Candidate(name=piece, available=not self.state.is_active(catalog.index(piece)))
            for piece in catalog.pieces_of_kind(piece_kind)
        ]

    # ------------------------------------------------------------------ #
    #  Mutations
    # ------------------------------------------------------------------ #

    def assign_piece(self, name: str, piece: str) -> ParityReport:
        slot = self._require_editable(name)
        slot_kind = catalog.kind(name)
        if piece not in catalog.pieces_of_kind(slot_kind):
            raise CategoryMismatchError(
                f"{piece!r} cannot be placed in {slot_kind.value} slot {name}", name
            )
        piece_index = catalog.index(piece)
        if self.state.is_active(piece_index):
            logger.info(f"Rejected {piece} at {name}: piece already placed")
            raise PieceUnavailableError(f"{piece} is already placed", name, piece)

        self.state.permutation[slot] = piece_index
        self.state.orientation[slot] = 0
        logger.info(f"Assigned {piece} to {name}")
        return self._after_mutation(name)

    def erase_piece(self, name: str) -> ParityReport:
        slot = self._require_editable(name)
        self.state.permutation[slot] = None
        logger.info(f"Erased {name}")
        return self._after_mutation(name)

    def rotate_piece(self, name: str) -> ParityReport:
        slot = self._require_editable(name)
        k = catalog.kind(name).orientations
        self.state.orientation[slot] = (self.state.orientation[slot] - 1 + k) % k
        logger.info(f"Rotated {name} to orientation {self.state.orientation[slot]}")
        return self._after_mutation(name)

    def update_parity(self) -> ParityReport:
        report = evaluate_parity(self._oracle, self.state)
        self.last_parity = report
        if not report.consistent:
            logger.warning(f"Cube is not solvable: {report.summary()}")
        for observer in self._observers:
            observer.on_parity(report)
        return report

    # ------------------------------------------------------------------ #
    #  Snapshot management
    # ------------------------------------------------------------------ #

    def mark_saved(self) -> None:
        """Record the live state as the last persisted snapshot."""
        self._snapshot = self.state.model_copy(deep=True)
        self._relock_selection()

    def replace_state(self, state: CubeState, snapshot: CubeState | None) -> None:
        """Swap in a loaded state; the selection is dropped."""
        self.state = state
        self._snapshot = snapshot.model_copy(deep=True) if snapshot is not None else None
        self.deselect()

    # ------------------------------------------------------------------ #
    #  Internals
    # ------------------------------------------------------------------ #

    def _require_editable(self, name: str) -> int:
        if not catalog.is_cubie(name):
            raise UnknownPositionError(f"Unknown cubie: {name!r}", name)
        if self.selection is None or self.selection.position != name:
            raise NoSelectionError(f"{name!r} is not selected", name)
        slot = catalog.index(name)
        if self.selection.locked or slot is None:
            logger.info(f"Rejected edit of locked slot {name!r}")
            raise SlotLockedError(f"{name!r} is locked", name)
        return slot

    def _after_mutation(self, name: str) -> ParityReport:
        if self._surface is not None:
            self._surface.show_stickers(name, stickers_at(self.state, name))
        self._refresh_picker()
        return self.update_parity()

    def _refresh_picker(self) -> None:
        if self._picker is None or self.selection is None:
            return
        self._picker.show_candidates(self.candidates(), self.selection.locked)

    def _relock_selection(self) -> None:
        if self.selection is None:
            return
        locked = self.is_locked(self.selection.position)
        if locked != self.selection.locked:
            self.selection = Selection(position=self.selection.position, locked=locked)
            if self._surface is not None:
                self._surface.highlight(self.selection.position, locked)
            self._refresh_picker()
