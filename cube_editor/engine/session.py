from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

if TYPE_CHECKING:
    from cube_editor.engine.state_store import StateStoreProtocol

from cube_editor.engine.controller import AssignmentController
from cube_editor.engine.errors import EditorError, InvalidStateError
from cube_editor.engine.models import CubeState, EditorView, Intent, IntentType, SavedCube
from cube_editor.engine.stickers import tracked_stickers

logger = logging.getLogger(__name__)


class EditorSession:
    """
    Orchestrates one editing session over a single cube.

    Responsibilities:
    - Serialize intents so each one runs to completion before the next
    - Dispatch select / assign / erase / rotate to the controller
    - Save and load through the state store, refreshing the lock snapshot
    - Build serializable views of the editor
    """

    def __init__(self, controller: AssignmentController, state_store: StateStoreProtocol) -> None:
        self.controller = controller
        self._state_store = state_store
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------ #
    #  Lifecycle
    # ------------------------------------------------------------------ #

    async def start(self) -> bool:
        """Restore the last save if there is one. Returns whether it did."""
        async with self._lock:
            saved = await self._read()
            if saved is None:
                self.controller.replace_state(CubeState.identity(), None)
                logger.info("No saved cube, starting from the identity state")
                self.controller.update_parity()
                return False
            self._restore(saved)
            return True

    async def save(self) -> EditorView:
        async with self._lock:
            state = self.controller.state
            await self._state_store.save(state, tracked_stickers(state))
            self.controller.mark_saved()
            return self.view()

    async def load(self) -> EditorView:
        async with self._lock:
            saved = await self._read()
            if saved is None:
                raise InvalidStateError("No saved cube to load")
            self._restore(saved)
            return self.view()

    # ------------------------------------------------------------------ #
    #  Intent handling
    # ------------------------------------------------------------------ #

    async def handle(self, intent: Intent) -> EditorView:
        """Apply one intent and return the resulting view."""
        async with self._lock:
            self._dispatch(intent)
            return self.view()

    def _dispatch(self, intent: Intent) -> None:
        controller = self.controller
        if intent.intent_type == IntentType.SELECT:
            controller.select_slot(self._position(intent))
            return

        position = intent.position
        if position is None:
            if controller.selection is None:
                raise EditorError("No cubie selected")
            position = controller.selection.position

        if intent.intent_type == IntentType.ASSIGN:
            if not intent.piece:
                raise EditorError("Assign requires a piece", position)
            controller.assign_piece(position, intent.piece)
        elif intent.intent_type == IntentType.ERASE:
            controller.erase_piece(position)
        elif intent.intent_type == IntentType.ROTATE:
            controller.rotate_piece(position)

    @staticmethod
    def _position(intent: Intent) -> str:
        if intent.position is None:
            raise EditorError(f"{intent.intent_type.value} requires a position")
        return intent.position

    # ------------------------------------------------------------------ #
    #  Views
    # ------------------------------------------------------------------ #

    def view(self) -> EditorView:
        controller = self.controller
        state = controller.state
        parity = controller.last_parity
        return EditorView(
            permutation=list(state.permutation),
            orientation=list(state.orientation),
            selection=controller.selection,
            candidates=controller.candidates(),
            stickers=tracked_stickers(state),
            parity=parity,
            consistent=parity.consistent if parity is not None else None,
            solved=controller.solved,
            has_snapshot=controller.snapshot is not None,
        )

    # ------------------------------------------------------------------ #
    #  Internals
    # ------------------------------------------------------------------ #

    async def _read(self) -> SavedCube | None:
        try:
            return await self._state_store.load()
        except ValidationError as e:
            raise InvalidStateError(f"Saved cube is invalid: {e}") from e

    def _restore(self, saved: SavedCube) -> None:
        self.controller.replace_state(saved.state.model_copy(deep=True), saved.state)
        surface = self.controller.surface
        if surface is not None:
            for name, stickers in saved.stickers.items():
                surface.show_stickers(name, stickers)
        self.controller.update_parity()
        logger.info("Restored saved cube")
