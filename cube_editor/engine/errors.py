from __future__ import annotations


class EditorError(Exception):
    """Base class for cube editor errors."""

    def __init__(self, message: str, position: str | None = None):
        self.message = message
        self.position = position
        super().__init__(message)


class UnknownPositionError(EditorError):
    """Name is not one of the 27 cubies."""
    pass


class NoSelectionError(EditorError):
    """Intent targets a slot that is not the current selection."""
    pass


class SlotLockedError(EditorError):
    """Slot is fixed or was already saved in its solved state."""
    pass


class CategoryMismatchError(EditorError):
    """Candidate piece does not belong to the slot's category."""
    pass


class PieceUnavailableError(EditorError):
    """Candidate piece already occupies a slot."""

    def __init__(self, message: str, position: str | None = None, piece: str | None = None):
        self.piece = piece
        super().__init__(message, position)


class PuzzleSolvedError(EditorError):
    """Selection attempted after the saved cube already matches the answer."""
    pass


class InvalidStateError(EditorError):
    """Loaded or supplied state violates the state vector invariants."""
    pass
