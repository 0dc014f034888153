from __future__ import annotations

from typing import Protocol, runtime_checkable

from cube_editor.engine.models import CubeState, ParityReport


@runtime_checkable
class ParityOracle(Protocol):
    """Solvability residues over a 40-int state vector.

    The vector is the 20 permutation values (empty = -1) followed by the 20
    orientation values. Zero from all three queries means the state is
    physically reachable.
    """

    def edge_parity(self, state: list[int]) -> int:
        ...

    def corner_parity(self, state: list[int]) -> int:
        ...

    def permutation_parity(self, state: list[int]) -> int:
        ...


def evaluate_parity(oracle: ParityOracle, state: CubeState) -> ParityReport:
    vector = state.to_vector()
    return ParityReport(
        edge=oracle.edge_parity(vector),
        corner=oracle.corner_parity(vector),
        permutation=oracle.permutation_parity(vector),
    )
