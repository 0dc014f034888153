from __future__ import annotations

import importlib
import logging

from cube_editor.engine.parity import ParityOracle

logger = logging.getLogger(__name__)


def load_oracle(path: str) -> ParityOracle:
    """Instantiate a parity oracle from a "module:ClassName" path."""
    if not path:
        raise ValueError("No parity oracle configured (set CUBE_EDITOR_PARITY_ORACLE)")
    module_name, _, attr = path.partition(":")
    if not module_name or not attr:
        raise ValueError(f"Parity oracle path must look like 'module:ClassName', got {path!r}")

    module = importlib.import_module(module_name)
    oracle = getattr(module, attr)()
    if not isinstance(oracle, ParityOracle):
        raise TypeError(f"{path} does not implement ParityOracle")
    logger.info(f"Loaded parity oracle {path}")
    return oracle
