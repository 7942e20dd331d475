"""Terminal output helpers."""

from __future__ import annotations


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate phases of a run in terminal output.
    """
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")
