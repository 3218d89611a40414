"""Error types raised by trace generators."""

from __future__ import annotations


class InvalidInputError(ValueError):
    """Input is structurally unusable for the given algorithm.

    Raised before any step is emitted, so callers never see a partial trace.
    """

    def __init__(self, algorithm_id: str, reason: str):
        super().__init__(f"{algorithm_id}: {reason}")
        self.algorithm_id = algorithm_id
        self.reason = reason
