"""Search error taxonomy. All of these abort a decision."""

from __future__ import annotations


class SearchError(RuntimeError):
    """Base class for unrecoverable search failures."""


class NoMovesAvailableError(SearchError):
    """A decision was requested for a position with no legal actions."""


class MalformedWindowError(SearchError):
    """The evaluator was entered with alpha greater than beta."""

    def __init__(self, alpha: float, beta: float) -> None:
        super().__init__(f"Malformed search window: alpha={alpha} > beta={beta}")
        self.alpha = alpha
        self.beta = beta
