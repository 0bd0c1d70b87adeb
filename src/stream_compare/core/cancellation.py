"""Externally owned cancellation signal for comparisons."""

from __future__ import annotations

from stream_compare.core.errors import ComparisonCancelledError


class CancellationToken:
    """A one-way abort flag checked by the engine around every read.

    The owner calls :meth:`cancel`; the comparison observes it at its next
    suspension point and raises :class:`ComparisonCancelledError`. Reads
    already in flight are allowed to finish.
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._reason = "Comparison was cancelled"

    @classmethod
    def cancelled(cls) -> CancellationToken:
        """Return a token that is already triggered."""
        token = cls()
        token.cancel()
        return token

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def cancel(self, reason: str | None = None) -> None:
        """Trigger the token. Calling it again has no further effect."""
        if self._cancelled:
            return
        self._cancelled = True
        if reason:
            self._reason = reason

    def raise_if_cancelled(self) -> None:
        """Raise :class:`ComparisonCancelledError` if the token was triggered."""
        if self._cancelled:
            raise ComparisonCancelledError(self._reason)
