"""Error taxonomy for the prediction core.

DataSourceError and InsufficientDataError are raised inside the core;
SessionError is the only type that crosses the orchestration boundary.
"""

from __future__ import annotations


class WingoError(Exception):
    """Base class for all predictor errors."""


class DataSourceError(WingoError):
    """Upstream draw history could not be fetched or parsed."""


class InsufficientDataError(WingoError):
    """Fewer draw records than the analysis needs. Retry later."""

    def __init__(self, required: int, available: int) -> None:
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient historical data for analysis: "
            f"need {required} records, got {available}"
        )


class SessionError(WingoError):
    """A prediction or stats session failed.

    The original exception is kept on ``cause`` so callers can tell
    "try again later" (InsufficientDataError) from "upstream broken".
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__(message)

    @property
    def is_retryable(self) -> bool:
        return isinstance(self.cause, InsufficientDataError)
