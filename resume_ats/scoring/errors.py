from __future__ import annotations


class ScoringError(ValueError):
    def __init__(self, message: str, *, code: str = "scoring_error"):
        super().__init__(message)
        self.code = code


class InvalidInputShape(ScoringError):
    """Input that is not a resume document at all. Never retried."""

    def __init__(self, message: str, *, errors: list[dict] | None = None):
        super().__init__(message, code="invalid_input_shape")
        self.errors = errors or []
