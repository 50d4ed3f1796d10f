"""
Application exceptions.

Every error raised by the scheduling and drill layers derives from CoachError,
which carries an HTTP status code so the API can render it directly.
"""

from typing import Any, Dict, Optional


class CoachError(Exception):
    """
    Base exception for ACT Coach errors.

    Attributes:
        message: Human-readable error message
        details: Additional error details (optional)
        status_code: HTTP status code to return
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


class StoreUnavailableError(CoachError):
    """Raised when the record store cannot be reached or a statement fails."""

    def __init__(
        self,
        message: str = "Record store unavailable",
        table: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details={"table": table, **(details or {})},
            status_code=503
        )


class DrillGenerationError(CoachError):
    """
    Raised when the drill generator fails.

    Common causes:
        - Ollama binary missing
        - Model call timed out
        - Response was not valid JSON
    """

    def __init__(
        self,
        message: str = "Drill generation failed",
        words: Optional[list] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details={"words": words or [], **(details or {})},
            status_code=502
        )


class InvalidDrillError(CoachError):
    """Raised when drill content does not have the required shape."""

    def __init__(
        self,
        message: str = "Invalid drill content",
        word: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details={"word": word, **(details or {})},
            status_code=422
        )
