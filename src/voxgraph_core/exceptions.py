"""
Exception hierarchy for Voxgraph.

The extraction engine itself never raises during ingestion; these types cover
the surrounding layers (export, transcript handling, configuration).

License: MIT
"""

import uuid
from typing import Any, Dict, Optional


class VoxgraphError(Exception):
    """
    Base exception for all Voxgraph errors.

    Attributes:
        message: Human-readable error message
        error_code: Programmatic error code (e.g., "VAL_001")
        details: Additional context (dict)
        correlation_id: UUID for tracing across layers
        original_exception: Wrapped exception (if any)
        is_transient: Whether error is transient (retryable)

    Example:
        raise VoxgraphError(
            message="Operation failed",
            error_code="ERR_UNKNOWN",
            details={"param": "value"},
        )
    """

    def __init__(
        self,
        message: str,
        error_code: str = "ERR_UNKNOWN",
        details: Optional[Dict[str, Any]] = None,
        correlation_id: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.correlation_id = correlation_id or str(uuid.uuid4())
        self.original_exception = original_exception
        self.is_transient = False

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for logging/serialization.

        Returns:
            Dictionary with all error information
        """
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
            "correlation_id": self.correlation_id,
            "original_error": str(self.original_exception) if self.original_exception else None,
        }


class ValidationError(VoxgraphError):
    """
    Raised when input validation fails.

    Error Codes:
        VAL_001: Invalid or missing value (e.g. export path)
        VAL_002: Invalid value format

    Not transient.
    """

    def __init__(self, message: str, error_code: str = "VAL_001", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)
        self.is_transient = False


class ProcessingError(VoxgraphError):
    """
    Raised when a graph cannot be serialized or written.

    Error Codes:
        PROC_001: Export failed
        PROC_002: Transcript could not be read

    Not transient.
    """

    def __init__(self, message: str, error_code: str = "PROC_001", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)
        self.is_transient = False


class SpeechRecognitionError(VoxgraphError):
    """
    Raised when the speech source reports a failure.

    Error Codes:
        SPEECH_001: Recognition error reported by the speech source
        SPEECH_002: Microphone permission denied
        SPEECH_003: Speech recognition not supported

    Transient (the caller may restart capture).
    """

    def __init__(self, message: str, error_code: str = "SPEECH_001", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)
        self.is_transient = True
