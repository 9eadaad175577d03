"""
ScanDeskew - Custom Exceptions Module

This module defines custom exception classes for specific error cases
in the skew-correction core.
"""


class ScanDeskewError(Exception):
    """Base exception for all ScanDeskew errors.

    All custom exceptions should inherit from this class to allow
    catching any ScanDeskew-specific error.
    """

    def __init__(self, message: str, details: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional technical details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class InvalidImageError(ScanDeskewError):
    """Raised when an image buffer has zero dimensions or an unsupported layout."""

    def __init__(self, reason: str, shape: tuple | None = None) -> None:
        """Initialize the exception.

        Args:
            reason: Why the buffer was rejected
            shape: Optional shape of the offending buffer
        """
        self.reason = reason
        self.shape = shape

        details = f"shape={shape}" if shape is not None else None
        super().__init__(f"Invalid image: {reason}", details=details)


class DegenerateInputError(ScanDeskewError):
    """Raised when a row-sum sequence is empty."""

    def __init__(self, reason: str = "row-sum sequence is empty") -> None:
        self.reason = reason
        super().__init__(f"Degenerate input: {reason}")


class InvalidAngleError(ScanDeskewError):
    """Raised when a rotation angle is not a finite number."""

    def __init__(self, angle: float) -> None:
        self.angle = angle
        super().__init__("Rotation angle must be finite", details=f"angle={angle!r}")


class ConfigurationError(ScanDeskewError):
    """Raised when there's a configuration-related error."""

    def __init__(self, setting_name: str | None = None, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            setting_name: Optional name of the problematic setting
            reason: Optional reason for the error
        """
        self.setting_name = setting_name
        self.reason = reason

        if setting_name:
            msg = f"Configuration error for '{setting_name}'"
        else:
            msg = "Configuration error"

        if reason:
            msg += f": {reason}"

        super().__init__(msg)


class DeskewCancelledError(ScanDeskewError):
    """Raised when an angle search is cancelled between candidates."""

    def __init__(self, evaluated: int, total: int) -> None:
        """Initialize the exception.

        Args:
            evaluated: Number of candidate angles scored before cancellation
            total: Number of candidate angles in the search
        """
        self.evaluated = evaluated
        self.total = total
        super().__init__("Deskew cancelled", details=f"evaluated={evaluated}/{total}")


class ImageIOError(ScanDeskewError):
    """Raised when an image cannot be read, decoded, encoded or written."""

    def __init__(self, source: str, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            source: File path or description of the in-memory source
            reason: Optional reason for the failure
        """
        self.source = source
        self.reason = reason

        msg = f"Image I/O failed for: {source}"
        if reason:
            msg += f" - {reason}"

        super().__init__(msg, details=f"source={source}")


# Exception hierarchy summary:
# ScanDeskewError (base)
# ├── InvalidImageError
# ├── DegenerateInputError
# ├── InvalidAngleError
# ├── ConfigurationError
# ├── DeskewCancelledError
# └── ImageIOError
