"""
Bakebox Exceptions.

All bakebox errors are wrapped in BakeboxError for consistent handling.
"""

from typing import Any


class BakeboxError(Exception):
    """
    Base exception for all Bakebox errors.

    Usage:
        raise BakeboxError('INVALID_RATING', rating=7)

    Attributes:
        code: Error code (INVALID_RATING, INVALID_BACKUP, etc.)
        details: Additional context as keyword arguments
    """

    def __init__(self, code: str, **details: Any):
        self.code = code
        self.details = details
        message = f"{code}: {details}" if details else code
        super().__init__(message)

    def as_dict(self) -> dict:
        """Return error as dictionary for API responses."""
        return {"code": self.code, **self.details}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"BakeboxError({self.code}: {details_str})"
        return f"BakeboxError({self.code})"


# Common error codes
# EMPTY_FEEDBACK: Execution log without feedback text
# INVALID_RATING: Rating outside 1..5
# INVALID_DIRECTION: Move direction other than "up"/"down"
# INVALID_BACKUP: Backup payload is not in the expected layout
# EMPTY_PROMPT: Image prompt is blank
# INVALID_IMAGE: Image to edit is not a data: URL
# API_KEY_ERROR: Image API rejected the configured key
# NO_IMAGE_DATA: Image API answered without image data
# INVALID_SIZE: Image size other than 1K/2K/4K
# INVALID_ASPECT_RATIO: Unsupported aspect ratio
# IMAGE_BACKEND_FAILED: Any other image API failure
