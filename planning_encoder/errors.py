"""Error types for the strict surfaces (tag decoding, CSV uploads).

The schedule encoder itself never raises: unreadable fragments are omitted.

Standard error codes:
- BAD_LENGTH: encoded planning is not a whole number of tags
- UNKNOWN_TAG: a 6-character chunk is not a valid tag
- COLUMN_NOT_FOUND: the info column is missing from a CSV header
"""


class PlanningEncoderError(ValueError):
    """Base error.

    Attributes:
        code: Error code (e.g., "BAD_LENGTH", "UNKNOWN_TAG")
        message: Human readable message
    """

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"{code}: {message}")


class TagDecodeError(PlanningEncoderError):
    """Raised when an encoded planning cannot be decoded."""


class ColumnNotFoundError(PlanningEncoderError):
    """Raised when the info column is absent from an uploaded CSV."""

    def __init__(self, column: str) -> None:
        self.column = column
        super().__init__("COLUMN_NOT_FOUND", f"Column '{column}' not found in CSV header")
