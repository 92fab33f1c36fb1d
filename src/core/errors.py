# src/core/errors.py — v1
"""Exception hierarchy shared by every petassist component.

Three families: input validation (raised before any external call),
external-service failures (raised after a collaborator failed) and
configuration failures (fatal at startup).
"""

from __future__ import annotations


class PetAssistError(Exception):
    """Base class for all petassist errors."""


# === Configuration ===


class ConfigurationError(PetAssistError):
    """Raised when configuration is missing or internally inconsistent."""


# === Input validation ===


class InputValidationError(PetAssistError, ValueError):
    """Raised when user input is rejected before any external call."""


class InvalidAttachmentError(InputValidationError):
    """Attachment is not a base64 data URL."""


class InvalidRequestError(InputValidationError):
    """Request kind does not match the template it targets."""


class MissingFieldError(InputValidationError):
    """A required input is absent."""

    def __init__(self, field: str, context: str = "") -> None:
        self.field = field
        where = f" for {context}" if context else ""
        super().__init__(f"Missing required field {field!r}{where}")


class UnknownFieldError(InputValidationError):
    """Field name is not part of the form."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Unknown form field: {field!r}")


# === External services ===


class ExternalServiceError(PetAssistError):
    """Raised when an external collaborator call fails."""

    user_message = "Something went wrong. Please try again."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.user_message)


class AnalysisFailedError(ExternalServiceError):
    """The AI provider call failed."""

    user_message = "Failed to analyze, please try again."

    def __init__(self, feature: str = "", message: str | None = None) -> None:
        self.feature = feature
        super().__init__(message)


class LocationNotFoundError(ExternalServiceError):
    """Geocoding returned no usable result."""

    user_message = "Address not found. Please try again."


class DirectorySearchError(ExternalServiceError):
    """Adoption-center search failed."""

    user_message = "Failed to fetch adoption centers. Please try again."


class RecordStoreError(ExternalServiceError):
    """Persistence backend rejected or failed an insert."""

    user_message = "Failed to save record. Please try again."


class SubmissionFailedError(ExternalServiceError):
    """Health assessment submission failed at some step."""

    user_message = "Failed to submit health data. Please try again."
