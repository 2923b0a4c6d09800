"""Error taxonomy shared by services and routers.

Every error carries the HTTP status it maps to, so routers can let them
propagate and the application-level handler turns them into responses.
"""

from typing import Any, Optional


class ResumizeError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(ResumizeError):
    """A required secret or environment value is missing."""
    error_code = "configuration_error"


class UpstreamServiceError(ResumizeError):
    """An external collaborator (completion, email, data) failed."""

    status_code = 502
    error_code = "upstream_error"

    def __init__(self, service: str, status: Optional[int] = None, detail: str = ""):
        self.service = service
        self.upstream_status = status
        message = f"The {service} service is unavailable right now. Please try again."
        super().__init__(message, details={"service": service, "status": status})
        self.detail = detail


class InputValidationError(ResumizeError):
    """Required input missing; raised before any network call."""

    status_code = 400
    error_code = "validation_error"

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message, details={"field": field})


class UnsupportedFileTypeError(ResumizeError):
    status_code = 415
    error_code = "unsupported_file_type"


class UnextractableDocumentError(ResumizeError):
    """No text could be recovered from an uploaded document."""

    status_code = 422
    error_code = "unextractable_document"

    def __init__(self, filename: str = ""):
        super().__init__(
            "We couldn't read any text from this document. "
            "Please upload a different file or paste the text instead.",
            details={"filename": filename},
        )


class TemplateFetchError(ResumizeError):
    status_code = 502
    error_code = "template_unavailable"

    def __init__(self, template_id: str, reason: str):
        super().__init__(
            f"Failed to load template preview: {reason}",
            details={"template_id": template_id},
        )


class FeatureLockedError(ResumizeError):
    status_code = 403
    error_code = "premium_required"

    def __init__(self, feature: str, message: Optional[str] = None):
        self.feature = feature
        super().__init__(
            message or f"{feature.replace('_', ' ').capitalize()} is a premium feature. Please upgrade to access it.",
            details={"feature": feature},
        )


class PreviewRequiredError(ResumizeError):
    status_code = 409
    error_code = "preview_required"

    def __init__(self, message: str = "Please preview your resume before downloading."):
        super().__init__(message)


class OperationInProgressError(ResumizeError):
    status_code = 409
    error_code = "operation_in_progress"

    def __init__(self, operation: str):
        super().__init__(
            f"{operation.replace('_', ' ').capitalize()} is already running for this session.",
            details={"operation": operation},
        )


class SessionNotFoundError(ResumizeError):
    status_code = 404
    error_code = "session_not_found"

    def __init__(self, session_id: str):
        super().__init__("Session not found. It may have expired.", details={"session_id": session_id})


class ResumeNotFoundError(ResumizeError):
    status_code = 404
    error_code = "resume_not_found"

    def __init__(self, resume_id: str):
        super().__init__("Resume not found.", details={"resume_id": resume_id})


class AuthenticationError(ResumizeError):
    status_code = 401
    error_code = "not_authenticated"


class OTPError(ResumizeError):
    """One-time passcode verification failure."""

    status_code = 400
    error_code = "otp_error"

    MESSAGES = {
        "not_found": "No verification code was requested for this email.",
        "invalid": "Invalid OTP.",
        "expired": "This code has expired. Please request a new one.",
        "already_verified": "This email has already been verified.",
    }

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(self.MESSAGES.get(reason, "Verification failed."), details={"reason": reason})
