# app/shared/exceptions.py
"""
Domain error taxonomy shared by adapters, composers and routes.

Adapters translate transport failures into these errors, composers let them
propagate (or swallow them for optional steps), and routes turn them into
HTTPException responses via to_detail().
"""
from typing import Any, Dict, Optional


class DiagnosisServiceError(Exception):
    """Base class for every error this service reports to clients."""

    status_code: int = 500
    kind: str = "InternalError"

    def __init__(self, message: str, **extra: Any):
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_detail(self) -> Dict[str, Any]:
        detail = {"error": self.message, "kind": self.kind}
        detail.update(self.extra)
        return detail


# ============================================================================
# CLIENT ERRORS
# ============================================================================
class MissingInput(DiagnosisServiceError):
    status_code = 400
    kind = "MissingInput"


class MissingParameter(DiagnosisServiceError):
    status_code = 400
    kind = "MissingParameter"


class InvalidInputFormat(DiagnosisServiceError):
    status_code = 400
    kind = "InvalidInputFormat"


class UnsupportedLanguage(DiagnosisServiceError):
    status_code = 400
    kind = "UnsupportedLanguage"

    def __init__(self, language: str, supported: Dict[str, str], feature: Optional[str] = None):
        codes = ", ".join(f"{code} ({name})" for code, name in supported.items())
        scope = f" for {feature}" if feature else ""
        super().__init__(
            f"Language '{language}' is not supported{scope}. Supported languages: {codes}",
            language=language,
            supportedLanguages=supported,
        )
        self.language = language
        self.supported = supported


class NotFound(DiagnosisServiceError):
    status_code = 404
    kind = "NotFound"


class ConcurrentUpdate(DiagnosisServiceError):
    status_code = 409
    kind = "ConcurrentUpdate"


# ============================================================================
# UPSTREAM ERRORS (always 500 to the end user)
# ============================================================================
class UpstreamError(DiagnosisServiceError):
    """A call to an external service failed."""

    kind = "UpstreamError"

    def __init__(self, service: str, message: str, **extra: Any):
        super().__init__(message, service=service, **extra)
        self.service = service


class ServiceNotConfigured(UpstreamError):
    kind = "ServiceNotConfigured"


class ServiceTimeout(UpstreamError):
    kind = "Timeout"


class ServiceUnreachable(UpstreamError):
    kind = "ServiceUnreachable"


class UpstreamRejected(UpstreamError):
    kind = "UpstreamRejected"

    def __init__(self, service: str, status: int, body: Any, message: Optional[str] = None):
        super().__init__(
            service,
            message or f"{service} rejected the request with status {status}",
            upstreamStatus=status,
            details=body,
        )
        self.status = status
        self.body = body


class Unauthorized(UpstreamError):
    kind = "Unauthorized"


class EmptyTranscription(UpstreamError):
    kind = "EmptyTranscription"
