"""Error hierarchy for PromptForge.

Every error carries a human-readable ``message`` plus a ``details`` dict of
context (template id, store path, provider, ...). ``http_status`` is the
status the REST layer answers with when the error escapes a route.
"""

from typing import Optional, Dict, Any


class PromptForgeError(Exception):
    """Base exception for all PromptForge errors."""

    http_status = 500

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def _note(self, key: str, value: Any) -> None:
        if value:
            self.details[key] = value

    def to_dict(self) -> Dict[str, Any]:
        """Payload for an error response."""
        return {
            "error": type(self).__name__,
            "detail": self.message,
            "context": dict(self.details),
        }

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ProviderError(PromptForgeError):
    """The LLM service failed or returned something unusable."""

    http_status = 502

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, details, cause)
        self.provider = provider
        # status reported by the upstream service, not ours
        self.status_code = status_code
        self._note("provider", provider)
        self._note("status_code", status_code)


class ConfigurationError(PromptForgeError):
    """Missing or invalid setting, e.g. no API key."""

    http_status = 503

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, details, cause)
        self.config_key = config_key
        self._note("config_key", config_key)


class TemplateError(PromptForgeError):
    """A template cannot be saved, changed or removed."""

    http_status = 400

    def __init__(
        self,
        message: str,
        template_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, details, cause)
        self.template_id = template_id
        self._note("template_id", template_id)


class TemplateNotFoundError(TemplateError):
    """Requested template does not exist."""

    http_status = 404

    def __init__(self, template_id: str):
        super().__init__(f"Template '{template_id}' not found", template_id=template_id)


class StoreError(PromptForgeError):
    """Custom templates could not be read from or written to storage."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, details, cause)
        self.path = path
        self._note("path", path)


class OptimizationError(PromptForgeError):
    """The optimizer call failed."""

    http_status = 502

    def __init__(
        self,
        message: str,
        stage: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, details, cause)
        self.stage = stage
        self._note("stage", stage)
