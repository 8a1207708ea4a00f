"""Custom exception classes for the onboarding handler.

This module provides domain-specific exception classes that carry a
stable error code and structured error information, so that a failed
lookup can be reported to the caller instead of being hidden.
"""

from __future__ import annotations

from typing import Any
from typing import Optional


class OnboardingError(Exception):
    """Base exception for onboarding errors.

    All handler-specific exceptions should inherit from this class.

    Attributes:
        message: Human-readable error message.
        code: Stable machine-readable error code.
        detail: Optional additional context.
    """

    code = "onboarding_error"

    def __init__(
        self,
        message: str,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a serializable error record."""
        result: dict[str, Any] = {"code": self.code, "error": self.message}
        if self.detail:
            result["detail"] = self.detail
        return result


class ConfigurationError(OnboardingError):
    """Raised when required configuration is missing.

    Use when environment variables or settings are not properly configured.
    """

    code = "configuration_error"

    def __init__(self, config_name: str):
        super().__init__(f"Missing required configuration: {config_name}")
        self.config_name = config_name


class ParameterLookupError(OnboardingError):
    """Raised when the user's email parameter cannot be read."""

    code = "email_unresolved"

    def __init__(self, parameter_name: str, detail: Optional[str] = None):
        super().__init__(
            f"Parameter lookup failed: {parameter_name}",
            detail=detail,
        )
        self.parameter_name = parameter_name


class SecretUnavailableError(OnboardingError):
    """Raised when the one-time password secret cannot be fetched."""

    code = "secret_unavailable"

    def __init__(self, secret_name: str, detail: Optional[str] = None):
        super().__init__(
            f"Secret unavailable: {secret_name}",
            detail=detail,
        )
        self.secret_name = secret_name


class SecretFormatError(SecretUnavailableError):
    """Raised when a secret payload does not match the expected schema.

    The detail never includes the secret value itself.
    """

    code = "secret_malformed"

    def __init__(self, secret_name: str, detail: Optional[str] = None):
        super().__init__(secret_name, detail=detail)
        self.message = f"Secret payload is malformed: {secret_name}"
        self.args = (self.message,)
