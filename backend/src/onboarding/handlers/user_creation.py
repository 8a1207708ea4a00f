"""IAM user creation event handler.

Reacts to an EventBridge notification for a newly created IAM user,
resolves the user's email address from SSM Parameter Store and fetches
the shared one-time password from Secrets Manager.

SECURITY NOTES:
- Email addresses are masked in logs
- The one-time password is never logged nor returned by the Lambda
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Mapping
from typing import Optional

from onboarding.config import EMAIL_NOT_CONFIGURED
from onboarding.config import Settings
from onboarding.events import get_detail
from onboarding.events import get_user_name
from onboarding.events import summarize_event
from onboarding.exceptions import OnboardingError
from onboarding.exceptions import ParameterLookupError
from onboarding.exceptions import SecretUnavailableError
from onboarding.services.aws_clients import invocation_clients
from onboarding.services.parameters import get_parameter_value
from onboarding.services.secrets import get_one_time_password
from onboarding.utils.logging import clear_request_context
from onboarding.utils.logging import configure_logging
from onboarding.utils.logging import get_logger
from onboarding.utils.logging import hash_for_correlation
from onboarding.utils.logging import log_event_summary
from onboarding.utils.logging import log_result
from onboarding.utils.logging import mask_email
from onboarding.utils.logging import mask_pii
from onboarding.utils.logging import set_request_context

configure_logging()
logger = get_logger(__name__)

NO_DETAIL_MESSAGE = "No detail"
UNKNOWN_USER = "<unknown>"


class ProcessingStatus(str, enum.Enum):
    """Outcome of processing one user creation event."""

    NO_DETAIL = "NO_DETAIL"
    PROCESSED = "PROCESSED"
    EMAIL_UNRESOLVED = "EMAIL_UNRESOLVED"
    SECRET_UNAVAILABLE = "SECRET_UNAVAILABLE"


@dataclass(frozen=True)
class ProcessingResult:
    """Typed result of a user creation event.

    ``email`` is the resolved address, the ``Not configured`` sentinel for
    unknown users, or None when the lookup failed.
    """

    status: ProcessingStatus
    message: str
    user_name: Optional[str] = None
    email: Optional[str] = None
    email_configured: bool = False
    one_time_password: Optional[str] = field(default=None, repr=False)
    errors: tuple[OnboardingError, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serializable summary without the email address or the password."""
        return {
            "status": self.status.value,
            "message": self.message,
            "userName": self.user_name,
            "emailConfigured": self.email_configured,
            "emailResolved": self.email_configured and self.email is not None,
            "passwordRetrieved": self.one_time_password is not None,
            "errors": [error.to_dict() for error in self.errors],
        }


def processed_message(user_name: Optional[str]) -> str:
    """Return the status message for an event that carried a detail."""
    display_name = UNKNOWN_USER if user_name is None else user_name
    return f"Processed event for user: {display_name}"


def _no_detail_result() -> ProcessingResult:
    logger.warning("No detail found in event")
    return ProcessingResult(
        status=ProcessingStatus.NO_DETAIL,
        message=NO_DETAIL_MESSAGE,
    )


def _failure_context(user_name: Optional[str], exc: BaseException) -> dict[str, Any]:
    return {
        "user": mask_pii(user_name) if user_name else UNKNOWN_USER,
        "user_hash": hash_for_correlation(user_name) if user_name else None,
        "error_type": type(exc).__name__,
    }


def _status_for(errors: list[OnboardingError]) -> ProcessingStatus:
    if any(isinstance(error, ParameterLookupError) for error in errors):
        return ProcessingStatus.EMAIL_UNRESOLVED
    if any(isinstance(error, SecretUnavailableError) for error in errors):
        return ProcessingStatus.SECRET_UNAVAILABLE
    return ProcessingStatus.PROCESSED


def _client_failure_result(
    event: Mapping[str, Any],
    settings: Settings,
    exc: Exception,
) -> ProcessingResult:
    """Result for an invocation whose clients could not be used at all."""
    user_name = get_user_name(get_detail(event) or {})
    parameter_name = settings.email_parameter_for(user_name)
    detail = type(exc).__name__

    errors: list[OnboardingError] = []
    if parameter_name is not None:
        errors.append(ParameterLookupError(parameter_name, detail=detail))
    errors.append(SecretUnavailableError(settings.secret_name, detail=detail))

    return ProcessingResult(
        status=_status_for(errors),
        message=processed_message(user_name),
        user_name=user_name,
        email=None if parameter_name is not None else EMAIL_NOT_CONFIGURED,
        email_configured=parameter_name is not None,
        errors=tuple(errors),
    )


def process_user_creation(
    event: Mapping[str, Any],
    ssm_client: Any,
    secrets_client: Any,
    settings: Settings,
) -> ProcessingResult:
    """Resolve the new user's email and fetch the one-time password.

    Lookup failures of any kind are recorded on the result instead of
    being raised.

    Args:
        event: EventBridge IAM user creation event
        ssm_client: SSM client
        secrets_client: Secrets Manager client
        settings: Invocation settings

    Returns:
        The processing result.
    """
    detail = get_detail(event)
    if detail is None:
        return _no_detail_result()

    user_name = get_user_name(detail)
    masked_user = mask_pii(user_name) if user_name else UNKNOWN_USER
    logger.info(f"New IAM user created: {masked_user}")

    errors: list[OnboardingError] = []

    email: Optional[str] = EMAIL_NOT_CONFIGURED
    parameter_name = settings.email_parameter_for(user_name)
    if parameter_name is not None:
        try:
            email = get_parameter_value(ssm_client, parameter_name)
            logger.info(f"User email: {mask_email(email)}")
        except ParameterLookupError as exc:
            email = None
            errors.append(exc)
            logger.error(
                "Failed to resolve user email",
                extra={**_failure_context(user_name, exc), "error": exc.to_dict()},
            )
        except Exception as exc:
            email = None
            errors.append(
                ParameterLookupError(parameter_name, detail=type(exc).__name__)
            )
            logger.exception(
                "Unexpected error resolving user email",
                extra=_failure_context(user_name, exc),
            )
    else:
        logger.info(f"User email: {EMAIL_NOT_CONFIGURED}")

    password: Optional[str] = None
    try:
        password = get_one_time_password(secrets_client, settings.secret_name)
        logger.info(f"One-time password retrieved for {masked_user}")
    except SecretUnavailableError as exc:
        errors.append(exc)
        logger.error(
            "Failed to retrieve one-time password",
            extra={**_failure_context(user_name, exc), "error": exc.to_dict()},
        )
    except Exception as exc:
        errors.append(
            SecretUnavailableError(settings.secret_name, detail=type(exc).__name__)
        )
        logger.exception(
            "Unexpected error retrieving one-time password",
            extra=_failure_context(user_name, exc),
        )

    return ProcessingResult(
        status=_status_for(errors),
        message=processed_message(user_name),
        user_name=user_name,
        email=email,
        email_configured=parameter_name is not None,
        one_time_password=password,
        errors=tuple(errors),
    )


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Handle an IAM user creation event.

    Args:
        event: EventBridge event
        context: Lambda context

    Returns:
        Serialized ProcessingResult.

    Raises:
        ConfigurationError: If no region is configured. Every other
            failure is reported on the result.
    """
    set_request_context(
        req_id=getattr(context, "aws_request_id", None),
        corr_id=event.get("id"),
    )
    try:
        log_event_summary(logger, summarize_event(event))

        if get_detail(event) is None:
            result = _no_detail_result()
        else:
            settings = Settings.from_env()
            try:
                with invocation_clients(settings.region) as clients:
                    result = process_user_creation(
                        event,
                        clients.ssm,
                        clients.secretsmanager,
                        settings,
                    )
            except Exception as exc:
                logger.exception("Error using AWS clients")
                result = _client_failure_result(event, settings, exc)

        response = result.to_dict()
        log_result(logger, response)
        return response
    finally:
        clear_request_context()
