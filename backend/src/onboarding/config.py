"""Runtime configuration for the user creation handler.

Environment Variables:
    AWS_REGION: Region for the SSM and Secrets Manager clients
        (falls back to AWS_DEFAULT_REGION)
    ONE_TIME_PASSWORD_SECRET_NAME: Secret holding the shared one-time
        password (default: "OneTimePasswordSecret")
    LOG_LEVEL: Log level for structured logging (default: "INFO")
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from dataclasses import field
from types import MappingProxyType
from typing import Mapping
from typing import Optional

from onboarding.exceptions import ConfigurationError

EMAIL_NOT_CONFIGURED = "Not configured"

DEFAULT_SECRET_NAME = "OneTimePasswordSecret"

# Username -> SSM parameter holding that user's email address.
USER_EMAIL_PARAMETERS: Mapping[str, str] = MappingProxyType(
    {
        "ec2-user": "/users/ec2-user/email",
        "s3-user": "/users/s3-user/email",
    }
)


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one invocation."""

    region: str
    secret_name: str = DEFAULT_SECRET_NAME
    email_parameters: Mapping[str, str] = field(
        default_factory=lambda: USER_EMAIL_PARAMETERS
    )

    def email_parameter_for(self, user_name: Optional[str]) -> Optional[str]:
        """Return the email parameter name for a user, or None if unknown."""
        if user_name is None:
            return None
        return self.email_parameters.get(user_name)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from the Lambda environment.

        Raises:
            ConfigurationError: If no region is configured.
        """
        region = os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION")
        if not region:
            raise ConfigurationError("AWS_REGION")
        secret_name = (
            os.getenv("ONE_TIME_PASSWORD_SECRET_NAME") or DEFAULT_SECRET_NAME
        )
        return cls(region=region, secret_name=secret_name)
