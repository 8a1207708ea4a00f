"""Secrets Manager helpers for the shared one-time password."""

from __future__ import annotations

from typing import Any

from botocore.exceptions import BotoCoreError
from botocore.exceptions import ClientError
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError as PydanticValidationError

from onboarding.exceptions import SecretFormatError
from onboarding.exceptions import SecretUnavailableError


class OneTimePasswordSecret(BaseModel):
    """Schema of the one-time password secret payload."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    password: str = Field(min_length=1, repr=False)


def get_secret_string(secrets_client: Any, secret_name: str) -> str:
    """Fetch a secret's string payload.

    Binary secrets arrive as raw bytes from botocore and are decoded as UTF-8.

    Raises:
        SecretUnavailableError: If the secret cannot be read or is empty.
    """
    try:
        response = secrets_client.get_secret_value(SecretId=secret_name)
    except ClientError as exc:
        code = exc.response.get("Error", {}).get("Code", "ClientError")
        raise SecretUnavailableError(secret_name, detail=code) from exc
    except BotoCoreError as exc:
        raise SecretUnavailableError(
            secret_name, detail=type(exc).__name__
        ) from exc

    secret_str = response.get("SecretString")
    if not secret_str and response.get("SecretBinary"):
        try:
            secret_str = bytes(response["SecretBinary"]).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SecretFormatError(
                secret_name, detail="SecretBinary is not UTF-8 text"
            ) from exc
    if not secret_str:
        raise SecretUnavailableError(secret_name, detail="Secret value is empty")
    return secret_str


def parse_one_time_password(secret_name: str, secret_str: str) -> str:
    """Extract the password field from a secret payload.

    Raises:
        SecretFormatError: If the payload is not a JSON object with a
            non-empty string ``password``.
    """
    try:
        secret = OneTimePasswordSecret.model_validate_json(secret_str)
    except PydanticValidationError as exc:
        # Only locations and error types; the input may be the secret itself.
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['type']}"
            for error in exc.errors()
        )
        raise SecretFormatError(secret_name, detail=problems) from exc
    return secret.password


def get_one_time_password(secrets_client: Any, secret_name: str) -> str:
    """Fetch and parse the one-time password secret."""
    return parse_one_time_password(
        secret_name,
        get_secret_string(secrets_client, secret_name),
    )
