"""SSM Parameter Store helpers."""

from __future__ import annotations

from typing import Any

from botocore.exceptions import BotoCoreError
from botocore.exceptions import ClientError

from onboarding.exceptions import ParameterLookupError


def get_parameter_value(ssm_client: Any, parameter_name: str) -> str:
    """Fetch a parameter value, decrypting SecureString parameters.

    Args:
        ssm_client: SSM client
        parameter_name: Fully qualified parameter name

    Returns:
        The parameter's string value.

    Raises:
        ParameterLookupError: If the parameter is missing, unreadable
            or empty.
    """
    try:
        response = ssm_client.get_parameter(
            Name=parameter_name,
            WithDecryption=True,
        )
    except ClientError as exc:
        code = exc.response.get("Error", {}).get("Code", "ClientError")
        raise ParameterLookupError(parameter_name, detail=code) from exc
    except BotoCoreError as exc:
        raise ParameterLookupError(
            parameter_name, detail=type(exc).__name__
        ) from exc

    value = (response.get("Parameter") or {}).get("Value")
    if not value:
        raise ParameterLookupError(parameter_name, detail="Parameter value is empty")
    return value
