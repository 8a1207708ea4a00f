"""Lambda entrypoint for IAM user creation events."""

from __future__ import annotations

from typing import Any
from typing import Mapping

from onboarding.handlers.user_creation import lambda_handler as _handler


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Delegate to the user creation handler."""
    return _handler(dict(event), context)
