"""Utility modules for the onboarding handler."""

from onboarding.utils.logging import (
    configure_logging,
    get_logger,
    hash_for_correlation,
    mask_email,
    mask_pii,
    set_request_context,
    clear_request_context,
)

__all__ = [
    "clear_request_context",
    "configure_logging",
    "get_logger",
    "hash_for_correlation",
    "mask_email",
    "mask_pii",
    "set_request_context",
]
