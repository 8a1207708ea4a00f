"""boto3 client factory scoped to a single invocation."""

from __future__ import annotations

from contextlib import ExitStack
from contextlib import contextmanager
from typing import Any
from typing import Iterator
from typing import NamedTuple

import boto3


class InvocationClients(NamedTuple):
    """Clients used by one handler invocation."""

    ssm: Any
    secretsmanager: Any


def get_client(service: str, region_name: str | None = None) -> Any:
    """Return a new boto3 client for the given service."""
    return boto3.client(  # type: ignore[call-overload]
        service,
        region_name=region_name,
    )


def get_ssm_client(region_name: str | None = None) -> Any:
    return get_client("ssm", region_name=region_name)


def get_secretsmanager_client(region_name: str | None = None) -> Any:
    return get_client("secretsmanager", region_name=region_name)


@contextmanager
def invocation_clients(region_name: str | None = None) -> Iterator[InvocationClients]:
    """Open the SSM and Secrets Manager clients for one invocation.

    Both clients are closed when the block exits, whether it returns
    normally or raises.
    """
    with ExitStack() as stack:
        ssm = get_ssm_client(region_name)
        stack.callback(ssm.close)
        secretsmanager = get_secretsmanager_client(region_name)
        stack.callback(secretsmanager.close)
        yield InvocationClients(ssm=ssm, secretsmanager=secretsmanager)
