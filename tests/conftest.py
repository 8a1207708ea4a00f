"""Pytest configuration and fixtures for handler tests.

This module provides shared fixtures for testing the onboarding handler,
including sample EventBridge events, settings and mocked AWS clients.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from botocore.exceptions import ClientError

# Add backend source to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / 'backend' / 'src'))


# --- Event Fixtures ---


@pytest.fixture
def user_creation_event() -> dict:
    """EventBridge event for a CloudTrail CreateUser call."""
    return {
        'version': '0',
        'id': str(uuid4()),
        'detail-type': 'AWS API Call via CloudTrail',
        'source': 'aws.iam',
        'account': '123456789012',
        'region': 'us-east-1',
        'detail': {
            'eventSource': 'iam.amazonaws.com',
            'eventName': 'CreateUser',
            'userName': 'ec2-user',
        },
    }


def make_event(user_name: Any = None, **detail: Any) -> dict:
    """Build a minimal user creation event for the given user name."""
    payload: dict[str, Any] = {'eventName': 'CreateUser', **detail}
    if user_name is not None:
        payload['userName'] = user_name
    return {'id': str(uuid4()), 'source': 'aws.iam', 'detail': payload}


# --- Settings Fixtures ---


@pytest.fixture
def settings():
    """Settings with the default parameter table."""
    from onboarding.config import Settings

    return Settings(region='us-east-1')


@pytest.fixture
def aws_env(monkeypatch) -> None:
    """Lambda-like environment with a region configured."""
    monkeypatch.setenv('AWS_REGION', 'us-east-1')
    monkeypatch.delenv('ONE_TIME_PASSWORD_SECRET_NAME', raising=False)


# --- Mock Fixtures ---


def client_error(code: str, operation: str) -> ClientError:
    """Build a botocore ClientError with the given error code."""
    return ClientError(
        {'Error': {'Code': code, 'Message': f'{code} raised by test'}},
        operation,
    )


@pytest.fixture
def ssm_client() -> MagicMock:
    """SSM client returning a fixed email address."""
    client = MagicMock(name='ssm')
    client.get_parameter.return_value = {
        'Parameter': {
            'Name': '/users/ec2-user/email',
            'Type': 'SecureString',
            'Value': 'ops.team@example.com',
            'Version': 1,
        }
    }
    return client


@pytest.fixture
def secrets_client() -> MagicMock:
    """Secrets Manager client returning a fixed one-time password."""
    client = MagicMock(name='secretsmanager')
    client.get_secret_value.return_value = {
        'Name': 'OneTimePasswordSecret',
        'SecretString': json.dumps({'password': 'abc123'}),
    }
    return client


@pytest.fixture
def mock_boto3_client(mocker, ssm_client, secrets_client):
    """Mock boto3 client for AWS service calls."""
    clients = {'ssm': ssm_client, 'secretsmanager': secrets_client}

    def _factory(service: str, region_name: str | None = None):
        return clients[service]

    return mocker.patch('boto3.client', side_effect=_factory)
