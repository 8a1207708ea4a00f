"""Tests for structured logging utilities."""

from __future__ import annotations

import json
import logging

import pytest

from onboarding.utils.logging import (
    StructuredLogFormatter,
    clear_request_context,
    get_logger,
    hash_for_correlation,
    mask_email,
    mask_pii,
    set_request_context,
)


class TestMaskEmail:
    """Tests for mask_email."""

    def test_masks_regular_address(self) -> None:
        assert mask_email('john.doe@example.com') == 'jo***@***.com'

    def test_masks_short_local_part(self) -> None:
        assert mask_email('a@b.co') == 'a***@***.co'

    def test_invalid_address(self) -> None:
        assert mask_email('not-an-email') == '***'
        assert mask_email('') == '***'


class TestMaskPii:
    """Tests for mask_pii."""

    def test_masks_long_value(self) -> None:
        assert mask_pii('ec2-user') == 'ec2-***'

    def test_masks_short_value(self) -> None:
        assert mask_pii('bob') == 'b***'

    def test_empty_value(self) -> None:
        assert mask_pii('') == '***'


def test_hash_for_correlation_is_stable() -> None:
    assert hash_for_correlation('ec2-user') == hash_for_correlation('ec2-user')
    assert len(hash_for_correlation('ec2-user')) == 12


class TestStructuredLogFormatter:
    """Tests for the JSON formatter and context logger."""

    @pytest.fixture(autouse=True)
    def _reset_context(self):
        yield
        clear_request_context()

    def _format_last(self, caplog) -> dict:
        return json.loads(StructuredLogFormatter().format(caplog.records[-1]))

    def test_includes_extra_and_context(self, caplog) -> None:
        logger = get_logger('tests.logging', component='handler')
        set_request_context(req_id='req-1', corr_id='evt-1')

        with caplog.at_level(logging.INFO, logger='tests.logging'):
            logger.info('Lookup done', extra={'user': 'ec2-***'})

        payload = self._format_last(caplog)
        assert payload['message'] == 'Lookup done'
        assert payload['level'] == 'INFO'
        assert payload['request_id'] == 'req-1'
        assert payload['correlation_id'] == 'evt-1'
        assert payload['extra'] == {'component': 'handler', 'user': 'ec2-***'}

    def test_context_cleared(self, caplog) -> None:
        logger = get_logger('tests.logging')
        set_request_context(req_id='req-2')
        clear_request_context()

        with caplog.at_level(logging.INFO, logger='tests.logging'):
            logger.info('No context')

        payload = self._format_last(caplog)
        assert 'request_id' not in payload
        assert 'extra' not in payload

    def test_includes_exception(self, caplog) -> None:
        logger = get_logger('tests.logging')

        with caplog.at_level(logging.ERROR, logger='tests.logging'):
            try:
                raise ValueError('bad value')
            except ValueError:
                logger.exception('Failed')

        payload = self._format_last(caplog)
        assert payload['exception']['type'] == 'ValueError'
        assert payload['source']['function'] == 'test_includes_exception'
