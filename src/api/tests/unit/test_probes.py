"""Unit tests for infrastructure domain probes."""

from unittest.mock import MagicMock

import structlog

from infrastructure.observability import (
    DefaultConnectionProbe,
    DefaultStartupProbe,
    ObservationContext,
)


class TestObservationContext:
    def test_as_dict_skips_unset_values(self):
        context = ObservationContext(request_id="req-1")

        assert context.as_dict() == {"request_id": "req-1"}

    def test_with_user_keeps_request_fields(self):
        context = ObservationContext(request_id="req-1", app_id="app")

        bound = context.with_user("u1", org_id="o1")

        assert bound.as_dict() == {
            "request_id": "req-1",
            "user_id": "u1",
            "org_id": "o1",
            "app_id": "app",
        }
        assert context.user_id is None

    def test_with_extra_merges(self):
        context = ObservationContext(extra={"a": 1}).with_extra(b=2)

        assert context.as_dict() == {"a": 1, "b": 2}


class TestConnectionProbe:
    def test_default_probe_creates_with_default_logger(self):
        assert DefaultConnectionProbe()._logger is not None

    def test_pool_closed_logs_role(self):
        logger = MagicMock(spec=structlog.stdlib.BoundLogger)

        DefaultConnectionProbe(logger=logger).pool_closed(role="write")

        logger.info.assert_called_once()
        assert logger.info.call_args.kwargs["role"] == "write"


class TestStartupProbe:
    def test_missing_encryption_key_is_a_warning(self):
        logger = MagicMock(spec=structlog.stdlib.BoundLogger)

        DefaultStartupProbe(logger=logger).encryption_key_missing()

        logger.warning.assert_called_once()
