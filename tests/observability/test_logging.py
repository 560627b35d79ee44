"""
Tests for correlation ids, structured logging helpers and error mapping.

System role: Verification of observability and error translation plumbing
"""

import logging

import pytest
from fastapi import HTTPException

from wathiqa.api.error_handling import handle_archive_errors, to_http_exception
from wathiqa.core.exceptions import (
    ArchiveStoreError,
    DocumentNotFoundError,
    SessionExpiredError,
    UnknownBlockError,
    UsernameTakenError,
)
from wathiqa.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from wathiqa.observability.log_utils import log_with_context, safe_log_value
from wathiqa.observability.logger import CorrelationIdFilter


class TestCorrelationId:
    def test_set_and_clear(self) -> None:
        set_correlation_id("req-1")
        assert get_correlation_id() == "req-1"

        clear_correlation_id()
        assert get_correlation_id() == ""

    def test_generates_when_missing(self) -> None:
        value = set_correlation_id()

        assert value
        assert get_correlation_id() == value
        clear_correlation_id()

    def test_filter_stamps_records(self) -> None:
        set_correlation_id("req-2")
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

        CorrelationIdFilter().filter(record)

        assert record.correlation_id == "req-2"
        clear_correlation_id()


class TestLogUtils:
    def test_safe_log_value_summarizes_collections(self) -> None:
        assert safe_log_value({"a": 1, "b": 2}) == "dict(2 keys)"
        assert safe_log_value(["x"]) == "list(1 items)"
        assert safe_log_value(None) == "None"

    def test_safe_log_value_truncates(self) -> None:
        assert safe_log_value("x" * 20, max_length=5).startswith("xxxxx... (truncated")

    def test_log_with_context(self, caplog) -> None:
        logger = logging.getLogger("wathiqa.test")

        with caplog.at_level(logging.INFO, logger="wathiqa.test"):
            log_with_context(logger, logging.INFO, "filed", reference="A.1.1", metadata={"k": 1})

        record = caplog.records[-1]
        assert record.reference == "A.1.1"
        assert record.metadata == "dict(1 keys)"


class TestErrorMapping:
    @pytest.mark.parametrize(
        "error,status_code",
        [
            (UnknownBlockError("XX"), 404),
            (DocumentNotFoundError("d"), 404),
            (SessionExpiredError("Session expired"), 401),
            (ArchiveStoreError("down", operation="resolve_section"), 503),
        ],
    )
    def test_to_http_exception(self, error, status_code: int) -> None:
        exc = to_http_exception(error)

        assert exc.status_code == status_code
        assert exc.detail == error.message

    @pytest.mark.asyncio
    async def test_decorator_hides_unexpected_errors(self) -> None:
        @handle_archive_errors
        async def route():
            raise RuntimeError("secret connection string")

        with pytest.raises(HTTPException) as exc_info:
            await route()

        assert exc_info.value.status_code == 500
        assert "secret" not in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_decorator_maps_value_error(self) -> None:
        @handle_archive_errors
        async def route():
            raise ValueError("limit must be positive")

        with pytest.raises(HTTPException) as exc_info:
            await route()

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_decorator_maps_username_taken(self) -> None:
        @handle_archive_errors
        async def route():
            raise UsernameTakenError("nadia")

        with pytest.raises(HTTPException) as exc_info:
            await route()

        assert exc_info.value.status_code == 409
        assert exc_info.value.detail == "Username nadia already exists"
