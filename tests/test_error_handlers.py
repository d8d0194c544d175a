"""
Tests for error types and user-facing error messages.
"""

from unittest.mock import patch

from bank_reserves.utils.error_handlers import (
    BankReservesError,
    RemoteRequestError,
    format_error_for_user,
    log_handled_error
)


class TestRemoteRequestError:

    def test_message_with_body(self):
        error = RemoteRequestError(500, "Internal Server Error", "oops", url="https://x/api/financials")

        assert str(error) == "FDIC request failed: 500 Internal Server Error - oops"
        assert error.error_code == "HTTP_500"
        assert error.context["url"] == "https://x/api/financials"

    def test_message_without_reason(self):
        assert str(RemoteRequestError(502)) == "FDIC request failed: 502"

    def test_to_dict(self):
        data = RemoteRequestError(404, "Not Found").to_dict()

        assert data["error_type"] == "RemoteRequestError"
        assert data["context"]["status"] == 404


class TestFormatErrorForUser:

    def test_application_error(self):
        assert format_error_for_user(BankReservesError("Something broke")) == "Something broke"

    def test_plain_exception(self):
        assert format_error_for_user(ValueError("bad json")) == "bad json"

    def test_exception_without_message(self):
        assert format_error_for_user(TimeoutError()) == "TimeoutError"


def test_log_handled_error_includes_context():
    with patch('bank_reserves.utils.error_handlers.logger') as mock_logger:
        log_handled_error(RemoteRequestError(503), "search_institutions", query="Wells")

    kwargs = mock_logger.error.call_args.kwargs
    assert kwargs["operation"] == "search_institutions"
    assert kwargs["error_code"] == "HTTP_503"
    assert kwargs["query"] == "Wells"
