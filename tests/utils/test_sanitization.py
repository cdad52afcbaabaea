import pytest

from utils.sanitization import is_safe_request_id, sanitize_for_logging


class TestSanitizeForLogging:
    """Test log injection protection"""

    def test_control_characters_replaced(self):
        assert sanitize_for_logging("abc\r\nFAKE LOG LINE") == "abc FAKE LOG LINE"

    def test_truncated(self):
        assert sanitize_for_logging("x" * 200, max_length=10) == "x" * 10 + "..."

    def test_bearer_token_redacted(self):
        assert sanitize_for_logging("Authorization: Bearer abc.def.ghi") == "Authorization: Bearer [REDACTED]"

    def test_query_credentials_redacted(self):
        assert sanitize_for_logging("/path?api_key=secret&token=t0k&x=1") == "/path?api_key=[REDACTED]&token=[REDACTED]&x=1"

    def test_empty_and_non_string(self):
        assert sanitize_for_logging("") == ""
        assert sanitize_for_logging(None) == ""
        assert sanitize_for_logging(12345) == "12345"


class TestIsSafeRequestID:
    """Test inbound request ID validation"""

    @pytest.mark.parametrize("value", [
        "abc-123",
        "3f2b8c1e-6d7a-4f0e-9a61-0d6c2b7e5a10",
        "svc.gateway:req_42",
    ])
    def test_accepted(self, value):
        assert is_safe_request_id(value)

    @pytest.mark.parametrize("value", [
        "",
        None,
        "has space",
        "line\nbreak",
        "abc-123\n",
        "quote\"d",
        "ümlaut",
    ])
    def test_rejected(self, value):
        assert not is_safe_request_id(value)

    def test_length_limit(self):
        assert is_safe_request_id("a" * 8, max_length=8)
        assert not is_safe_request_id("a" * 9, max_length=8)
