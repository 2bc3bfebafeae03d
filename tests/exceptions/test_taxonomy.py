"""Tests for the error taxonomy and exception hierarchy."""

import pytest

from javastyle.exceptions import (
    AnalysisError,
    ConfigurationError,
    FileAccessError,
    IndexOutOfRange,
    InvalidConfigError,
    InvalidPathError,
    JavaStyleError,
    ParsingError,
)
from javastyle.exceptions.taxonomy import ErrorCode, InvariantViolation, StyleError


class TestErrorCode:
    """Test ErrorCode enum."""

    def test_scanning_error_codes(self):
        """Scanning errors are JS1xx."""
        assert ErrorCode.JS100.value == "JS100"  # Index out of range
        assert ErrorCode.JS101.value == "JS101"  # Token stream out of order
        assert ErrorCode.JS102.value == "JS102"  # Unknown type code
        assert ErrorCode.JS103.value == "JS103"  # Text between leaves

    def test_syntax_error_codes(self):
        """Syntax model errors are JS2xx."""
        assert ErrorCode.JS200.value == "JS200"
        assert ErrorCode.JS201.value == "JS201"
        assert ErrorCode.JS202.value == "JS202"
        assert ErrorCode.JS203.value == "JS203"
        assert ErrorCode.JS204.value == "JS204"

    def test_evaluation_error_codes(self):
        """Evaluation errors are JS3xx."""
        assert ErrorCode.JS300.value == "JS300"
        assert ErrorCode.JS301.value == "JS301"
        assert ErrorCode.JS302.value == "JS302"

    def test_aggregation_error_codes(self):
        """Aggregation errors are JS4xx."""
        assert ErrorCode.JS400.value == "JS400"
        assert ErrorCode.JS401.value == "JS401"
        assert ErrorCode.JS402.value == "JS402"
        assert ErrorCode.JS403.value == "JS403"

    def test_codes_unique(self):
        values = [code.value for code in ErrorCode]
        assert len(values) == len(set(values))


class TestStyleError:
    """Test StyleError base class."""

    def test_basic_error(self):
        """StyleError has message, code, and context."""
        err = StyleError(message="Token evaluated twice", code=ErrorCode.JS300)
        assert err.message == "Token evaluated twice"
        assert err.code == ErrorCode.JS300
        assert err.context == {}
        assert err.recoverable is False

    def test_str_format(self):
        """String representation includes the code."""
        err = StyleError(message="Unknown token type code '$$'", code=ErrorCode.JS102)
        assert str(err) == "[JS102] Unknown token type code '$$'"

    def test_to_json(self):
        """to_json returns a structured dict."""
        err = InvariantViolation(
            message="Token stream out of lexical order",
            code=ErrorCode.JS101,
            context={"line": 4},
        )
        data = err.to_json()
        assert data["error_code"] == "JS101"
        assert data["message"] == "Token stream out of lexical order"
        assert data["context"] == {"line": 4}
        assert data["recoverable"] is False

    def test_is_exception(self):
        """StyleError can be raised and caught."""
        with pytest.raises(StyleError):
            raise InvariantViolation("bad", ErrorCode.JS203)

    def test_index_out_of_range_is_invariant_violation(self):
        err = IndexOutOfRange("Token index is out of range", ErrorCode.JS100)
        assert isinstance(err, InvariantViolation)
        assert isinstance(err, StyleError)
        assert not isinstance(err, JavaStyleError)


class TestUserFacingErrors:
    """Test the JavaStyleError hierarchy."""

    def test_hierarchy(self):
        assert issubclass(FileAccessError, AnalysisError)
        assert issubclass(ParsingError, AnalysisError)
        assert issubclass(InvalidConfigError, ConfigurationError)
        assert issubclass(InvalidPathError, ConfigurationError)
        assert issubclass(AnalysisError, JavaStyleError)

    def test_details_in_str(self):
        err = InvalidConfigError("max_line_length", 0, "must be at least 1")
        assert "max_line_length" in str(err)
        assert "must be at least 1" in str(err)
        assert err.details["value"] == "0"

    def test_file_access_error(self, tmp_path):
        err = FileAccessError(tmp_path / "A.java", "permission denied")
        assert err.reason == "permission denied"
        assert "A.java" in str(err)
