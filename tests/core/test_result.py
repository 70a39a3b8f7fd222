"""Tests for the Ok/Err result type."""

import pytest

from fieldstock.core.exceptions import RecordNotFoundError
from fieldstock.core.result import Err, Ok


class TestResult:
    def test_ok_unwraps_value(self):
        result = Ok(5)
        assert result.is_ok is True
        assert result.unwrap() == 5

    def test_err_unwrap_raises_error(self):
        error = RecordNotFoundError("group")
        result = Err(error)
        assert result.is_ok is False
        with pytest.raises(RecordNotFoundError) as exc_info:
            result.unwrap()
        assert exc_info.value is error

    def test_match_on_type(self):
        result = Err(RecordNotFoundError("group"))
        match result:
            case Ok(value):
                pytest.fail(f"unexpected value {value}")
            case Err(error):
                assert error.code == "RECORD_NOT_FOUND"
