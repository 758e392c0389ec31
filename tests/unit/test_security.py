"""검색어 정제/검증 테스트"""
import pytest

from pricecompare.core.exceptions import InvalidQueryException, ValidationError
from pricecompare.core.security import SecurityValidator


class TestSanitizeQuery:

    def test_strips_disallowed_characters(self):
        assert SecurityValidator.sanitize_query("<script>alert('x')</script>") == "scriptalertxscript"

    def test_keeps_word_space_and_hyphen(self):
        assert SecurityValidator.sanitize_query("usb-c cable_2m") == "usb-c cable_2m"

    def test_truncates_then_trims(self):
        raw = "a" * 99 + " " + "b" * 10
        result = SecurityValidator.sanitize_query(raw)
        assert result == "a" * 99
        assert len(result) <= 100

    def test_non_string_returns_empty(self):
        assert SecurityValidator.sanitize_query(None) == ""
        assert SecurityValidator.sanitize_query(123) == ""

    def test_non_ascii_letters_removed(self):
        assert SecurityValidator.sanitize_query("café") == "caf"


class TestValidateQuery:

    @pytest.mark.parametrize("raw", ["", "a", " a ", "!!", "<>"])
    def test_too_short_raises(self, raw):
        with pytest.raises(InvalidQueryException) as exc_info:
            SecurityValidator.clean_and_validate(raw)

        assert isinstance(exc_info.value, ValidationError)
        assert exc_info.value.error_code == "VALIDATION_ERROR"
        assert exc_info.value.reason == "Search query must be at least 2 characters"

    def test_valid_query_returned_clean(self):
        assert SecurityValidator.clean_and_validate("  Laptop!! ") == "Laptop"
