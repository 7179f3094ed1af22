"""Tests for the reusable check functions."""

from datetime import date, datetime

from catalog_tool.checks import (
    check_date_not_before,
    check_enum_code,
    check_enum_codes,
    check_integer_interval,
    check_mandatory,
    check_pattern,
    check_positive_integer,
    check_string,
    check_unique,
    is_blank,
    is_integer_like,
    next_year,
    parse_date,
)
from catalog_tool.enumerations import GENRE, MOVIE_RATING
from catalog_tool.violations import ViolationKind


class TestPredicates:
    """Tests for the small helper predicates."""

    def test_is_blank(self) -> None:
        assert is_blank(None) is True
        assert is_blank("") is True
        assert is_blank("   ") is True
        assert is_blank("x") is False
        assert is_blank(0) is False

    def test_is_integer_like(self) -> None:
        assert is_integer_like(7) is True
        assert is_integer_like(" 42 ") is True
        assert is_integer_like("-3") is True
        assert is_integer_like(True) is False
        assert is_integer_like("4.2") is False
        assert is_integer_like(4.0) is False
        assert is_integer_like("١٢") is False
        assert is_integer_like("１２") is False

    def test_next_year(self) -> None:
        assert next_year() == datetime.now().year + 1

    def test_parse_date(self) -> None:
        assert parse_date("1927-01-10") == date(1927, 1, 10)
        assert parse_date(datetime(2000, 5, 1, 12, 0)) == date(2000, 5, 1)
        assert parse_date("10/01/1927") is None
        assert parse_date(1927) is None


class TestMandatoryAndStrings:
    """Tests for mandatory-value and string checks."""

    def test_check_mandatory(self) -> None:
        violation = check_mandatory(None, "title")
        assert violation is not None
        assert violation.kind is ViolationKind.MANDATORY_VALUE
        assert violation.message == "A value for title must be provided!"
        assert check_mandatory([], "genre") is not None
        assert check_mandatory("x", "title") is None

    def test_check_string_length_counts_trimmed_text(self) -> None:
        """Surrounding whitespace does not count toward the limit."""
        assert check_string("  " + "a" * 50 + "  ", "title", 50) is None
        violation = check_string("a" * 51, "title", 50)
        assert violation is not None
        assert violation.kind is ViolationKind.RANGE

    def test_check_string_rejects_non_strings(self) -> None:
        violation = check_string(42, "title")
        assert violation is not None
        assert violation.kind is ViolationKind.RANGE

    def test_check_string_optional(self) -> None:
        assert check_string(None, "publisher", required=False) is None
        assert check_string("", "publisher", required=False) is None
        violation = check_string("", "title")
        assert violation is not None
        assert violation.kind is ViolationKind.MANDATORY_VALUE

    def test_check_pattern(self) -> None:
        assert check_pattern("046502656X", r"\d{9}[\dX]", "bad") is None
        violation = check_pattern("04650265", r"\d{9}[\dX]", "bad")
        assert violation is not None
        assert violation.kind is ViolationKind.PATTERN
        assert violation.message == "bad"


class TestIntegers:
    """Tests for integer checks."""

    def test_interval_bounds_are_inclusive(self) -> None:
        assert check_integer_interval(1459, "year", 1459, 2000) is None
        assert check_integer_interval("2000", "year", 1459, 2000) is None

    def test_interval_outside_bounds(self) -> None:
        violation = check_integer_interval(1458, "year", 1459, 2000)
        assert violation is not None
        assert violation.kind is ViolationKind.INTERVAL
        assert "between 1459 and 2000" in violation.message

    def test_interval_non_integer_is_range_violation(self) -> None:
        violation = check_integer_interval("nineteen", "year", 1459)
        assert violation is not None
        assert violation.kind is ViolationKind.RANGE

    def test_interval_missing(self) -> None:
        violation = check_integer_interval(None, "year", 1459)
        assert violation is not None
        assert violation.kind is ViolationKind.MANDATORY_VALUE
        assert check_integer_interval(None, "year", 1459, required=False) is None

    def test_positive_integer(self) -> None:
        assert check_positive_integer(1, "edition") is None
        assert check_positive_integer("3", "edition") is None
        for bad in (0, -1, "abc", 2.5):
            violation = check_positive_integer(bad, "edition")
            assert violation is not None
            assert violation.kind is ViolationKind.RANGE


class TestDates:
    """Tests for date checks."""

    def test_on_or_after_earliest(self) -> None:
        earliest = date(1895, 12, 28)
        assert check_date_not_before("1895-12-28", "release date", earliest) is None
        assert check_date_not_before(date(1950, 1, 1), "release date", earliest) is None

    def test_before_earliest_is_range_violation(self) -> None:
        violation = check_date_not_before("1895-12-27", "release date", date(1895, 12, 28))
        assert violation is not None
        assert violation.kind is ViolationKind.RANGE

    def test_unparseable_is_pattern_violation(self) -> None:
        violation = check_date_not_before("yesterday", "release date", date(1895, 12, 28))
        assert violation is not None
        assert violation.kind is ViolationKind.PATTERN


class TestEnumerationChecks:
    """Tests for enumeration code checks."""

    def test_single_code(self) -> None:
        assert check_enum_code(1, "rating", MOVIE_RATING) is None
        assert check_enum_code("5", "rating", MOVIE_RATING) is None
        violation = check_enum_code(6, "rating", MOVIE_RATING)
        assert violation is not None
        assert violation.kind is ViolationKind.RANGE
        assert violation.message == "Invalid value for rating: 6"

    def test_single_code_missing(self) -> None:
        violation = check_enum_code(None, "rating", MOVIE_RATING)
        assert violation is not None
        assert violation.kind is ViolationKind.MANDATORY_VALUE

    def test_codes_checked_element_by_element(self) -> None:
        assert check_enum_codes([1, 15], "genre", GENRE) is None
        violation = check_enum_codes([1, 16], "genre", GENRE)
        assert violation is not None
        assert violation.kind is ViolationKind.RANGE
        assert "16" in violation.message

    def test_codes_must_be_a_list(self) -> None:
        violation = check_enum_codes(3, "genre", GENRE)
        assert violation is not None
        assert violation.kind is ViolationKind.RANGE

    def test_empty_codes(self) -> None:
        violation = check_enum_codes([], "genre", GENRE)
        assert violation is not None
        assert violation.kind is ViolationKind.MANDATORY_VALUE
        assert check_enum_codes([], "genre", GENRE, required=False) is None


class TestUnique:
    """Tests for the uniqueness check."""

    def test_existing_key_is_uniqueness_violation(self) -> None:
        violation = check_unique("1", {"1": object()}, "duplicate")
        assert violation is not None
        assert violation.kind is ViolationKind.UNIQUENESS

    def test_new_key_and_no_registry(self) -> None:
        assert check_unique("2", {"1": object()}, "duplicate") is None
        assert check_unique("1", None, "duplicate") is None
