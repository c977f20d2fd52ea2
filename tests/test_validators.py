"""
Tests for input validation utilities.
"""

from datetime import date

import pytest
from utils.validators import (
    validate_email,
    validate_rfc,
    parse_iso_date,
    validate_date_range,
    validate_guest_count,
    validate_date_format,
    sanitize_input
)


class TestValidateEmail:
    """Tests for email validation."""

    def test_valid_email(self):
        """Test valid email formats."""
        assert validate_email('user@example.com') is True
        assert validate_email('user.name@example.com') is True
        assert validate_email('user+tag@example.co.uk') is True
        assert validate_email('ventas@empresa.com.mx') is True

    def test_invalid_email(self):
        """Test invalid email formats."""
        assert validate_email('') is False
        assert validate_email(None) is False
        assert validate_email('invalid') is False
        assert validate_email('missing@domain') is False
        assert validate_email('@nodomain.com') is False
        assert validate_email('spaces in@email.com') is False


class TestValidateRfc:
    """Tests for Mexican RFC validation."""

    def test_valid_rfc(self):
        """Company (12) and individual (13) RFCs."""
        assert validate_rfc('ABC850101AB1') is True
        assert validate_rfc('GODE561231GR8') is True
        assert validate_rfc('abc850101ab1') is True  # Case-insensitive

    def test_invalid_rfc(self):
        """Malformed RFCs."""
        assert validate_rfc('') is False
        assert validate_rfc(None) is False
        assert validate_rfc('ABC12') is False
        assert validate_rfc('1234567890123') is False


class TestParseIsoDate:
    """Tests for ISO date parsing."""

    def test_parse_date(self):
        assert parse_iso_date('2025-03-10') == date(2025, 3, 10)

    def test_parse_timestamp(self):
        """Time part is ignored."""
        assert parse_iso_date('2025-03-10T18:30:00+00:00') == date(2025, 3, 10)

    def test_parse_date_object(self):
        assert parse_iso_date(date(2025, 3, 10)) == date(2025, 3, 10)

    @pytest.mark.parametrize('value', ['', None, 'invalid', '2025-13-01'])
    def test_invalid_values(self, value):
        assert parse_iso_date(value) is None


class TestValidateDateRange:
    """Tests for date range validation."""

    def test_valid_date_range(self):
        """Test valid date ranges."""
        assert validate_date_range('2025-01-01', '2025-01-05') is True
        assert validate_date_range('2024-12-31', '2025-01-01') is True

    def test_same_day_is_invalid(self):
        """A stay needs at least one night."""
        assert validate_date_range('2025-01-01', '2025-01-01') is False

    def test_invalid_date_range(self):
        """Test invalid date ranges (end before start)."""
        assert validate_date_range('2025-01-05', '2025-01-01') is False

    def test_invalid_date_format(self):
        """Test invalid date formats."""
        assert validate_date_range('01-01-2025', '05-01-2025') is False
        assert validate_date_range('invalid', '2025-01-01') is False
        assert validate_date_range('2025-01-01', 'invalid') is False


class TestValidateGuestCount:
    """Tests for room capacity validation."""

    def test_single_room(self):
        assert validate_guest_count('single', 1) is True
        assert validate_guest_count('single', 2) is True
        assert validate_guest_count('single', 3) is False

    def test_double_room(self):
        assert validate_guest_count('double', 4) is True
        assert validate_guest_count('double', 5) is False

    def test_invalid_values(self):
        assert validate_guest_count('double', 0) is False
        assert validate_guest_count('suite', 1) is False
        assert validate_guest_count('single', None) is False


class TestValidateDateFormat:
    """Tests for date format validation."""

    def test_valid_date_format(self):
        """Test valid YYYY-MM-DD format."""
        assert validate_date_format('2025-01-15') is True
        assert validate_date_format('2020-02-29') is True  # Leap year

    def test_invalid_date_format(self):
        """Test invalid date formats."""
        assert validate_date_format('15-01-2025') is False
        assert validate_date_format('2025/01/15') is False
        assert validate_date_format('') is False
        assert validate_date_format(None) is False
        assert validate_date_format('2021-02-29') is False  # Not leap year


class TestSanitizeInput:
    """Tests for input sanitization."""

    def test_trim_whitespace(self):
        """Test trimming whitespace."""
        assert sanitize_input('  hello  ') == 'hello'
        assert sanitize_input('\n\ttext\n') == 'text'

    def test_limit_length(self):
        """Test limiting input length."""
        assert sanitize_input('hello world', max_length=5) == 'hello'
        assert sanitize_input('short', max_length=10) == 'short'

    def test_empty_input(self):
        """Test empty input handling."""
        assert sanitize_input('') == ''
        assert sanitize_input(None) == ''
