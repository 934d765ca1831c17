"""Unit tests for currency/date formatting and parsing."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from vendas.domain.formatters import (
    format_currency,
    format_date,
    generate_id,
    parse_currency,
    parse_date,
    parse_timestamp,
)


# ── Currency ─────────────────────────────────────────────────────────────────


class TestFormatCurrency:

    def test_thousands_and_cents(self):
        assert format_currency(Decimal("1234.56")) == "R$ 1.234,56"

    def test_zero(self):
        assert format_currency(0) == "R$ 0,00"

    def test_float_input(self):
        assert format_currency(1.5) == "R$ 1,50"

    def test_millions(self):
        assert format_currency(Decimal("1000000")) == "R$ 1.000.000,00"

    def test_negative(self):
        assert format_currency(Decimal("-5")) == "-R$ 5,00"

    def test_rounds_half_away_from_zero(self):
        assert format_currency(Decimal("0.005")) == "R$ 0,01"
        assert format_currency(Decimal("2.345")) == "R$ 2,35"

    def test_negative_that_rounds_to_zero_has_no_sign(self):
        assert format_currency(Decimal("-0.001")) == "R$ 0,00"


class TestParseCurrency:

    def test_formatted_amount(self):
        assert parse_currency("R$ 1.234,56") == Decimal("1234.56")

    def test_plain_comma_decimal(self):
        assert parse_currency("15,90") == Decimal("15.90")

    def test_dot_is_treated_as_thousands_separator(self):
        assert parse_currency("1.5") == Decimal("15")

    def test_only_first_comma_is_decimal_point(self):
        assert parse_currency("12,3,4") == Decimal("12.3")

    def test_leading_comma(self):
        assert parse_currency(",5") == Decimal("0.5")

    @pytest.mark.parametrize("text", ["", "abc", "R$", ",", "R$ ,"])
    def test_unparseable_degrades_to_zero(self, text):
        assert parse_currency(text) == Decimal("0")

    @pytest.mark.parametrize(
        "amount", ["0.01", "1.50", "10", "999.99", "1234.56", "1000000.00"]
    )
    def test_round_trip_with_format(self, amount):
        assert parse_currency(format_currency(Decimal(amount))) == Decimal(amount)


# ── Dates ────────────────────────────────────────────────────────────────────


class TestFormatDate:

    def test_date(self):
        assert format_date(date(2024, 3, 5)) == "05/03/2024"

    def test_datetime(self):
        assert format_date(datetime(2023, 12, 31, 23, 59, tzinfo=timezone.utc)) == "31/12/2023"

    def test_iso_string(self):
        assert format_date("2024-03-05T12:00:00+00:00") == "05/03/2024"

    def test_iso_string_with_z_suffix(self):
        assert format_date("2024-03-05T12:00:00.000Z") == "05/03/2024"


class TestParseDate:

    def test_valid_date(self):
        assert parse_date("15/03/2024") == "2024-03-15T00:00:00+00:00"

    def test_day_overflow_rolls_into_next_month(self):
        assert parse_date("31/04/2024") == "2024-05-01T00:00:00+00:00"

    def test_day_zero_is_last_day_of_previous_month(self):
        assert parse_date("00/03/2024") == "2024-02-29T00:00:00+00:00"

    def test_month_thirteen_is_january_next_year(self):
        assert parse_date("01/13/2024") == "2025-01-01T00:00:00+00:00"

    def test_non_numeric_parts_raise(self):
        with pytest.raises(ValueError):
            parse_date("aa/bb/cccc")


class TestParseTimestamp:

    def test_z_suffix(self):
        assert parse_timestamp("2024-03-15T10:00:00.000Z") == datetime(
            2024, 3, 15, 10, tzinfo=timezone.utc
        )

    def test_offset_kept(self):
        moment = parse_timestamp("2024-03-15T10:00:00-03:00")
        assert moment.utcoffset().total_seconds() == -3 * 3600

    def test_missing_offset_means_utc(self):
        assert parse_timestamp("2024-03-15T10:00:00").tzinfo is timezone.utc


# ── Identifiers ──────────────────────────────────────────────────────────────


class TestGenerateId:

    def test_ids_are_lowercase_alphanumeric(self):
        new_id = generate_id()
        assert new_id.isalnum()
        assert new_id == new_id.lower()

    def test_ids_do_not_repeat(self):
        ids = {generate_id() for _ in range(1000)}
        assert len(ids) == 1000
