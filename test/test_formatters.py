"""
Tests for the form field formatters.
"""

from datetime import datetime
from decimal import Decimal

import pytest
from hypothesis import given, settings, strategies as st

from models.work_order import WorkOrderDetail
from utils.formatters import (
    accessories_summary,
    address,
    date_only,
    full_name,
    generated_timestamp,
    join_or_dash,
    money,
    text_or_dash,
)

settings.register_profile("ci", max_examples=50, deadline=2000)
settings.load_profile("ci")


class TestTextOrDash:
    @pytest.mark.parametrize("value", [None, "", "   ", "\n\t"])
    def test_blank_values_become_dash(self, value):
        assert text_or_dash(value) == "-"

    def test_value_is_trimmed(self):
        assert text_or_dash("  Turntable \n") == "Turntable"

    def test_non_string_is_converted(self):
        assert text_or_dash(42) == "42"


class TestFullName:
    def test_first_and_last(self):
        assert full_name(" Ada ", "Lovelace ") == "Ada Lovelace"

    def test_only_one_part(self):
        assert full_name(None, "Lovelace") == "Lovelace"
        assert full_name("Ada", "  ") == "Ada"

    def test_both_missing(self):
        assert full_name(None, None) == "-"
        assert full_name("", " ") == "-"


class TestAddress:
    def test_skips_blank_components(self):
        assert address("12 Main St", None, "  ", "Newmarket", "ON") == "12 Main St, Newmarket, ON"

    def test_components_are_trimmed(self):
        assert address(" 12 Main St ", " Unit 4") == "12 Main St, Unit 4"

    def test_nothing_to_join(self):
        assert address(None, "", "   ") == "-"
        assert address() == "-"


class TestJoinOrDash:
    def test_joins_names(self):
        assert join_or_dash(("Cash", "Debit")) == "Cash, Debit"

    def test_empty_sequence(self):
        assert join_or_dash(()) == "-"
        assert join_or_dash(None) == "-"


class TestDateOnly:
    def test_none_and_empty(self):
        assert date_only(None) == "-"
        assert date_only("") == "-"

    def test_unparsable(self):
        assert date_only("not-a-date") == "-"
        assert date_only("2024-13-45T00:00:00Z") == "-"

    def test_utc_timestamp(self):
        assert date_only("2024-03-05T00:00:00Z") == "03/05/2024"

    @pytest.mark.parametrize(
        "value",
        ["2024-03-05T14:12:00.12Z", "2024-03-05T14:12:00.123456789Z", "2024-03-05T14:12:00.5-05:00"],
    )
    def test_fractional_seconds_of_any_length(self, value):
        assert date_only(value) == "03/05/2024"

    def test_offset_timestamp_keeps_its_calendar_date(self):
        assert date_only("2024-03-05T23:59:59-05:00") == "03/05/2024"

    def test_date_without_time(self):
        assert date_only("2024-03-05") == "03/05/2024"

    def test_legacy_export_format(self):
        assert date_only("01/20/24 14:30:00") == "01/20/2024"

    def test_datetime_object(self):
        assert date_only(datetime(2024, 1, 2, 8, 0)) == "01/02/2024"


class TestMoney:
    def test_none_is_zero(self):
        assert money(None) == "$0.00"

    def test_two_decimals(self):
        assert money(12.3) == "$12.30"
        assert money(0) == "$0.00"

    def test_thousands_separator(self):
        assert money(1234567.891) == "$1,234,567.89"

    def test_half_up_rounding(self):
        assert money(0.005) == "$0.01"
        assert money(2.675) == "$2.68"

    def test_negative_amount(self):
        assert money(-5) == "-$5.00"
        assert money(Decimal("-1234.5")) == "-$1,234.50"

    def test_negative_zero_has_no_sign(self):
        assert money(-0.001) == "$0.00"

    @pytest.mark.parametrize("value", ["abc", float("nan"), float("inf"), True, [1]])
    def test_invalid_values_fall_back(self, value):
        assert money(value) == "$0.00"


class TestAccessoriesSummary:
    def test_fixed_order(self, sample_work_order):
        assert accessories_summary(sample_work_order) == (
            "Remote Control: 1 | Cables: 2 | Cord: 1 | Albums/CDs/Cassettes: 0"
        )

    def test_defaults_to_zero(self):
        item = WorkOrderDetail.from_dict({"reference_id": 1})
        assert accessories_summary(item) == (
            "Remote Control: 0 | Cables: 0 | Cord: 0 | Albums/CDs/Cassettes: 0"
        )


class TestGeneratedTimestamp:
    def test_afternoon(self):
        assert generated_timestamp(datetime(2024, 3, 5, 14, 30, 15)) == "2024-03-05, 2:30:15 p.m."

    def test_midnight_and_noon(self):
        assert generated_timestamp(datetime(2024, 3, 5, 0, 5, 0)) == "2024-03-05, 12:05:00 a.m."
        assert generated_timestamp(datetime(2024, 3, 5, 12, 0, 0)) == "2024-03-05, 12:00:00 p.m."


class TestFormattersNeverFail:
    @given(value=st.one_of(st.none(), st.text(), st.integers()))
    def test_text_formatters(self, value):
        assert text_or_dash(value)
        assert address(value, value)
        assert date_only(value)

    @given(value=st.one_of(st.none(), st.floats(), st.integers(), st.decimals(), st.text()))
    def test_money(self, value):
        assert money(value).lstrip("-").startswith("$")
