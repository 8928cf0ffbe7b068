from decimal import Decimal

from unitfin.services.currency import format_compact, format_full, format_percent


class DescribeFormatCompact:
    def it_should_show_small_amounts_whole(self):
        assert format_compact(999) == "₦999"
        assert format_compact(0) == "₦0"

    def it_should_abbreviate_thousands_and_millions(self):
        assert format_compact(1500) == "₦1.5K"
        assert format_compact(2_500_000) == "₦2.5M"
        assert format_compact(Decimal("3900000000")) == "₦3.9B"
        assert format_compact(1_200_000_000_000) == "₦1.2T"

    def it_should_drop_trailing_zero_decimal(self):
        assert format_compact(1000) == "₦1K"
        assert format_compact(2_000_000) == "₦2M"

    def it_should_keep_sign_in_front_of_symbol(self):
        assert format_compact(-2_000_000) == "-₦2M"
        assert format_compact(-450) == "-₦450"

    def it_should_treat_missing_amount_as_zero(self):
        assert format_compact(None) == "₦0"
        assert format_compact(float("nan")) == "₦0"


class DescribeFormatFull:
    def it_should_group_thousands(self):
        assert format_full(1234567) == "₦1,234,567"
        assert format_full(Decimal("999.4")) == "₦999"

    def it_should_prefix_negative_sign(self):
        assert format_full(-6000) == "-₦6,000"


class DescribeFormatPercent:
    def it_should_sign_positive_values(self):
        assert format_percent(Decimal("12.5")) == "+12.5%"

    def it_should_drop_decimal_for_whole_numbers(self):
        assert format_percent(Decimal("100.0")) == "+100%"
        assert format_percent(Decimal("-3.0")) == "-3%"

    def it_should_never_show_negative_zero(self):
        assert format_percent(Decimal("-0.0")) == "0%"
        assert format_percent(0) == "0%"


class DescribeHugeAmounts:
    def it_should_format_full_beyond_default_decimal_precision(self):
        assert format_full(10**40) == "₦" + f"{10**40:,}"
        assert format_full(-(10**30)) == "-₦" + f"{10**30:,}"

    def it_should_keep_largest_suffix_for_huge_compact_amounts(self):
        assert format_compact(10**40) == "₦1" + "0" * 28 + "T"
        assert format_compact(Decimal("1.5E+35")) == "₦15" + "0" * 22 + "T"

    def it_should_format_huge_fractional_percentages(self):
        assert format_percent(Decimal("1" + "0" * 30 + ".25")) == "+1" + "0" * 30 + ".3%"
