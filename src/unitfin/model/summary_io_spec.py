from decimal import Decimal
from pathlib import Path
from tempfile import TemporaryDirectory

from unitfin.model.summary_io import load_summary_by_month, save_summary_by_month


class DescribeSummaryYaml:
    def it_should_return_empty_when_missing(self):
        with TemporaryDirectory() as tmpdir:
            assert load_summary_by_month(Path(tmpdir) / "summary.yml") == {}

    def it_should_round_trip_month_keys(self):
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "data" / "summary.yml"
            save_summary_by_month(
                path,
                {"2025-01": {"income": Decimal("8000"), "expense": Decimal("2000")}},
            )
            loaded = load_summary_by_month(path)
            assert loaded == {"2025-01": {"income": Decimal("8000"), "expense": Decimal("2000")}}

    def it_should_default_missing_amounts_to_zero(self):
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "summary.yml"
            path.write_text("byMonth:\n  'March, 2025': {income: 50}\n", encoding="utf-8")
            loaded = load_summary_by_month(path)
            assert loaded["March, 2025"] == {"income": Decimal("50"), "expense": Decimal("0")}

    def it_should_tolerate_empty_file(self):
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "summary.yml"
            path.write_text("", encoding="utf-8")
            assert load_summary_by_month(path) == {}

    def it_should_keep_decimal_precision_when_saving(self):
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "summary.yml"
            save_summary_by_month(
                path, {"2025-02": {"income": Decimal("1234567.89"), "expense": Decimal("0.1")}}
            )
            loaded = load_summary_by_month(path)
            assert str(loaded["2025-02"]["income"]) == "1234567.89"
            assert str(loaded["2025-02"]["expense"]) == "0.1"

    def it_should_skip_entries_that_are_not_mappings(self):
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "summary.yml"
            path.write_text(
                "byMonth:\n  '2025-01': 500\n  '2025-02': [1, 2]\n  '2025-03': {income: 7}\n",
                encoding="utf-8",
            )
            assert load_summary_by_month(path) == {
                "2025-03": {"income": Decimal("7"), "expense": Decimal("0")}
            }

    def it_should_ignore_unexpected_top_level_shapes(self):
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "summary.yml"
            for text in ("- 1\n- 2\n", "byMonth: 42\n", "just text\n", "byMonth: {a: [\n"):
                path.write_text(text, encoding="utf-8")
                assert load_summary_by_month(path) == {}

    def it_should_zero_unreadable_amounts(self):
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "summary.yml"
            path.write_text("byMonth:\n  '2025-04': {income: lots, expense: .nan}\n", encoding="utf-8")
            assert load_summary_by_month(path)["2025-04"] == {
                "income": Decimal("0"),
                "expense": Decimal("0"),
            }
