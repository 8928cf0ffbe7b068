"""
Service layer for the unit finance engine.

Functional core separated from the imperative shell (CLI). Services are pure
business logic over already-fetched values.

Principles:
- No UI framework imports (Rich, Typer)
- Collaborators injected through constructors or arguments
- Functions return data structures, not void
- Fully testable with simple unit tests
"""

from unitfin.services.aggregation_service import (
    CategoryTotal,
    MonthBucket,
    YearSummary,
    YearTotals,
    aggregate_by_month,
    summarize_year,
)
from unitfin.services.category_classifier import IconTag, classify, classify_for_type
from unitfin.services.category_registry import CategoryRegistry, RenameResult, relabel_records
from unitfin.services.chart_geometry import PieGeometry, build as build_pie_geometry
from unitfin.services.comparison_service import (
    ComparisonResolver,
    ComparisonResult,
    FetchedMonthTotals,
    TrendLabel,
)
from unitfin.services.currency import format_compact, format_full, format_percent
from unitfin.services.exceptions import (
    CategoryConflict,
    CategoryNotFound,
    InvalidCategoryName,
    RegistryError,
)

__all__ = [
    "CategoryTotal",
    "MonthBucket",
    "YearSummary",
    "YearTotals",
    "aggregate_by_month",
    "summarize_year",
    "IconTag",
    "classify",
    "classify_for_type",
    "CategoryRegistry",
    "RenameResult",
    "relabel_records",
    "PieGeometry",
    "build_pie_geometry",
    "ComparisonResolver",
    "ComparisonResult",
    "FetchedMonthTotals",
    "TrendLabel",
    "format_compact",
    "format_full",
    "format_percent",
    "CategoryConflict",
    "CategoryNotFound",
    "InvalidCategoryName",
    "RegistryError",
]
