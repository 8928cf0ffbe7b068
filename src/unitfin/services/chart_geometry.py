from __future__ import annotations

"""
Chart Geometry - two-slice income/expense pie.

Angles are in degrees, measured clockwise from 12 o'clock. The expense slice
starts at 0 and the income slice takes the complement, so the two always
close the circle. Output is plain data; drawing is left to the caller.
"""

import math
from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal
from typing import Optional, Tuple, Union

from unitfin.config import LABEL_RADIUS_RATIO
from unitfin.services.currency import Number

FULL_CIRCLE = 360.0


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class ArcDescriptor:
    """A filled wedge between two angles of the enclosing circle."""
    start_angle: float
    end_angle: float
    radius: float
    center: Point
    start_point: Point
    end_point: Point
    large_arc: bool
    path: str

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle


@dataclass(frozen=True)
class PieGeometry:
    expense_arc: Optional[ArcDescriptor]
    income_arc: Optional[ArcDescriptor]
    expense_label_pos: Optional[Point]
    income_label_pos: Optional[Point]
    expense_percent: Decimal
    income_percent: Decimal

    @property
    def is_empty(self) -> bool:
        return self.expense_arc is None and self.income_arc is None

    @classmethod
    def empty(cls) -> PieGeometry:
        return cls(None, None, None, None, Decimal("0.0"), Decimal("0.0"))


def polar_to_cartesian(center: Point, radius: float, angle_deg: float) -> Point:
    rad = math.radians(angle_deg - 90.0)
    return Point(center.x + radius * math.cos(rad), center.y + radius * math.sin(rad))


def _fmt(v: float) -> str:
    return f"{v:.4f}".rstrip("0").rstrip(".")


def describe_arc(center: Point, radius: float, start_angle: float, end_angle: float) -> ArcDescriptor:
    """Build a wedge descriptor plus its SVG path.

    The path is drawn from the end angle back to the start angle and closed
    through the centre. A wedge covering the whole circle is split into two
    half arcs since a single arc with identical endpoints draws nothing.
    """
    start = polar_to_cartesian(center, radius, end_angle)
    end = polar_to_cartesian(center, radius, start_angle)
    span = end_angle - start_angle
    large_arc = span > 180.0
    r = _fmt(radius)
    if span <= 0:
        path = ""
    elif span >= FULL_CIRCLE:
        mid = polar_to_cartesian(center, radius, start_angle + span / 2)
        path = (
            f"M {_fmt(start.x)} {_fmt(start.y)} "
            f"A {r} {r} 0 0 0 {_fmt(mid.x)} {_fmt(mid.y)} "
            f"A {r} {r} 0 0 0 {_fmt(end.x)} {_fmt(end.y)} "
            f"L {_fmt(center.x)} {_fmt(center.y)} Z"
        )
    else:
        path = (
            f"M {_fmt(start.x)} {_fmt(start.y)} "
            f"A {r} {r} 0 {1 if large_arc else 0} 0 {_fmt(end.x)} {_fmt(end.y)} "
            f"L {_fmt(center.x)} {_fmt(center.y)} Z"
        )
    return ArcDescriptor(
        start_angle=start_angle,
        end_angle=end_angle,
        radius=radius,
        center=center,
        start_point=start,
        end_point=end,
        large_arc=large_arc,
        path=path,
    )


def _as_point(center: Union[Point, Tuple[float, float]]) -> Point:
    if isinstance(center, Point):
        return center
    return Point(float(center[0]), float(center[1]))


def build(
    expense_magnitude: Number,
    income_magnitude: Number,
    radius: float,
    center: Union[Point, Tuple[float, float]],
) -> PieGeometry:
    """
    Convert income and expense totals into pie slices and label anchors.

    Args:
        expense_magnitude: Total expense (sign ignored)
        income_magnitude: Total income (sign ignored)
        radius: Pie radius
        center: Pie centre as a Point or (x, y)

    Returns:
        PieGeometry; empty when both magnitudes are zero
    """
    expense = abs(Decimal(str(expense_magnitude or 0)))
    income = abs(Decimal(str(income_magnitude or 0)))
    total = expense + income
    if total == 0:
        return PieGeometry.empty()

    origin = _as_point(center)
    expense_span = float(Decimal(360) * expense / total)

    expense_arc = describe_arc(origin, radius, 0.0, expense_span)
    income_arc = describe_arc(origin, radius, expense_span, FULL_CIRCLE)

    label_radius = radius * LABEL_RADIUS_RATIO
    expense_mid = expense_span / 2
    income_mid = expense_span + (FULL_CIRCLE - expense_span) / 2

    # Truncate income so the displayed pair always adds up to 100.0
    income_percent = (income / total * 1000).to_integral_value(rounding=ROUND_DOWN) / 10
    income_percent = income_percent.quantize(Decimal("0.1"))
    expense_percent = Decimal(100) - income_percent

    return PieGeometry(
        expense_arc=expense_arc,
        income_arc=income_arc,
        expense_label_pos=polar_to_cartesian(origin, label_radius, expense_mid),
        income_label_pos=polar_to_cartesian(origin, label_radius, income_mid),
        expense_percent=expense_percent,
        income_percent=income_percent,
    )


__all__ = [
    "ArcDescriptor",
    "PieGeometry",
    "Point",
    "build",
    "describe_arc",
    "polar_to_cartesian",
]
