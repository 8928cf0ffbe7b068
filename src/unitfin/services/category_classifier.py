from __future__ import annotations

"""
Category Classifier - display hints for free-text category names.

Maps a category name to a semantic icon tag with an ordered rule table of
substring patterns. The first matching rule wins. Purely cosmetic: nothing
here affects totals.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from unitfin.model.finance import FinanceType


class IconTag(str, Enum):
    tithe_offering = "tithe_offering"
    sales = "sales"
    rent_facility = "rent_facility"
    construction = "construction"
    utilities = "utilities"
    transport = "transport"
    salary = "salary"
    maintenance = "maintenance"
    equipment = "equipment"
    printing = "printing"
    connectivity = "connectivity"
    telephony = "telephony"
    medical = "medical"
    food = "food"
    event = "event"
    outreach = "outreach"
    gift = "gift"
    generic = "generic"


# Order matters: "building" is a facility before it is a construction project.
CATEGORY_RULES: Sequence[Tuple[Tuple[str, ...], IconTag]] = (
    (("tithe", "offering", "seed", "donation"), IconTag.tithe_offering),
    (("sale", "shop", "book", "merch"), IconTag.sales),
    (("rent", "lease", "building", "accommodation"), IconTag.rent_facility),
    (("project", "construct", "build"), IconTag.construction),
    (("utilit", "power", "electric", "generator", "diesel", "fuel"), IconTag.utilities),
    (("transport", "logistic", "bus", "car", "travel"), IconTag.transport),
    (("salary", "wage", "stipend", "allowance", "payroll"), IconTag.salary),
    (("mainten", "repair", "service"), IconTag.maintenance),
    (("equip", "asset"), IconTag.equipment),
    (("print", "stationer"), IconTag.printing),
    (("internet", "data", "telecom", "network"), IconTag.connectivity),
    (("phone", "airtime", "call"), IconTag.telephony),
    (("medical", "health", "clinic", "hospital", "medic", "insurance"), IconTag.medical),
    (("food", "refresh", "meal", "cater"), IconTag.food),
    (("event", "conference", "workshop"), IconTag.event),
    (("outreach", "evangel"), IconTag.outreach),
    (("gift",), IconTag.gift),
)

# Ionicons glyphs used by the mobile client for each tag
ICON_NAMES: dict[IconTag, str] = {
    IconTag.tithe_offering: "cash-outline",
    IconTag.sales: "cart-outline",
    IconTag.rent_facility: "home-outline",
    IconTag.construction: "construct-outline",
    IconTag.utilities: "flash-outline",
    IconTag.transport: "car-outline",
    IconTag.salary: "wallet-outline",
    IconTag.maintenance: "build-outline",
    IconTag.equipment: "cube-outline",
    IconTag.printing: "print-outline",
    IconTag.connectivity: "globe-outline",
    IconTag.telephony: "call-outline",
    IconTag.medical: "medkit-outline",
    IconTag.food: "fast-food-outline",
    IconTag.event: "calendar-outline",
    IconTag.outreach: "megaphone-outline",
    IconTag.gift: "gift-outline",
    IconTag.generic: "list-outline",
}


def classify(category_name: Optional[str]) -> IconTag:
    """Return the icon tag of the first rule whose pattern occurs in the name."""
    name = (category_name or "").lower()
    for patterns, tag in CATEGORY_RULES:
        if any(p in name for p in patterns):
            return tag
    return IconTag.generic


@dataclass(frozen=True)
class IconHint:
    """Icon and accent colour shown next to a category in the record form."""
    icon: str
    color: str


FALLBACK_HINT = IconHint("pricetag-outline", "#64748b")

_INCOME_HINTS: Sequence[Tuple[re.Pattern, IconHint]] = (
    (re.compile(r"tithe|tithes"), IconHint("cash-outline", "#16a34a")),
    (re.compile(r"offering|seed|pledge"), IconHint("wallet-outline", "#0ea5b7")),
    (re.compile(r"partnership|donation|gift"), IconHint("gift-outline", "#f59e0b")),
    (re.compile(r"worship|church|kingdom"), IconHint("home-sharp", "#ff6ff9")),
    (re.compile(r"sunday|service|praise"), IconHint("trophy-outline", "#94aff9")),
    (re.compile(r"sales|book|merch|shop"), IconHint("cart-outline", "#0f172a")),
    (re.compile(r"welfare|support|aid"), IconHint("heart-outline", "#ef4444")),
    (re.compile(r"project|building|fund"), IconHint("briefcase-outline", "#3b82f6")),
)

_EXPENSE_HINTS: Sequence[Tuple[re.Pattern, IconHint]] = (
    (re.compile(r"rent|lease|facility"), IconHint("home-outline", "#3b82f6")),
    (re.compile(r"equipment|repair|maintenance|fix"), IconHint("hammer-outline", "#0f172a")),
    (re.compile(r"transport|travel|fuel"), IconHint("car-outline", "#16a34a")),
    (re.compile(r"medical|health"), IconHint("medkit-outline", "#ef4444")),
    (re.compile(r"food|refreshment|catering"), IconHint("cafe-outline", "#f59e0b")),
    (re.compile(r"printing|media|publicity"), IconHint("print-outline", "#0ea5b7")),
)


def classify_for_type(category_name: Optional[str], finance_type: FinanceType) -> IconHint:
    """Type-aware icon hint used when picking a category for a new record."""
    name = (category_name or "").lower()
    rules = _INCOME_HINTS if FinanceType(finance_type) == FinanceType.income else _EXPENSE_HINTS
    for pattern, hint in rules:
        if pattern.search(name):
            return hint
    return FALLBACK_HINT


__all__ = [
    "CATEGORY_RULES",
    "FALLBACK_HINT",
    "ICON_NAMES",
    "IconHint",
    "IconTag",
    "classify",
    "classify_for_type",
]
