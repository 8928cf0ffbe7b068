"""
Central configuration for the unit finance engine.

Path resolution lives in unitfin.workspace.Workspace, which provides a single
workspace root with computed path properties for all data locations:
  1. Explicit --data-dir CLI option
  2. UNITFIN_DATA environment variable
  3. Current working directory
"""

CURRENCY_SYMBOL = "₦"

# Earliest year offered by the summary year picker
FIRST_YEAR = 2016

# Label anchors sit at this fraction of the pie radius
LABEL_RADIUS_RATIO = 0.6

# Display name for records saved without a category
BLANK_CATEGORY = "—"

LEGACY_CATEGORY_KEY_PREFIX = "financeCategories"
