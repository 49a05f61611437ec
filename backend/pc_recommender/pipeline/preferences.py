from typing import Dict, Optional

from pc_recommender.schemas.pc import BudgetBounds, BudgetRange, StorageTier

DEFAULT_BUDGET_RANGE = BudgetRange.FROM_700_TO_999
DEFAULT_STORAGE_TIER = StorageTier.ONE_TB

BUDGET_LABELS: Dict[BudgetRange, str] = {
    BudgetRange.UNDER_700: "Under $700",
    BudgetRange.FROM_700_TO_999: "$700–$999",
    BudgetRange.FROM_1000_TO_1499: "$1,000–$1,499",
    BudgetRange.FROM_1500: "$1,500+",
}

STORAGE_LABELS: Dict[StorageTier, str] = {
    StorageTier.SMALL: "256–512GB SSD",
    StorageTier.ONE_TB: "1TB SSD",
    StorageTier.TWO_TB: "2TB+ SSD",
    StorageTier.ANY: "No preference",
}

_BUDGET_BOUNDS: Dict[BudgetRange, BudgetBounds] = {
    BudgetRange.UNDER_700: BudgetBounds(min=0, max=700),
    BudgetRange.FROM_700_TO_999: BudgetBounds(min=700, max=999),
    BudgetRange.FROM_1000_TO_1499: BudgetBounds(min=1000, max=1499),
    BudgetRange.FROM_1500: BudgetBounds(min=1500, max=None),
}

_STORAGE_MIN_GB: Dict[StorageTier, Optional[int]] = {
    StorageTier.SMALL: 256,
    StorageTier.ONE_TB: 1024,
    StorageTier.TWO_TB: 2048,
    StorageTier.ANY: None,
}


def budget_range_to_min_max(budget_range: BudgetRange) -> BudgetBounds:
    """
    Maps a budget option to its dollar interval, e.g. "700-999" => [700, 999].
    The top option has no upper bound (max=None).
    """
    return _BUDGET_BOUNDS[BudgetRange(budget_range)]


def storage_tier_to_min_gb(tier: StorageTier) -> Optional[int]:
    """
    Minimum storage in GB for a tier (1TB = 1024GB), or None for "no preference".
    """
    return _STORAGE_MIN_GB[StorageTier(tier)]


def coerce_budget(value: Optional[str]) -> BudgetRange:
    try:
        return BudgetRange((value or "").strip().lower())
    except ValueError:
        return DEFAULT_BUDGET_RANGE


def coerce_storage(value: Optional[str]) -> StorageTier:
    try:
        return StorageTier((value or "").strip().lower())
    except ValueError:
        return DEFAULT_STORAGE_TIER
