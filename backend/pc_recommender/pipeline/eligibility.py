import logging
import math
from typing import Iterable, List, NamedTuple, Optional

from pc_recommender.pipeline.preferences import budget_range_to_min_max, storage_tier_to_min_gb
from pc_recommender.schemas.pc import BudgetBounds, StructuredListing, UserPreferences

logger = logging.getLogger(__name__)

DEFAULT_BUDGET_TOLERANCE = 0.12


class EligibilityResult(NamedTuple):
    ok: bool
    reason: Optional[str] = None


def _positive_finite(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value) and value > 0


def strict_meets_requirements(listing: StructuredListing) -> EligibilityResult:
    """
    Minimum data quality, independent of preferences:
    price, URL, CPU and RAM must all be present.
    """
    if not _positive_finite(listing.price):
        return EligibilityResult(False, "Missing price")
    if not listing.url:
        return EligibilityResult(False, "Missing URL")
    if not listing.cpu:
        return EligibilityResult(False, "Missing CPU")
    if not _positive_finite(listing.ram_gb):
        return EligibilityResult(False, "Missing RAM")
    return EligibilityResult(True)


def widen_budget(bounds: BudgetBounds, tolerance: float = DEFAULT_BUDGET_TOLERANCE) -> BudgetBounds:
    """
    Widen [min, max] by a fraction on both sides.
    A zero min stays zero and an unbounded max stays unbounded.
    """
    low = 0.0 if bounds.min == 0 else bounds.min * (1 - tolerance)
    high = None if bounds.max is None else bounds.max * (1 + tolerance)
    return BudgetBounds(min=low, max=high)


def within_budget(listing: StructuredListing, widened: BudgetBounds) -> bool:
    if listing.price < widened.min:
        return False
    return widened.max is None or listing.price <= widened.max


def meets_storage(listing: StructuredListing, min_gb: Optional[int], strict: bool = False) -> bool:
    """Unknown storage passes unless strict=True."""
    if min_gb is None:
        return True
    if listing.storage_gb is None:
        return not strict
    return listing.storage_gb >= min_gb


def filter_eligible(
    listings: Iterable[StructuredListing],
    preferences: UserPreferences,
    tolerance: float = DEFAULT_BUDGET_TOLERANCE,
    strict_storage: bool = False,
) -> List[StructuredListing]:
    """
    mandatory fields -> budget -> storage, keeping input order.
    """
    widened = widen_budget(budget_range_to_min_max(preferences.budget_range), tolerance)
    min_gb = storage_tier_to_min_gb(preferences.storage_tier)

    kept: List[StructuredListing] = []
    for listing in listings:
        check = strict_meets_requirements(listing)
        if not check.ok:
            logger.debug("Dropping %s: %s", listing.id, check.reason)
            continue
        if not within_budget(listing, widened):
            logger.debug("Dropping %s: price %.2f outside budget", listing.id, listing.price)
            continue
        if not meets_storage(listing, min_gb, strict=strict_storage):
            logger.debug("Dropping %s: storage %s below %s GB", listing.id, listing.storage_gb, min_gb)
            continue
        kept.append(listing)
    return kept
