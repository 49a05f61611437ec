"""
Scoring and ranking of eligible listings.

score = 20 * (0.4 * cpu_tier + 0.4 * gpu_tier + 0.2 * ram_score) + 20 * budget_fit

Tiers are inferred from the CPU / GPU labels with ordered rule tables
(first match wins). Only the relative order of scores matters; the
ceiling is not exactly 100.
"""

import logging
import math
import re
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple

from pc_recommender.pipeline.eligibility import DEFAULT_BUDGET_TOLERANCE, filter_eligible
from pc_recommender.pipeline.preferences import budget_range_to_min_max
from pc_recommender.schemas.pc import BudgetBounds, Recommendation, StructuredListing, UserPreferences

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5

WEIGHTS = {"cpu": 0.4, "gpu": 0.4, "ram": 0.2}
PERFORMANCE_SCALE = 20
BUDGET_FIT_SCALE = 20

# Synthetic midpoint for an open-ended budget ("1500plus" => 1800)
UNBOUNDED_MIDPOINT_FACTOR = 1.2

DEFAULT_CPU_TIER = 2


class GpuTier(NamedTuple):
    tier: int
    is_discrete: bool


NO_DISCRETE_GPU = GpuTier(0, False)


class CpuRule(NamedTuple):
    name: str
    pattern: re.Pattern[str]
    tier: Callable[[str], int]


class GpuModelRule(NamedTuple):
    name: str
    pattern: re.Pattern[str]
    # (minimum model number, tier), highest first; anything below gets tier 1
    thresholds: Tuple[Tuple[int, int], ...]


def _fixed(tier: int) -> Callable[[str], int]:
    return lambda _label: tier


def _apple_tier(label: str) -> int:
    if "max" in label:
        return 5
    if "pro" in label:
        return 4
    return 3


CPU_RULES: Sequence[CpuRule] = (
    CpuRule("low-end", re.compile(r"(celeron|pentium|athlon)"), _fixed(1)),
    CpuRule("apple-silicon", re.compile(r"m[1-9]"), _apple_tier),
    CpuRule("intel-i9", re.compile(r"\bi9\b"), _fixed(5)),
    CpuRule("intel-i7", re.compile(r"\bi7\b"), _fixed(4)),
    CpuRule("intel-i5", re.compile(r"\bi5\b"), _fixed(3)),
    CpuRule("intel-i3", re.compile(r"\bi3\b"), _fixed(2)),
    CpuRule("ryzen-9", re.compile(r"ryzen\s*9"), _fixed(5)),
    CpuRule("ryzen-7", re.compile(r"ryzen\s*7"), _fixed(4)),
    CpuRule("ryzen-5", re.compile(r"ryzen\s*5"), _fixed(3)),
    CpuRule("ryzen-3", re.compile(r"ryzen\s*3"), _fixed(2)),
)

_INTEGRATED_RE = re.compile(r"(uhd|iris|xe\b|intel graphics|radeon graphics)")
_RX_MODEL_RE = re.compile(r"\brx\s*\d{4}\b")
_BRAND_KEYWORD_RE = re.compile(r"(rtx|gtx|\brx\b|arc)")

GPU_MODEL_RULES: Sequence[GpuModelRule] = (
    GpuModelRule("nvidia-rtx", re.compile(r"rtx\s*(\d{4})"), ((4080, 5), (4070, 4), (4060, 3), (3060, 2))),
    GpuModelRule("nvidia-gtx", re.compile(r"gtx\s*(\d{4})"), ()),
    GpuModelRule("amd-rx", re.compile(r"\brx\s*(\d{4})"), ((7900, 5), (7800, 4), (7600, 3), (6600, 2))),
    GpuModelRule("intel-arc", re.compile(r"\barc\s*a(\d{3})"), ((770, 3), (750, 2))),
)


def infer_cpu_tier(cpu: str) -> int:
    """1 (Celeron class) .. 5 (i9 / Ryzen 9 / Apple Max); 2 when unrecognised."""
    text = (cpu or "").lower()
    for rule in CPU_RULES:
        if rule.pattern.search(text):
            return rule.tier(text)
    return DEFAULT_CPU_TIER


def _tier_for_model(model: int, thresholds: Tuple[Tuple[int, int], ...]) -> int:
    for minimum, tier in thresholds:
        if model >= minimum:
            return tier
    return 1


def infer_gpu_tier(gpu: Optional[str]) -> GpuTier:
    """
    0..5 plus a discrete flag. Integrated graphics and a missing label are
    tier 0 / not discrete; a bare brand mention with no model is tier 1.
    """
    if not gpu:
        return NO_DISCRETE_GPU

    text = gpu.lower()
    if _INTEGRATED_RE.search(text) and not _RX_MODEL_RE.search(text):
        return NO_DISCRETE_GPU

    for rule in GPU_MODEL_RULES:
        m = rule.pattern.search(text)
        if m:
            return GpuTier(_tier_for_model(int(m.group(1)), rule.thresholds), True)

    if _BRAND_KEYWORD_RE.search(text):
        return GpuTier(1, True)
    return NO_DISCRETE_GPU


def infer_ram_score(ram_gb: int) -> int:
    if ram_gb >= 32:
        return 3
    if ram_gb >= 16:
        return 2
    if ram_gb >= 8:
        return 1
    return 0


def budget_midpoint(bounds: BudgetBounds) -> float:
    if bounds.max is None:
        return bounds.min * UNBOUNDED_MIDPOINT_FACTOR
    return (bounds.min + bounds.max) / 2


def budget_fit(price: float, bounds: BudgetBounds) -> float:
    """1.0 at the middle of the (un-widened) budget, falling to 0 one midpoint away."""
    mid = budget_midpoint(bounds)
    if mid <= 0:
        return 0.0
    return 1 - min(max(abs(price - mid) / mid, 0.0), 1.0)


def _round1(value: float) -> float:
    # Half-up, so 70.25 => 70.3 rather than banker's rounding
    return math.floor(value * 10 + 0.5) / 10


def score_listing(listing: StructuredListing, bounds: BudgetBounds, gpu: Optional[GpuTier] = None) -> float:
    if gpu is None:
        gpu = infer_gpu_tier(listing.gpu)
    performance = (
        WEIGHTS["cpu"] * infer_cpu_tier(listing.cpu)
        + WEIGHTS["gpu"] * gpu.tier
        + WEIGHTS["ram"] * infer_ram_score(listing.ram_gb)
    )
    fit = budget_fit(listing.price, bounds)
    return _round1(performance * PERFORMANCE_SCALE + fit * BUDGET_FIT_SCALE)


def format_storage(storage_gb: int) -> str:
    """1024 => "1TB", 1536 => "1.5TB", 512 => "512GB"."""
    if storage_gb >= 1024:
        tb = storage_gb / 1024
        return f"{int(tb) if tb.is_integer() else tb}TB"
    return f"{storage_gb}GB"


def build_reasons(listing: StructuredListing, gpu: GpuTier) -> List[str]:
    reasons = [f"CPU: {listing.cpu}"]
    if gpu.is_discrete and listing.gpu:
        reasons.append(f"GPU: {listing.gpu}")
    reasons.append(f"{listing.ram_gb}GB RAM")
    if listing.storage_gb:
        kind = listing.storage_kind.value if listing.storage_kind else "Storage"
        reasons.append(f"{format_storage(listing.storage_gb)} {kind}")
    return reasons


def recommend(
    candidates: Sequence[StructuredListing],
    preferences: UserPreferences,
    limit: int = DEFAULT_LIMIT,
    budget_tolerance: float = DEFAULT_BUDGET_TOLERANCE,
    strict_storage: bool = False,
) -> List[Recommendation]:
    """
    Filter, score and rank candidates for one set of preferences.

    - Eligibility: mandatory fields, then the widened budget, then storage.
    - Scores use the un-widened budget interval for budget fit.
    - Equal scores keep their input order. At most `limit` results.
    """
    if limit <= 0:
        return []

    bounds = budget_range_to_min_max(preferences.budget_range)
    eligible = filter_eligible(
        candidates,
        preferences,
        tolerance=budget_tolerance,
        strict_storage=strict_storage,
    )

    scored: List[Recommendation] = []
    for listing in eligible:
        gpu = infer_gpu_tier(listing.gpu)
        scored.append(
            Recommendation(
                listing=listing,
                score=score_listing(listing, bounds, gpu),
                reasons=build_reasons(listing, gpu),
            )
        )

    ranked = sorted(scored, key=lambda r: r.score, reverse=True)
    logger.debug("Ranked %d of %d candidates", len(ranked), len(candidates))
    return ranked[:limit]
