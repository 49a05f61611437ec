"""
Candidate source for the recommend route.

One best-effort Canopy search with a timeout; on any failure (or when Canopy
isn't configured) the static fallback set is used and the batch is flagged.
"""

import asyncio
import logging
from typing import List, NamedTuple, Optional

from pydantic import ValidationError

from pc_recommender.core.canopy import CanopyClient, to_raw_listing
from pc_recommender.core.config import Settings
from pc_recommender.core.fallback import FALLBACK_CANDIDATES
from pc_recommender.pipeline.extract import parse_listing
from pc_recommender.pipeline.preferences import budget_range_to_min_max
from pc_recommender.schemas.pc import StructuredListing, UserPreferences

logger = logging.getLogger(__name__)


class CandidateBatch(NamedTuple):
    listings: List[StructuredListing]
    used_fallback: bool


def _fallback_batch() -> CandidateBatch:
    return CandidateBatch(list(FALLBACK_CANDIDATES), True)


async def search_candidates(
    client: CanopyClient,
    preferences: UserPreferences,
    settings: Settings,
) -> List[StructuredListing]:
    bounds = budget_range_to_min_max(preferences.budget_range)

    logger.info(
        "Calling Canopy: term=%r min=%s max=%s",
        settings.SEARCH_TERM,
        bounds.min,
        bounds.max,
    )
    results = await client.search_amazon(
        search_term=settings.SEARCH_TERM,
        min_price=bounds.min if bounds.min > 0 else None,
        max_price=bounds.max,
        limit=settings.SEARCH_LIMIT,
    )

    listings: List[StructuredListing] = []
    for result in results:
        if not isinstance(result, dict):
            logger.debug("Skipping non-object Canopy result: %r", result)
            continue
        try:
            raw = to_raw_listing(result)
        except ValidationError:
            logger.debug("Skipping malformed Canopy result: %r", result, exc_info=True)
            continue
        listing = parse_listing(raw)
        if listing is not None:
            listings.append(listing)

    logger.info("Canopy returned %d results, %d parsed", len(results), len(listings))
    return listings


async def fetch_candidates(
    preferences: UserPreferences,
    client: Optional[CanopyClient],
    settings: Settings,
) -> CandidateBatch:
    if client is None:
        logger.info("Canopy not configured, using fallback candidates")
        return _fallback_batch()

    try:
        listings = await asyncio.wait_for(
            search_candidates(client, preferences, settings),
            timeout=settings.SEARCH_TIMEOUT_SECONDS,
        )
    except Exception:
        logger.warning("Canopy search failed, using fallback candidates", exc_info=True)
        return _fallback_batch()

    return CandidateBatch(listings, False)
