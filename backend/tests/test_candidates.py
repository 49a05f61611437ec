import asyncio
from unittest.mock import AsyncMock, MagicMock

from pc_recommender.core.canopy import CanopySearchError
from pc_recommender.core.candidates import fetch_candidates
from pc_recommender.core.config import Settings
from pc_recommender.core.fallback import FALLBACK_CANDIDATES
from pc_recommender.schemas.pc import UserPreferences

SETTINGS = Settings(SEARCH_TERM="gaming desktop computer PC", SEARCH_LIMIT=40, SEARCH_TIMEOUT_SECONDS=2)

GOOD_RESULT = {
    "title": "iBUYPOWER Desktop (Intel Core i7, GeForce RTX 4070, 32GB DDR5 RAM, 2TB NVMe SSD)",
    "url": "https://www.amazon.com/dp/B0IBP00001",
    "price": {"value": 1799.0},
}
NO_RAM_RESULT = {
    "title": "Gaming PC (Intel Core i7, GeForce RTX 4070)",
    "url": "https://www.amazon.com/dp/B0IBP00002",
    "price": {"value": 1599.0},
}


def _prefs(budget="700-999", storage="any") -> UserPreferences:
    return UserPreferences(budget_range=budget, storage_tier=storage)


def _mock_client(**search_kwargs) -> MagicMock:
    client = MagicMock()
    client.search_amazon = AsyncMock(**search_kwargs)
    return client


def test_no_client_uses_fallback():
    batch = asyncio.run(fetch_candidates(_prefs(), None, SETTINGS))
    assert batch.used_fallback is True
    assert batch.listings == FALLBACK_CANDIDATES


def test_fallback_ids_are_distinct_and_not_urls():
    ids = [listing.id for listing in FALLBACK_CANDIDATES]
    assert ids == ["mock-1", "mock-2", "mock-3", "mock-4", "mock-5"]
    assert all(listing.id != listing.url for listing in FALLBACK_CANDIDATES)


def test_successful_search_parses_results():
    client = _mock_client(return_value=[GOOD_RESULT, NO_RAM_RESULT])

    batch = asyncio.run(fetch_candidates(_prefs("1500plus"), client, SETTINGS))

    assert batch.used_fallback is False
    assert [listing.id for listing in batch.listings] == ["https://www.amazon.com/dp/B0IBP00001"]
    assert batch.listings[0].storage_gb == 2048
    client.search_amazon.assert_awaited_once_with(
        search_term="gaming desktop computer PC",
        min_price=1500,
        max_price=None,
        limit=40,
    )


def test_zero_minimum_is_not_sent():
    client = _mock_client(return_value=[])

    batch = asyncio.run(fetch_candidates(_prefs("under700"), client, SETTINGS))

    assert batch.used_fallback is False
    assert batch.listings == []
    kwargs = client.search_amazon.await_args.kwargs
    assert kwargs["min_price"] is None
    assert kwargs["max_price"] == 700


def test_malformed_result_is_skipped_not_fatal():
    malformed = {"title": 12345, "url": ["not", "a", "string"], "price": {"value": 999.0}}
    client = _mock_client(return_value=[GOOD_RESULT, malformed, "garbage"])

    batch = asyncio.run(fetch_candidates(_prefs("1500plus"), client, SETTINGS))

    assert batch.used_fallback is False
    assert [listing.id for listing in batch.listings] == ["https://www.amazon.com/dp/B0IBP00001"]


def test_search_error_uses_fallback():
    client = _mock_client(side_effect=CanopySearchError("Canopy search failed: 500", status_code=500))

    batch = asyncio.run(fetch_candidates(_prefs(), client, SETTINGS))

    assert batch.used_fallback is True
    assert len(batch.listings) == len(FALLBACK_CANDIDATES)


def test_any_exception_uses_fallback():
    client = _mock_client(side_effect=RuntimeError("connection reset"))

    batch = asyncio.run(fetch_candidates(_prefs(), client, SETTINGS))

    assert batch.used_fallback is True


def test_timeout_uses_fallback():
    async def slow_search(**kwargs):
        await asyncio.sleep(5)
        return [GOOD_RESULT]

    client = MagicMock()
    client.search_amazon = slow_search
    settings = Settings(SEARCH_TIMEOUT_SECONDS=0.05)

    batch = asyncio.run(fetch_candidates(_prefs(), client, settings))

    assert batch.used_fallback is True
