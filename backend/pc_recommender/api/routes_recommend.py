from typing import Optional

from fastapi import APIRouter, Depends

from pc_recommender.core.canopy import CanopyClient, get_canopy_client_from_settings
from pc_recommender.core.candidates import fetch_candidates
from pc_recommender.core.config import Settings, get_settings
from pc_recommender.pipeline.preferences import (
    BUDGET_LABELS,
    DEFAULT_BUDGET_RANGE,
    DEFAULT_STORAGE_TIER,
    STORAGE_LABELS,
    coerce_budget,
    coerce_storage,
)
from pc_recommender.pipeline.scoring import recommend
from pc_recommender.schemas.pc import (
    OptionItem,
    OptionsResponse,
    RecommendRequest,
    RecommendResponse,
    UserPreferences,
)

router = APIRouter(prefix="/v1", tags=["recommend"])


def get_candidate_client(settings: Settings = Depends(get_settings)) -> Optional[CanopyClient]:
    return get_canopy_client_from_settings(settings)


async def _recommend_for(
    preferences: UserPreferences,
    client: Optional[CanopyClient],
    settings: Settings,
) -> RecommendResponse:
    batch = await fetch_candidates(preferences, client, settings)
    recs = recommend(
        batch.listings,
        preferences,
        limit=settings.RECOMMEND_LIMIT,
        budget_tolerance=settings.BUDGET_TOLERANCE,
        strict_storage=settings.STRICT_STORAGE,
    )
    return RecommendResponse(
        preferences=preferences,
        recommendations=recs,
        used_mock_data=batch.used_fallback,
    )


@router.post("/recommend", response_model=RecommendResponse)
async def recommend_post(
    payload: RecommendRequest,
    client: Optional[CanopyClient] = Depends(get_candidate_client),
    settings: Settings = Depends(get_settings),
):
    """
    Top-N prebuilt desktops for a budget range and minimum storage tier.
    Unknown or missing values fall back to "700-999" / "1tb".
    """
    preferences = UserPreferences(
        budget_range=coerce_budget(payload.budget_range),
        storage_tier=coerce_storage(payload.storage_tier),
    )
    return await _recommend_for(preferences, client, settings)


@router.get("/recommend", response_model=RecommendResponse)
async def recommend_get(
    budget: Optional[str] = None,
    storage: Optional[str] = None,
    client: Optional[CanopyClient] = Depends(get_candidate_client),
    settings: Settings = Depends(get_settings),
):
    """
    Same as POST, with preferences in the query string:
      /v1/recommend?budget=700-999&storage=1tb
    """
    preferences = UserPreferences(
        budget_range=coerce_budget(budget),
        storage_tier=coerce_storage(storage),
    )
    return await _recommend_for(preferences, client, settings)


@router.get("/options", response_model=OptionsResponse)
def options():
    return OptionsResponse(
        budget_ranges=[OptionItem(value=k.value, label=v) for k, v in BUDGET_LABELS.items()],
        storage_tiers=[OptionItem(value=k.value, label=v) for k, v in STORAGE_LABELS.items()],
        default_budget_range=DEFAULT_BUDGET_RANGE.value,
        default_storage_tier=DEFAULT_STORAGE_TIER.value,
    )
