import math
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BudgetRange(str, Enum):
    UNDER_700 = "under700"
    FROM_700_TO_999 = "700-999"
    FROM_1000_TO_1499 = "1000-1499"
    FROM_1500 = "1500plus"


class StorageTier(str, Enum):
    SMALL = "256-512"
    ONE_TB = "1tb"
    TWO_TB = "2tb"
    ANY = "any"


class StorageKind(str, Enum):
    SSD = "SSD"
    HDD = "HDD"
    UNKNOWN = "Unknown"


class UserPreferences(BaseModel):
    model_config = ConfigDict(frozen=True)

    budget_range: BudgetRange
    storage_tier: StorageTier


class BudgetBounds(BaseModel):
    """
    Price interval for a budget option.
    max=None means the interval has no upper bound.
    """
    model_config = ConfigDict(frozen=True)

    min: float
    max: Optional[float] = None


class RawListing(BaseModel):
    """
    Product record as returned by the upstream search. Nothing is guaranteed.
    """
    title: Optional[str] = None
    url: Optional[str] = None
    price: Optional[float] = None
    image_url: Optional[str] = None


class StructuredListing(BaseModel):
    """
    A listing whose mandatory fields (title, url, price, cpu, ram) were all extracted.
    id doubles as the product URL.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    title: str
    url: str = Field(min_length=1)
    price: float = Field(gt=0)
    cpu: str = Field(min_length=1)
    gpu: Optional[str] = None
    ram_gb: int = Field(gt=0)
    storage_gb: Optional[int] = None
    storage_kind: Optional[StorageKind] = None
    image_url: Optional[str] = None
    color: Optional[str] = None

    @field_validator("price")
    @classmethod
    def _finite_price(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("price must be finite")
        return v


class Recommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    listing: StructuredListing
    score: float
    reasons: List[str]


class RecommendRequest(BaseModel):
    # Plain strings: unknown values fall back to defaults instead of a 422
    budget_range: Optional[str] = None
    storage_tier: Optional[str] = None


class RecommendResponse(BaseModel):
    preferences: UserPreferences
    recommendations: List[Recommendation]
    used_mock_data: bool = False


class OptionItem(BaseModel):
    value: str
    label: str


class OptionsResponse(BaseModel):
    budget_ranges: List[OptionItem]
    storage_tiers: List[OptionItem]
    default_budget_range: str
    default_storage_tier: str
