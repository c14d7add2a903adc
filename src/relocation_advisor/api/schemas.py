"""Request schemas for the Relocation Advisor API."""

from __future__ import annotations

from typing import Annotated, List, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictBool, StrictInt, StrictStr


def _require_number(value: object) -> object:
    # JSON true/false and numeric strings are not ratings
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a number")
    return value


Number = Annotated[float, BeforeValidator(_require_number)]


class PreferencesPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    budget: Union[StrictStr, Number]
    climate_preference: StrictStr = Field(..., min_length=1, alias="climatePreference")
    healthcare_importance: StrictInt = Field(..., ge=0, le=10, alias="healthcareImportance")
    lgbtq_friendly: StrictBool = Field(..., alias="lgbtqFriendly")
    safety_importance: StrictInt = Field(..., ge=0, le=10, alias="safetyImportance")


class HealthcarePayload(BaseModel):
    quality: Number = Field(..., ge=0, le=10)
    cost: Number = Field(..., ge=1, le=5)


class DestinationPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: StrictStr = Field(..., min_length=1)
    cost_of_living: Number = Field(..., ge=1, le=5, alias="costOfLiving")
    climate: StrictStr = Field(..., min_length=1)
    healthcare: HealthcarePayload
    safety: Number = Field(..., ge=0, le=10)
    lgbtq_friendly: Number = Field(..., ge=0, le=10, alias="lgbtqFriendly")


class MatchScorePayload(BaseModel):
    preferences: PreferencesPayload
    destination: DestinationPayload


class RecommendationsPayload(BaseModel):
    preferences: PreferencesPayload
    destinations: List[DestinationPayload] = Field(default_factory=list)
    limit: Optional[StrictInt] = Field(None, ge=1)
