"""
Pydantic schemas for the pre-signup onboarding record.

The record is persisted as a single JSON blob (camelCase keys) and is
rebuilt through these models on every read. Updates are expressed with
all-optional models so that only the fields a caller actually sets take
part in a merge.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from automata.utils.constants import VERSION

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Business context ---

class BusinessContext(BaseModel):
    """
    Structured answers collected alongside the free-text business prompt.

    `industry` is free text: anything the UI lets the user pick is stored
    as-is and handed to the recommendation engine verbatim.
    """
    model_config = _CAMEL

    industry: str = Field("", description="Explicit industry choice (may be empty)", examples=["food"])
    description: str = Field("", description="Longer business description")
    goals: List[str] = Field(default_factory=list, examples=[["increase repeat visits"]])
    pain_points: List[str] = Field(default_factory=list, examples=[["too many no-shows"]])
    target_market: str = Field("", description="Who the business sells to")
    location: str = Field("", description="City/region, free text")


class BusinessContextUpdate(BaseModel):
    """Partial BusinessContext; unset fields keep their stored value."""
    model_config = _CAMEL

    industry: Optional[str] = None
    description: Optional[str] = None
    goals: Optional[List[str]] = None
    pain_points: Optional[List[str]] = None
    target_market: Optional[str] = None
    location: Optional[str] = None


# --- Onboarding record ---

class OnboardingRecord(BaseModel):
    """
    The single persisted onboarding record.

    Timestamps are epoch milliseconds. The record is considered absent once
    the current time passes `expires_at`.
    """
    model_config = _CAMEL

    version: int = Field(VERSION, description="Schema version; mismatches are discarded")
    business_prompt: str = Field("", description="Free-text business description")
    business_context: BusinessContext = Field(default_factory=BusinessContext)
    selected_templates: List[str] = Field(
        default_factory=list,
        description="Selected template ids in selection order",
        examples=[["birthday-rewards", "review-request"]]
    )
    custom_automation: str = Field(
        "",
        description="User-described automation; occupies one selection slot when non-empty"
    )
    ai_recommendations: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Last computed recommendation list (camelCase dicts)"
    )
    created_at: Optional[int] = Field(None, description="Creation time (epoch ms)")
    expires_at: Optional[int] = Field(None, description="Expiry time (epoch ms)")


class OnboardingUpdate(BaseModel):
    """
    Partial update applied by OnboardingState.save().

    Merge rules:
    - business_context: merged field by field (only set fields replace)
    - lists and scalars: replaced wholesale, never concatenated
    """
    model_config = _CAMEL

    business_prompt: Optional[str] = None
    business_context: Optional[BusinessContextUpdate] = None
    selected_templates: Optional[List[str]] = None
    custom_automation: Optional[str] = None
    ai_recommendations: Optional[List[Dict[str, Any]]] = None
