"""
Pydantic schemas for automation templates and scored recommendations.

Templates are supplied by the host application and are read-only to the
recommendation engine. Display metadata the engine does not understand is
carried through unchanged (extra fields are allowed).

Field names are snake_case in Python and camelCase on the wire, matching the
JSON the web front end reads and writes.
"""

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# ============================================================================
# INDUSTRIES
# ============================================================================

Industry = Literal[
    "food",
    "health",
    "retail",
    "service",
    "technology",
    "education",
    "politics",
    "agnostic",
]

INDUSTRIES = (
    "food",
    "health",
    "retail",
    "service",
    "technology",
    "education",
    "politics",
    "agnostic",
)

DEFAULT_INDUSTRY = "agnostic"


# ============================================================================
# TEMPLATE MODELS
# ============================================================================

class Template(BaseModel):
    """
    A prebuilt automation type from the template catalog.

    Only `id`, `name` and `industries` matter to scoring; the rest is
    display metadata for the cards the UI renders.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    id: str = Field(
        ...,
        description="Unique template key",
        examples=["birthday-rewards", "abandoned-cart"]
    )
    name: str = Field(
        ...,
        description="Display name (also the ranking tie-breaker)",
        examples=["Birthday Rewards"]
    )
    description: str = Field("", description="One-paragraph display description")
    industries: List[str] = Field(
        default_factory=list,
        description="Industry tags this template suits, or the sentinel 'all'",
        examples=[["all"], ["retail", "food"]]
    )
    icon: str = Field("", description="Icon key for the card", examples=["birthday"])
    type: str = Field("", description="Automation channel/kind", examples=["email", "workflow"])
    frequency: str = Field("", description="Run cadence", examples=["daily", "weekly"])
    target_segment: str = Field("all", description="Customer segment the automation targets")
    template_config: Dict[str, Any] = Field(
        default_factory=dict,
        alias="config",
        description="Template-specific default configuration"
    )


class ScoredRecommendation(Template):
    """
    A template augmented with its relevance score and reasoning.

    Backfilled defaults carry score 1; genuine matches carry their summed
    industry and keyword bonuses.
    """
    score: int = Field(..., description="Relevance score", ge=0)
    reasoning: str = Field(
        ...,
        description="One sentence explaining why this template is recommended",
        examples=["Automated reminders reduce no-shows by up to 38%."]
    )
    matched_keywords: List[str] = Field(
        default_factory=list,
        description="Extracted keywords that contributed to this template's score",
        examples=[["birthday", "celebrate"]]
    )
