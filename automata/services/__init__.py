"""
Service layer for the Automata onboarding core.

Contains the logic the onboarding UI calls into:
- Ranks catalog templates for a business description (recommendation_service)
- Keeps the pre-signup selection record with expiry and capacity rules
  (onboarding_service)
- Provides the built-in template catalog (template_library)
- Abstracts the key-value slot the record is persisted in (storage)
"""

from .onboarding_service import (
    OnboardingState,
    generate_project_name,
    merge_business_context,
    merge_record,
)
from .recommendation_service import (
    RecommendationEngine,
    detect_industry,
    extract_keywords,
    get_industry_defaults,
    get_recommendations,
)
from .storage import InMemoryStore, JsonFileStore, KeyValueStore
from .template_library import (
    get_all_templates,
    get_template_by_id,
    get_templates_by_industry,
    get_templates_by_type,
)

__all__ = [
    "OnboardingState",
    "generate_project_name",
    "merge_business_context",
    "merge_record",
    "RecommendationEngine",
    "detect_industry",
    "extract_keywords",
    "get_industry_defaults",
    "get_recommendations",
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "get_all_templates",
    "get_template_by_id",
    "get_templates_by_industry",
    "get_templates_by_type",
]
