"""
Recommendation System - Deterministic Keyword Matching

This package holds the static rule tables and reasoning copy for the
template recommendation engine. Nothing here calls a model: "AI"
recommendations are industry detection plus weighted keyword matches.

The engine itself is in:
- automata/services/recommendation_service.py

Rule tables are in:
- automata/recommendation/tables.py

Reasoning sentences are in:
- automata/recommendation/reasoning.py
"""

from automata.recommendation.reasoning import (
    GENERIC_REASONING,
    REASONING_TEMPLATES,
    build_reasoning,
)
from automata.recommendation.tables import (
    DEFAULT_TABLES,
    DEFAULT_TEMPLATE_IDS,
    INDUSTRY_BOOSTS,
    INDUSTRY_PATTERNS,
    KEYWORD_MAPPINGS,
    KeywordMapping,
    RecommendationTables,
)

__all__ = [
    "GENERIC_REASONING",
    "REASONING_TEMPLATES",
    "build_reasoning",
    "DEFAULT_TABLES",
    "DEFAULT_TEMPLATE_IDS",
    "INDUSTRY_BOOSTS",
    "INDUSTRY_PATTERNS",
    "KEYWORD_MAPPINGS",
    "KeywordMapping",
    "RecommendationTables",
]
