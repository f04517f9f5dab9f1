"""
Recommendation Service - Deterministic Keyword & Industry Matching

This service ranks automation templates for a free-text business description
during onboarding. No model is called: recommendations are computed from
static rule tables, so the same input always yields the same output.

Architecture:
- Pattern: Rule-based scoring (industry bonus + industry boost + keyword weights)
- Industry: first matching pattern in a fixed, ordered list
- Keywords: whole-word matches against a normalized copy of the text
- Ranking: score descending, then display name ascending
- Output: up to 5 ScoredRecommendation models

Scoring rules (additive, no cap):
- +5 when the template is tagged "all"
- +15 when the template is tagged with the resolved industry
- +10 when the template is in the industry's boost list
- +weight for each distinct keyword whose mapping includes the template

Backfill:
When fewer than 3 templates score above zero, the fixed defaults
(birthday-rewards, welcome-series, monthly-newsletter) are appended in order
with score 1 until 5 entries are reached or the defaults run out.
"""

import logging
import re
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Pattern,
    Sequence,
    Tuple,
    Union,
)

from pydantic import BaseModel, ValidationError

from automata.recommendation.reasoning import REASONING_TEMPLATES, build_reasoning
from automata.recommendation.tables import DEFAULT_TABLES, RecommendationTables
from automata.schemas.onboarding import BusinessContext
from automata.schemas.templates import DEFAULT_INDUSTRY, ScoredRecommendation, Template
from automata.services.template_library import get_all_templates
from automata.utils.constants import (
    ALL_INDUSTRIES,
    BACKFILL_SCORE,
    INDUSTRY_DEFAULT_SCORE,
    MAX_RECOMMENDATIONS,
    MIN_RECOMMENDATIONS,
)
from automata.utils.logging import preview

logger = logging.getLogger(__name__)

TemplateLike = Union[Template, Mapping[str, Any]]
TemplateSource = Union[Sequence[TemplateLike], Callable[[], Sequence[TemplateLike]]]
ContextLike = Union[BusinessContext, Mapping[str, Any]]

INDUSTRY_MATCH_BONUS = 15
ALL_INDUSTRIES_BONUS = 5
INDUSTRY_BOOST_BONUS = 10

_NON_WORD = re.compile(r"[^\w\s]")


def _normalize(text: str) -> str:
    """Lowercase and turn punctuation into spaces so word boundaries survive."""
    return _NON_WORD.sub(" ", text.lower())


def _keyword_pattern(keyword: str, mappings: Mapping[str, Any]) -> Pattern[str]:
    """
    Whole-word pattern for a mapping keyword.

    A trailing plural "s" still counts ("birthdays" -> birthday), unless the
    plural is a keyword of its own ("news" must not also count as "new").
    """
    suffix = "" if f"{keyword}s" in mappings else "s?"
    return re.compile(rf"\b{re.escape(keyword)}{suffix}\b", re.IGNORECASE)


def _string_list(value: Any) -> List[str]:
    """Keep only the string items of a list/tuple; anything else is ignored."""
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, str)]


class RecommendationEngine:
    """
    Scores and ranks templates for a business description.

    Args:
        templates: Catalog to rank. A sequence of Template models (or dicts in
            the catalog's JSON shape), or a zero-argument callable returning
            one; re-read on every call. None means the built-in catalog.
        tables: Industry patterns, keyword mappings, boosts and backfill ids.
        reasoning: Reasoning sentences keyed by template id then industry.
    """

    def __init__(
        self,
        templates: Optional[TemplateSource] = None,
        tables: RecommendationTables = DEFAULT_TABLES,
        reasoning: Optional[Dict[str, Dict[str, str]]] = None,
    ):
        self._templates = templates
        self.tables = tables
        self.reasoning = REASONING_TEMPLATES if reasoning is None else reasoning
        self._keyword_patterns: List[Tuple[str, Pattern[str]]] = [
            (keyword, _keyword_pattern(keyword, tables.keyword_mappings))
            for keyword in tables.keyword_mappings
        ]

    # =========================================================================
    # CATALOG
    # =========================================================================

    def _load_templates(self) -> List[Template]:
        """Read the catalog, skipping entries that are not valid templates."""
        source = self._templates
        if source is None:
            return get_all_templates()

        try:
            raw = source() if callable(source) else source
        except Exception as e:
            logger.error(f"Template catalog provider failed: {e}")
            return []

        templates: List[Template] = []
        for item in raw or []:
            if isinstance(item, Template):
                templates.append(item)
                continue
            try:
                templates.append(Template.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping malformed catalog entry: {e.error_count()} validation errors")
        return templates

    # =========================================================================
    # PUBLIC OPERATIONS
    # =========================================================================

    def detect_industry(self, prompt: Optional[str]) -> str:
        """
        Detect the industry of a business description.

        Patterns are tested in table order (food, health, retail, service,
        technology, education, politics) and the first hit wins. Empty or
        non-text input, or no hit at all, gives "agnostic".
        """
        if not prompt or not isinstance(prompt, str):
            return DEFAULT_INDUSTRY

        lower_prompt = prompt.lower()
        for industry, pattern in self.tables.industry_patterns:
            if pattern.search(lower_prompt):
                return industry

        return DEFAULT_INDUSTRY

    def extract_keywords(self, prompt: Optional[str]) -> List[str]:
        """
        Return the mapping keywords present in the text as whole words.

        The result holds each keyword once, in keyword-table order.
        """
        if not prompt or not isinstance(prompt, str):
            return []

        normalized = _normalize(prompt)
        return [
            keyword for keyword, pattern in self._keyword_patterns
            if pattern.search(normalized)
        ]

    def calculate_score(self, template: Template, industry: str, keywords: Iterable[str]) -> int:
        """Sum the industry, boost and keyword bonuses for one template."""
        score = 0

        if ALL_INDUSTRIES in template.industries:
            score += ALL_INDUSTRIES_BONUS
        if industry in template.industries:
            score += INDUSTRY_MATCH_BONUS

        if template.id in self.tables.boosts_for(industry):
            score += INDUSTRY_BOOST_BONUS

        for keyword in dict.fromkeys(keywords):
            mapping = self.tables.keyword_mappings.get(keyword)
            if mapping and template.id in mapping.templates:
                score += mapping.weight

        return score

    def generate_reasoning(
        self,
        template: Template,
        industry: str,
        keywords: Iterable[str] = (),
    ) -> str:
        """
        One-sentence reasoning for a template.

        `keywords` is accepted for call symmetry with calculate_score but does
        not influence the sentence.
        """
        return build_reasoning(template.id, industry, self.reasoning)

    def matched_keywords(self, template: Template, keywords: Iterable[str]) -> List[str]:
        """Keywords from the input whose mapping includes this template."""
        matched = []
        for keyword in dict.fromkeys(keywords):
            mapping = self.tables.keyword_mappings.get(keyword)
            if mapping and template.id in mapping.templates:
                matched.append(keyword)
        return matched

    def get_recommendations(
        self,
        prompt: Optional[str],
        context: Optional[ContextLike] = None,
    ) -> List[ScoredRecommendation]:
        """
        Rank the catalog for a business description.

        Steps:
        1. Resolve industry: context industry if given, else detect from prompt
        2. Extract keywords from the prompt, goals and pain points (deduplicated)
        3. Score every template and attach reasoning + matched keywords
        4. Sort by score descending, then name ascending (case-insensitive)
        5. Keep scores above zero, first 5
        6. Backfill from the default list when fewer than 3 remain

        Input with no signal at all (blank prompt, no context industry, no
        keywords from goals or pain points) skips scoring and returns the
        backfill defaults.

        Args:
            prompt: Free-text business description (may be empty or None)
            context: BusinessContext or mapping with optional industry,
                goals and painPoints/pain_points

        Returns:
            Between 0 and 5 ScoredRecommendation models. Never raises.
        """
        try:
            return self._rank(prompt, context)
        except Exception as e:
            logger.error(f"Failed to compute recommendations: {e}", exc_info=True)
            return []

    def get_industry_defaults(self, industry: Optional[str]) -> List[ScoredRecommendation]:
        """
        Quick picks for an industry without a prompt.

        Returns the industry's boost templates (agnostic list when it has
        none) that exist in the catalog, in boost-list order, each with a
        fixed score of 10.
        """
        industry = industry or DEFAULT_INDUSTRY
        templates = {template.id: template for template in reversed(self._load_templates())}

        defaults = []
        for template_id in self.tables.boosts_for(industry):
            template = templates.get(template_id)
            if template is None:
                continue
            defaults.append(self._build(template, INDUSTRY_DEFAULT_SCORE, industry, []))

        logger.info(f"Industry defaults for industry={industry}: {len(defaults)} templates")
        return defaults

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _rank(self, prompt: Optional[str], context: Optional[ContextLike]) -> List[ScoredRecommendation]:
        prompt_text = prompt if isinstance(prompt, str) else ""
        context_industry, goals, pain_points = self._read_context(context)

        industry = context_industry or self.detect_industry(prompt_text)

        keywords = self.extract_keywords(prompt_text)
        for text in goals + pain_points:
            keywords.extend(self.extract_keywords(text))
        unique_keywords = list(dict.fromkeys(keywords))

        logger.info(
            f"get_recommendations called: industry={industry}, "
            f"keywords={unique_keywords}, prompt='{preview(prompt_text)}'"
        )

        templates = self._load_templates()
        if not templates:
            logger.warning("Template catalog is empty, returning no recommendations")
            return []

        if not (prompt_text.strip() or context_industry or unique_keywords):
            logger.info("No business signal provided, returning default templates")
            return self._backfill([], templates, industry)

        scored = [
            self._build(
                template,
                self.calculate_score(template, industry, unique_keywords),
                industry,
                self.matched_keywords(template, unique_keywords),
            )
            for template in templates
        ]
        scored.sort(key=lambda rec: (-rec.score, rec.name.casefold(), rec.name))

        recommendations = [rec for rec in scored if rec.score > 0][:MAX_RECOMMENDATIONS]

        if len(recommendations) < MIN_RECOMMENDATIONS:
            recommendations = self._backfill(recommendations, templates, industry)

        logger.info(
            f"Returning {len(recommendations)} recommendations: "
            f"{[(rec.id, rec.score) for rec in recommendations]}"
        )
        return recommendations

    def _backfill(
        self,
        recommendations: List[ScoredRecommendation],
        templates: List[Template],
        industry: str,
    ) -> List[ScoredRecommendation]:
        """Append missing default templates (score 1) in default-list order."""
        result = list(recommendations)
        present = {rec.id for rec in result}
        by_id = {template.id: template for template in reversed(templates)}

        for template_id in self.tables.default_template_ids:
            if len(result) >= MAX_RECOMMENDATIONS:
                break
            if template_id in present:
                continue
            template = by_id.get(template_id)
            if template is None:
                continue
            result.append(self._build(template, BACKFILL_SCORE, industry, []))
            present.add(template_id)

        return result

    def _build(
        self,
        template: Template,
        score: int,
        industry: str,
        matched: List[str],
    ) -> ScoredRecommendation:
        data = template.model_dump(by_alias=True)
        data.update(
            score=score,
            reasoning=self.generate_reasoning(template, industry, matched),
            matchedKeywords=matched,
        )
        return ScoredRecommendation.model_validate(data)

    @staticmethod
    def _read_context(context: Optional[ContextLike]) -> Tuple[Optional[str], List[str], List[str]]:
        """Pull (industry, goals, pain points) out of a context, ignoring bad types."""
        if context is None:
            return None, [], []

        if isinstance(context, BaseModel):
            context = context.model_dump(by_alias=True)

        if not isinstance(context, Mapping):
            logger.warning(f"Ignoring recommendation context of type {type(context).__name__}")
            return None, [], []

        industry = context.get("industry")
        if not isinstance(industry, str) or not industry:
            industry = None

        pain_points = context.get("painPoints", context.get("pain_points"))
        return industry, _string_list(context.get("goals")), _string_list(pain_points)


# =============================================================================
# MODULE-LEVEL HELPERS (built-in catalog and tables)
# =============================================================================

_default_engine = RecommendationEngine()


def get_recommendations(
    prompt: Optional[str],
    context: Optional[ContextLike] = None,
) -> List[ScoredRecommendation]:
    """Rank the built-in catalog for a business description."""
    return _default_engine.get_recommendations(prompt, context)


def get_industry_defaults(industry: Optional[str]) -> List[ScoredRecommendation]:
    """Industry quick picks from the built-in catalog."""
    return _default_engine.get_industry_defaults(industry)


def detect_industry(prompt: Optional[str]) -> str:
    """Detect the industry of a business description."""
    return _default_engine.detect_industry(prompt)


def extract_keywords(prompt: Optional[str]) -> List[str]:
    """Mapping keywords present in a business description."""
    return _default_engine.extract_keywords(prompt)
