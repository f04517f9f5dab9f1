"""
Tests for the Recommendation Service.

These tests verify the keyword recommendation engine including:
- Industry detection and pattern order
- Keyword extraction (normalization, whole words, plurals)
- Scoring rules and monotonicity
- Reasoning lookup
- Ranking, tie-breaks and the top-5 cut
- Backfill with default templates
- Industry defaults
- Failure semantics (bad catalogs, bad context)

All tests run against the built-in catalog or small fixture catalogs; the
engine is deterministic so no mocking is needed.
"""

import pytest

from automata.recommendation.reasoning import GENERIC_REASONING, REASONING_TEMPLATES
from automata.recommendation.tables import (
    DEFAULT_TEMPLATE_IDS,
    RecommendationTables,
)
from automata.schemas.onboarding import BusinessContext
from automata.schemas.templates import INDUSTRIES, ScoredRecommendation, Template
from automata.services.recommendation_service import (
    RecommendationEngine,
    detect_industry,
    extract_keywords,
    get_industry_defaults,
    get_recommendations,
)
from automata.services.template_library import get_template_by_id

COFFEE_PROMPT = "We run a cozy coffee shop and want to celebrate customer birthdays"


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def engine():
    """Engine over the built-in catalog and tables."""
    return RecommendationEngine()


@pytest.fixture
def no_boost_tables():
    """Default tables without any industry boosts."""
    return RecommendationTables(industry_boosts={})


@pytest.fixture
def small_catalog():
    """One politics template plus the three backfill defaults (retail only)."""
    return [
        {"id": "x-only", "name": "X Only", "industries": ["politics"]},
        {"id": "birthday-rewards", "name": "Birthday Rewards", "industries": ["retail"]},
        {"id": "welcome-series", "name": "Welcome Series", "industries": ["retail"]},
        {"id": "monthly-newsletter", "name": "Monthly Newsletter", "industries": ["retail"]},
    ]


def _ids(recommendations):
    return [rec.id for rec in recommendations]


# =============================================================================
# UNIT TESTS: Industry Detection
# =============================================================================

class TestIndustryDetection:
    """Tests for detect_industry."""

    def test_food(self, engine):
        """Restaurant vocabulary should resolve to food."""
        assert engine.detect_industry("Family pizza restaurant downtown") == "food"

    def test_empty_prompt_is_agnostic(self, engine):
        """Empty or missing text should return agnostic."""
        assert engine.detect_industry("") == "agnostic"
        assert engine.detect_industry(None) == "agnostic"

    def test_no_match_is_agnostic(self, engine):
        """Text matching no pattern should return agnostic."""
        assert engine.detect_industry("Zzz") == "agnostic"

    def test_case_insensitive(self, engine):
        """Detection should ignore case."""
        assert engine.detect_industry("COFFEE ROASTERY") == "food"

    def test_first_match_wins_food_before_retail(self, engine):
        """'coffee shop' matches food and retail; food is tested first."""
        assert engine.detect_industry("coffee shop") == "food"

    def test_first_match_wins_health_before_retail(self, engine):
        """'boutique fitness' matches health before retail."""
        assert engine.detect_industry("Boutique fitness studio") == "health"

    def test_coach_resolves_to_health(self, engine):
        """'coach' is in both health and service; health comes first."""
        assert engine.detect_industry("life coach") == "health"

    def test_service(self, engine):
        """Professional services should resolve to service."""
        assert engine.detect_industry("law firm") == "service"

    def test_technology(self, engine):
        """Software businesses should resolve to technology."""
        assert engine.detect_industry("We build software") == "technology"

    def test_education(self, engine):
        """Schools and tutoring should resolve to education."""
        assert engine.detect_industry("Tutoring for high school students") == "education"

    def test_politics(self, engine):
        """Campaign vocabulary should resolve to politics."""
        assert engine.detect_industry("Local election candidate") == "politics"

    def test_patterns_match_inside_words(self, engine):
        """Patterns have no word boundaries: 'great' contains 'eat'."""
        assert engine.detect_industry("Great ideas") == "food"

    @pytest.mark.parametrize("prompt", [
        "", "bakery", "yoga", "shop", "plumber", "cloud", "college", "vote", "Zzz",
    ])
    def test_always_returns_known_industry(self, engine, prompt):
        """Detection only ever returns one of the enumerated industries."""
        assert engine.detect_industry(prompt) in INDUSTRIES


# =============================================================================
# UNIT TESTS: Keyword Extraction
# =============================================================================

class TestKeywordExtraction:
    """Tests for extract_keywords."""

    def test_coffee_shop_scenario(self, engine):
        """Plural 'birthdays' should still count as 'birthday'."""
        keywords = engine.extract_keywords(COFFEE_PROMPT)
        assert "birthday" in keywords
        assert "celebrate" in keywords

    def test_empty_prompt(self, engine):
        """Empty or missing text has no keywords."""
        assert engine.extract_keywords("") == []
        assert engine.extract_keywords(None) == []

    def test_case_insensitive(self, engine):
        """Matching should ignore case."""
        assert engine.extract_keywords("BIRTHDAY") == ["birthday"]

    def test_punctuation_becomes_word_boundary(self, engine):
        """Punctuation is replaced by spaces so adjacent words still match."""
        keywords = engine.extract_keywords("booking/appointment,reviews!")
        assert set(keywords) == {"booking", "appointment", "review"}

    def test_whole_words_only(self, engine):
        """Keywords inside longer words should not match."""
        assert engine.extract_keywords("renewable energy") == []
        assert engine.extract_keywords("Our newsletter") == ["newsletter"]

    def test_plural_keyword_does_not_match_singular_key(self, engine):
        """'news' is its own keyword, so it must not also count as 'new'."""
        assert engine.extract_keywords("store news") == ["news"]
        assert engine.extract_keywords("new products") == ["new"]

    def test_unique_in_table_order(self, engine):
        """Each keyword appears once, in keyword-table order."""
        assert engine.extract_keywords("birthday birthday loyalty") == ["loyalty", "birthday"]

    def test_module_level_helper(self):
        """extract_keywords helper uses the default tables."""
        assert extract_keywords("abandon cart") == ["cart", "abandon"]


# =============================================================================
# UNIT TESTS: Scoring
# =============================================================================

class TestCalculateScore:
    """Tests for calculate_score."""

    def test_all_tag_plus_boost(self, engine):
        """birthday-rewards in food: +5 (all) +10 (food boost)."""
        template = get_template_by_id("birthday-rewards")
        assert engine.calculate_score(template, "food", []) == 15

    def test_keywords_add_weights(self, engine):
        """birthday (10) and celebrate (7) add to birthday-rewards."""
        template = get_template_by_id("birthday-rewards")
        assert engine.calculate_score(template, "food", ["birthday", "celebrate"]) == 32

    def test_industry_match_plus_boost(self, engine):
        """loyalty-program in food: +15 (industry) +10 (boost)."""
        template = get_template_by_id("loyalty-program")
        assert engine.calculate_score(template, "food", []) == 25

    def test_no_match_is_zero(self, engine):
        """abandoned-cart has nothing to gain in health."""
        template = get_template_by_id("abandoned-cart")
        assert engine.calculate_score(template, "health", []) == 0

    def test_unknown_industry_uses_agnostic_boosts(self, engine):
        """Industries without a boost list fall back to the agnostic list."""
        template = get_template_by_id("welcome-series")
        assert engine.calculate_score(template, "aerospace", []) == 15

    def test_duplicate_keywords_count_once(self, engine):
        """A keyword repeated in the input is scored once."""
        template = get_template_by_id("birthday-rewards")
        once = engine.calculate_score(template, "agnostic", ["birthday"])
        twice = engine.calculate_score(template, "agnostic", ["birthday", "birthday"])
        assert once == twice == 25

    def test_unrelated_keywords_ignored(self, engine):
        """Keywords that do not map to the template add nothing."""
        template = get_template_by_id("birthday-rewards")
        assert engine.calculate_score(template, "food", ["cart", "pizza"]) == 15

    def test_monotonic_in_relevant_keywords(self, engine):
        """Adding a relevant keyword never lowers the score."""
        template = get_template_by_id("loyalty-program")
        keywords = []
        previous = engine.calculate_score(template, "retail", keywords)
        for keyword in ["loyalty", "reward", "points", "vip", "member"]:
            keywords.append(keyword)
            current = engine.calculate_score(template, "retail", keywords)
            assert current > previous
            previous = current


# =============================================================================
# UNIT TESTS: Reasoning
# =============================================================================

class TestGenerateReasoning:
    """Tests for generate_reasoning."""

    def test_industry_specific_sentence(self, engine):
        """An industry sentence is preferred when present."""
        template = get_template_by_id("birthday-rewards")
        assert engine.generate_reasoning(template, "food", []) == REASONING_TEMPLATES["birthday-rewards"]["food"]

    def test_default_sentence(self, engine):
        """Falls back to the template default for other industries."""
        template = get_template_by_id("birthday-rewards")
        assert engine.generate_reasoning(template, "health", []) == REASONING_TEMPLATES["birthday-rewards"]["default"]

    def test_unknown_template_gets_generic(self, engine):
        """Templates missing from the table get the generic sentence."""
        template = Template(id="custom-thing", name="Custom Thing", industries=["all"])
        assert engine.generate_reasoning(template, "food", []) == GENERIC_REASONING

    def test_keywords_do_not_change_reasoning(self, engine):
        """Same template and industry give the same sentence whatever the keywords."""
        template = get_template_by_id("appointment-reminders")
        first = engine.generate_reasoning(template, "health", ["appointment"])
        second = engine.generate_reasoning(template, "health", ["booking", "schedule", "noshow"])
        assert first == second


# =============================================================================
# UNIT TESTS: Recommendations
# =============================================================================

class TestGetRecommendations:
    """Tests for get_recommendations."""

    def test_coffee_shop_scenario(self, engine):
        """Birthday rewards should top a coffee shop celebrating birthdays."""
        recommendations = engine.get_recommendations(COFFEE_PROMPT)

        assert _ids(recommendations) == [
            "birthday-rewards",
            "happy-hour-alerts",
            "loyalty-program",
            "monthly-newsletter",
            "post-visit-follow-up",
        ]
        top = recommendations[0]
        assert top.score == 32
        assert top.matched_keywords == ["birthday", "celebrate"]
        assert top.reasoning == REASONING_TEMPLATES["birthday-rewards"]["food"]

    def test_empty_prompt_returns_defaults(self, engine):
        """No input should give the three defaults with score 1, in order."""
        recommendations = engine.get_recommendations("", {})

        assert _ids(recommendations) == list(DEFAULT_TEMPLATE_IDS)
        assert all(rec.score == 1 for rec in recommendations)
        assert all(rec.matched_keywords == [] for rec in recommendations)
        assert recommendations[0].reasoning == REASONING_TEMPLATES["birthday-rewards"]["default"]

    def test_none_prompt_returns_defaults(self, engine):
        """A missing prompt behaves like an empty one."""
        assert _ids(engine.get_recommendations(None)) == list(DEFAULT_TEMPLATE_IDS)

    @pytest.mark.parametrize("prompt", [
        COFFEE_PROMPT,
        "",
        "Dental clinic losing money to missed appointment slots",
        "Online boutique, lots of shoppers abandon their cart at checkout",
        "Zzz",
    ])
    def test_at_most_five_with_positive_scores(self, engine, prompt):
        """Never more than 5 entries, every entry scores at least 1."""
        recommendations = engine.get_recommendations(prompt)
        assert 0 < len(recommendations) <= 5
        assert all(rec.score >= 1 for rec in recommendations)
        assert all(isinstance(rec, ScoredRecommendation) for rec in recommendations)

    def test_idempotent(self, engine):
        """Identical calls return identical ordered output."""
        context = {"goals": ["more reviews"], "painPoints": ["no loyalty"]}
        first = engine.get_recommendations(COFFEE_PROMPT, context)
        second = engine.get_recommendations(COFFEE_PROMPT, context)
        assert [rec.model_dump() for rec in first] == [rec.model_dump() for rec in second]

    def test_context_industry_overrides_detection(self, engine):
        """An explicit industry is used instead of the detected one."""
        recommendations = engine.get_recommendations("coffee shop", {"industry": "retail"})
        assert _ids(recommendations) == [
            "abandoned-cart",
            "loyalty-program",
            "review-request",
            "birthday-rewards",
            "monthly-newsletter",
        ]

    def test_news_prompt_does_not_boost_welcome_series(self, engine):
        """'news' scores the newsletter only; welcome-series loses the name tie-break."""
        recommendations = engine.get_recommendations("We share store news every week")

        assert _ids(recommendations) == [
            "abandoned-cart",
            "loyalty-program",
            "review-request",
            "monthly-newsletter",
            "birthday-rewards",
        ]
        assert recommendations[3].score == 12
        assert recommendations[3].matched_keywords == ["news"]
        assert "welcome-series" not in _ids(recommendations)

    def test_goals_and_pain_points_add_keywords(self, engine):
        """Keywords from goals and pain points are scored with the prompt's."""
        recommendations = engine.get_recommendations(
            "We help people",
            {"goals": ["Get more reviews"], "painPoints": ["Customers forget their appointment"]},
        )
        by_id = {rec.id: rec for rec in recommendations}

        assert by_id["review-request"].score == 15
        assert by_id["review-request"].matched_keywords == ["review"]
        assert by_id["appointment-reminders"].score == 10
        assert by_id["appointment-reminders"].matched_keywords == ["appointment"]

    def test_business_context_model_accepted(self, engine):
        """A BusinessContext model works like the equivalent mapping."""
        context = BusinessContext(industry="health", pain_points=["too many missed appointment slots"])
        recommendations = engine.get_recommendations("We help people", context)
        assert recommendations[0].id == "appointment-reminders"
        assert recommendations[0].score == 35

    def test_snake_case_pain_points_accepted(self, engine):
        """pain_points is read when painPoints is absent."""
        recommendations = engine.get_recommendations(
            "We help people", {"pain_points": ["abandon cart"]}
        )
        assert "abandoned-cart" in _ids(recommendations)

    def test_goals_alone_are_signal(self, engine):
        """Keywords from goals are enough to rank without a prompt."""
        recommendations = engine.get_recommendations("", {"goals": ["abandon cart"]})
        assert recommendations[0].id == "abandoned-cart"
        assert recommendations[0].score == 20

    def test_unknown_context_industry_accepted(self, engine):
        """Unknown industries are used verbatim and get generic treatment."""
        recommendations = engine.get_recommendations("x", {"industry": "aerospace"})
        assert _ids(recommendations)[:3] == ["birthday-rewards", "monthly-newsletter", "welcome-series"]
        assert recommendations[0].reasoning == REASONING_TEMPLATES["birthday-rewards"]["default"]

    def test_malformed_context_fields_ignored(self, engine):
        """Wrongly typed context fields are ignored, not raised."""
        recommendations = engine.get_recommendations(
            COFFEE_PROMPT, {"industry": 42, "goals": "loyalty", "painPoints": [None, 7]}
        )
        assert recommendations[0].id == "birthday-rewards"

    def test_non_mapping_context_ignored(self, engine):
        """A context that is not a mapping is treated as no context."""
        assert _ids(engine.get_recommendations(COFFEE_PROMPT, 42)) == _ids(
            engine.get_recommendations(COFFEE_PROMPT)
        )

    def test_tie_break_by_name_case_insensitive(self):
        """Equal scores are ordered by display name, ignoring case."""
        engine = RecommendationEngine(templates=[
            {"id": "b", "name": "Beta", "industries": ["all"]},
            {"id": "c", "name": "charlie", "industries": ["all"]},
            {"id": "a", "name": "alpha", "industries": ["all"]},
        ])
        recommendations = engine.get_recommendations("Zzz")
        assert _ids(recommendations) == ["a", "b", "c"]
        assert all(rec.score == 5 for rec in recommendations)

    def test_backfill_appends_defaults_without_resorting(self, small_catalog, no_boost_tables):
        """Defaults follow the real matches, in default-list order, score 1."""
        engine = RecommendationEngine(templates=small_catalog, tables=no_boost_tables)
        recommendations = engine.get_recommendations("Local election candidate")

        assert _ids(recommendations) == [
            "x-only", "birthday-rewards", "welcome-series", "monthly-newsletter",
        ]
        assert [rec.score for rec in recommendations] == [15, 1, 1, 1]

    def test_backfill_skips_defaults_already_present(self, small_catalog, no_boost_tables):
        """A default that genuinely matched keeps its score and is not repeated."""
        engine = RecommendationEngine(templates=small_catalog, tables=no_boost_tables)
        recommendations = engine.get_recommendations("election birthday")

        assert _ids(recommendations) == [
            "x-only", "birthday-rewards", "welcome-series", "monthly-newsletter",
        ]
        assert [rec.score for rec in recommendations] == [15, 10, 1, 1]

    def test_backfill_skips_defaults_missing_from_catalog(self, no_boost_tables):
        """Defaults not in the catalog are simply skipped."""
        engine = RecommendationEngine(
            templates=[{"id": "x-only", "name": "X Only", "industries": ["politics"]}],
            tables=no_boost_tables,
        )
        assert _ids(engine.get_recommendations("vote")) == ["x-only"]

    def test_empty_catalog(self):
        """An empty catalog yields no recommendations."""
        assert RecommendationEngine(templates=[]).get_recommendations(COFFEE_PROMPT) == []

    def test_failing_catalog_provider(self):
        """A catalog provider that raises yields no recommendations."""
        def broken():
            raise RuntimeError("catalog unavailable")

        assert RecommendationEngine(templates=broken).get_recommendations(COFFEE_PROMPT) == []

    def test_malformed_catalog_entries_skipped(self):
        """Entries that are not valid templates are skipped."""
        engine = RecommendationEngine(templates=[
            {"name": "No id"},
            {"id": "ok", "name": "Ok", "industries": ["all"]},
        ])
        assert _ids(engine.get_recommendations("Zzz")) == ["ok"]

    def test_catalog_callable_reread_each_call(self):
        """A callable catalog is read again on every call."""
        catalog = [{"id": "first", "name": "First", "industries": ["all"]}]
        engine = RecommendationEngine(templates=lambda: catalog)

        assert _ids(engine.get_recommendations("Zzz")) == ["first"]
        catalog.append({"id": "second", "name": "Second", "industries": ["all"]})
        assert _ids(engine.get_recommendations("Zzz")) == ["first", "second"]

    def test_template_metadata_passes_through(self):
        """Extra catalog fields survive into the recommendation."""
        engine = RecommendationEngine(templates=[
            {"id": "ok", "name": "Ok", "industries": ["all"], "color": "teal", "icon": "star"},
        ])
        rec = engine.get_recommendations("Zzz")[0]
        dumped = rec.model_dump(by_alias=True)
        assert dumped["color"] == "teal"
        assert dumped["icon"] == "star"
        assert dumped["matchedKeywords"] == []

    def test_module_level_helper(self):
        """get_recommendations helper ranks the built-in catalog."""
        assert get_recommendations(COFFEE_PROMPT)[0].id == "birthday-rewards"
        assert detect_industry(COFFEE_PROMPT) == "food"


# =============================================================================
# UNIT TESTS: Industry Defaults
# =============================================================================

class TestIndustryDefaults:
    """Tests for get_industry_defaults."""

    def test_food_defaults(self, engine):
        """Food defaults are the food boost list with score 10."""
        defaults = engine.get_industry_defaults("food")
        assert _ids(defaults) == ["happy-hour-alerts", "loyalty-program", "birthday-rewards"]
        assert all(rec.score == 10 for rec in defaults)
        assert defaults[2].reasoning == REASONING_TEMPLATES["birthday-rewards"]["food"]

    def test_industry_without_boosts_uses_agnostic(self, engine):
        """Industries with no boost list get the agnostic list."""
        assert _ids(engine.get_industry_defaults("politics")) == [
            "welcome-series", "birthday-rewards", "monthly-newsletter",
        ]

    def test_missing_industry_uses_agnostic(self):
        """A missing industry behaves like agnostic."""
        assert _ids(get_industry_defaults(None)) == [
            "welcome-series", "birthday-rewards", "monthly-newsletter",
        ]

    def test_templates_missing_from_catalog_skipped(self):
        """Boosted ids not in the catalog are left out."""
        engine = RecommendationEngine(templates=[
            {"id": "loyalty-program", "name": "Loyalty Program", "industries": ["food"]},
        ])
        assert _ids(engine.get_industry_defaults("food")) == ["loyalty-program"]
