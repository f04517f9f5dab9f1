"""
Recommendation Rule Tables

Static rules the keyword recommendation engine scores against:
- INDUSTRY_PATTERNS: ordered (industry, pattern) pairs, first match wins
- KEYWORD_MAPPINGS: keyword -> templates it boosts + weight (1-10)
- INDUSTRY_BOOSTS: templates that get a flat bonus for a detected industry
- DEFAULT_TEMPLATE_IDS: backfill order when too few templates match

Pattern order is part of the contract. "coach" appears in both the health and
the service pattern and "shop" would match retail, so a description like
"coffee shop" resolves to food only because food is tested first. Do not
re-sort this list.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Pattern, Tuple

# =============================================================================
# INDUSTRY DETECTION
# =============================================================================
# Substring patterns (no word boundaries), tested against lowercased text.
# =============================================================================

INDUSTRY_PATTERNS: Tuple[Tuple[str, Pattern[str]], ...] = (
    ("food", re.compile(
        r"restaurant|cafe|coffee|bar|food|kitchen|chef|menu|dining|bistro|bakery|catering"
        r"|pizza|burger|sushi|brew|pub|grill|diner|eat|cook",
        re.IGNORECASE,
    )),
    ("health", re.compile(
        r"gym|fitness|wellness|clinic|doctor|therapy|spa|yoga|medical|health|dental|chiro"
        r"|physio|massage|trainer|workout|pilates|nutrition|coach",
        re.IGNORECASE,
    )),
    ("retail", re.compile(
        r"store|shop|ecommerce|products|inventory|boutique|fashion|clothing|retail|sell"
        r"|merchandise|goods|market|buy",
        re.IGNORECASE,
    )),
    ("service", re.compile(
        r"consulting|agency|law|accounting|professional|lawyer|accountant|advisor|coach"
        r"|freelance|contractor|plumber|electrician|clean",
        re.IGNORECASE,
    )),
    ("technology", re.compile(
        r"software|tech|app|saas|startup|digital|developer|it|computer|web|mobile|cloud"
        r"|data|ai|platform",
        re.IGNORECASE,
    )),
    ("education", re.compile(
        r"school|education|tutor|teach|learn|course|training|academy|class|lesson|student"
        r"|university|college",
        re.IGNORECASE,
    )),
    ("politics", re.compile(
        r"campaign|political|vote|election|candidate|advocacy|nonprofit|cause|community"
        r"|organization",
        re.IGNORECASE,
    )),
)


# =============================================================================
# KEYWORD MAPPINGS
# =============================================================================

@dataclass(frozen=True)
class KeywordMapping:
    """Templates a keyword points at, and how much it adds to each."""
    templates: Tuple[str, ...]
    weight: int


def _kw(weight: int, *templates: str) -> KeywordMapping:
    return KeywordMapping(templates=templates, weight=weight)


KEYWORD_MAPPINGS: Dict[str, KeywordMapping] = {
    # Loyalty & retention
    "loyalty": _kw(10, "loyalty-program", "win-back-campaign"),
    "reward": _kw(8, "loyalty-program", "birthday-rewards"),
    "points": _kw(9, "loyalty-program"),
    "retention": _kw(8, "loyalty-program", "win-back-campaign"),
    "vip": _kw(7, "loyalty-program"),
    "member": _kw(6, "loyalty-program", "renewal-reminder"),

    # Birthdays & celebrations
    "birthday": _kw(10, "birthday-rewards"),
    "anniversary": _kw(8, "birthday-rewards"),
    "celebrate": _kw(7, "birthday-rewards"),
    "special": _kw(5, "birthday-rewards", "thank-you-note"),

    # Appointments
    "appointment": _kw(10, "appointment-reminders"),
    "booking": _kw(9, "appointment-reminders"),
    "schedule": _kw(8, "appointment-reminders"),
    "reminder": _kw(7, "appointment-reminders", "renewal-reminder"),
    "noshow": _kw(9, "appointment-reminders"),

    # Re-engagement
    "inactive": _kw(10, "win-back-campaign"),
    "churn": _kw(9, "win-back-campaign", "renewal-reminder"),
    "lapsed": _kw(8, "win-back-campaign"),
    "reengage": _kw(9, "win-back-campaign"),
    "comeback": _kw(8, "win-back-campaign"),

    # Welcome & onboarding
    "welcome": _kw(10, "welcome-series"),
    "onboard": _kw(9, "welcome-series"),
    "new": _kw(5, "welcome-series"),
    "introduce": _kw(7, "welcome-series"),

    # Feedback
    "review": _kw(10, "review-request"),
    "feedback": _kw(9, "review-request", "post-visit-follow-up"),
    "rating": _kw(8, "review-request"),
    "testimonial": _kw(7, "review-request"),

    # Follow-up
    "followup": _kw(10, "post-visit-follow-up"),
    "thankyou": _kw(9, "thank-you-note", "post-visit-follow-up"),
    "thanks": _kw(8, "thank-you-note"),
    "appreciate": _kw(7, "thank-you-note"),

    # Sales & promotions
    "promotion": _kw(8, "happy-hour-alerts"),
    "sale": _kw(7, "happy-hour-alerts"),
    "discount": _kw(7, "happy-hour-alerts", "win-back-campaign"),
    "deal": _kw(6, "happy-hour-alerts"),
    "offer": _kw(5, "happy-hour-alerts", "birthday-rewards"),

    # Communication
    "newsletter": _kw(10, "monthly-newsletter"),
    "update": _kw(6, "monthly-newsletter"),
    "news": _kw(7, "monthly-newsletter"),
    "inform": _kw(5, "monthly-newsletter"),

    # Subscriptions
    "subscription": _kw(10, "renewal-reminder"),
    "renewal": _kw(10, "renewal-reminder"),
    "expire": _kw(9, "renewal-reminder"),
    "renew": _kw(9, "renewal-reminder"),

    # E-commerce
    "cart": _kw(10, "abandoned-cart"),
    "abandon": _kw(10, "abandoned-cart"),
    "checkout": _kw(8, "abandoned-cart"),
    "purchase": _kw(6, "abandoned-cart", "thank-you-note"),
}


# =============================================================================
# INDUSTRY BOOSTS & BACKFILL
# =============================================================================

# Industries without their own list fall back to "agnostic".
INDUSTRY_BOOSTS: Dict[str, Tuple[str, ...]] = {
    "food": ("happy-hour-alerts", "loyalty-program", "birthday-rewards"),
    "health": ("appointment-reminders", "renewal-reminder", "post-visit-follow-up"),
    "retail": ("abandoned-cart", "loyalty-program", "review-request"),
    "service": ("appointment-reminders", "renewal-reminder", "post-visit-follow-up"),
    "agnostic": ("welcome-series", "birthday-rewards", "monthly-newsletter"),
}

FALLBACK_BOOST_INDUSTRY = "agnostic"

DEFAULT_TEMPLATE_IDS: Tuple[str, ...] = (
    "birthday-rewards",
    "welcome-series",
    "monthly-newsletter",
)


# =============================================================================
# BUNDLE
# =============================================================================

@dataclass(frozen=True)
class RecommendationTables:
    """
    Everything the engine scores against, injectable for tests or for a
    host that ships its own vocabulary.
    """
    industry_patterns: Tuple[Tuple[str, Pattern[str]], ...] = INDUSTRY_PATTERNS
    keyword_mappings: Dict[str, KeywordMapping] = field(default_factory=lambda: dict(KEYWORD_MAPPINGS))
    industry_boosts: Dict[str, Tuple[str, ...]] = field(default_factory=lambda: dict(INDUSTRY_BOOSTS))
    default_template_ids: Tuple[str, ...] = DEFAULT_TEMPLATE_IDS

    def boosts_for(self, industry: str) -> Tuple[str, ...]:
        """Boost list for an industry, or the agnostic list when it has none."""
        if industry in self.industry_boosts:
            return self.industry_boosts[industry]
        return self.industry_boosts.get(FALLBACK_BOOST_INDUSTRY, ())


DEFAULT_TABLES = RecommendationTables()
