"""
Template library service.

The built-in catalog of 12 prebuilt automation templates plus lookup helpers.
Hosts that ship their own catalog pass it to RecommendationEngine directly;
these helpers only cover the built-in one.
"""

import logging
from typing import Any, Dict, List, Optional

from automata.schemas.templates import Template
from automata.utils.constants import ALL_INDUSTRIES

logger = logging.getLogger(__name__)


_CATALOG_DATA: List[Dict[str, Any]] = [
    {
        "id": "birthday-rewards",
        "name": "Birthday Rewards",
        "description": (
            "Automatically send personalized birthday greetings with special offers "
            "to celebrate your customers on their special day."
        ),
        "icon": "birthday",
        "type": "email",
        "frequency": "daily",
        "industries": ["all"],
        "targetSegment": "all",
        "config": {"triggerField": "birthday", "daysBeforeOrAfter": 0},
    },
    {
        "id": "loyalty-program",
        "name": "Loyalty Program",
        "description": (
            "Reward your best customers with exclusive perks, points updates, "
            "and VIP offers to increase retention."
        ),
        "icon": "loyalty",
        "type": "workflow",
        "frequency": "weekly",
        "industries": ["retail", "food"],
        "targetSegment": "tag:vip",
        "config": {"pointsThreshold": 100},
    },
    {
        "id": "happy-hour-alerts",
        "name": "Happy Hour Alerts",
        "description": (
            "Send timely notifications about happy hour specials, daily deals, "
            "and limited-time offers."
        ),
        "icon": "promotion",
        "type": "email",
        "frequency": "daily",
        "industries": ["food"],
        "targetSegment": "all",
        "config": {"sendTime": "15:00"},
    },
    {
        "id": "appointment-reminders",
        "name": "Appointment Reminders",
        "description": "Reduce no-shows with automated reminders sent before scheduled appointments.",
        "icon": "appointment",
        "type": "email",
        "frequency": "daily",
        "industries": ["health", "service"],
        "targetSegment": "project",
        "config": {"reminderDays": [1, 7]},
    },
    {
        "id": "post-visit-follow-up",
        "name": "Post-Visit Follow-up",
        "description": (
            "Engage customers after their visit with thank you messages and "
            "requests for feedback."
        ),
        "icon": "follow_up",
        "type": "email",
        "frequency": "daily",
        "industries": ["all"],
        "targetSegment": "project",
        "config": {"daysAfterVisit": 1},
    },
    {
        "id": "win-back-campaign",
        "name": "Win-Back Campaign",
        "description": "Re-engage inactive customers with personalized offers to bring them back.",
        "icon": "win_back",
        "type": "email",
        "frequency": "weekly",
        "industries": ["all"],
        "targetSegment": "tag:inactive",
        "config": {"inactiveDays": 30},
    },
    {
        "id": "welcome-series",
        "name": "Welcome Series",
        "description": (
            "Onboard new customers with a warm welcome sequence introducing your "
            "brand and offerings."
        ),
        "icon": "welcome",
        "type": "email",
        "frequency": "daily",
        "industries": ["all"],
        "targetSegment": "tag:new",
        "config": {"emailCount": 3, "daysBetween": 2},
    },
    {
        "id": "monthly-newsletter",
        "name": "Monthly Newsletter",
        "description": "Keep customers informed with monthly updates, news, and curated content.",
        "icon": "newsletter",
        "type": "email",
        "frequency": "monthly",
        "industries": ["all"],
        "targetSegment": "all",
        "config": {"sendDay": 1},
    },
    {
        "id": "review-request",
        "name": "Review Request",
        "description": (
            "Collect valuable feedback by asking satisfied customers for reviews "
            "and ratings."
        ),
        "icon": "feedback",
        "type": "email",
        "frequency": "weekly",
        "industries": ["all"],
        "targetSegment": "project",
        "config": {"daysAfterPurchase": 7},
    },
    {
        "id": "renewal-reminder",
        "name": "Renewal Reminder",
        "description": (
            "Prevent churn by reminding customers when their subscription or "
            "membership is about to expire."
        ),
        "icon": "renewal",
        "type": "email",
        "frequency": "daily",
        "industries": ["service"],
        "targetSegment": "project",
        "config": {"reminderDays": [30, 7, 1]},
    },
    {
        "id": "abandoned-cart",
        "name": "Abandoned Cart",
        "description": (
            "Recover lost sales by reminding customers about items left in their "
            "shopping cart."
        ),
        "icon": "cart",
        "type": "email",
        "frequency": "daily",
        "industries": ["retail"],
        "targetSegment": "all",
        "config": {"hoursAfterAbandon": 24},
    },
    {
        "id": "thank-you-note",
        "name": "Thank You Note",
        "description": (
            "Show appreciation with personalized thank you messages after purchases "
            "or interactions."
        ),
        "icon": "thank_you",
        "type": "email",
        "frequency": "daily",
        "industries": ["all"],
        "targetSegment": "project",
        "config": {"triggerEvent": "purchase"},
    },
]

TEMPLATES_LIBRARY: List[Template] = [Template.model_validate(item) for item in _CATALOG_DATA]


def get_all_templates() -> List[Template]:
    """Return the built-in catalog in its fixed order."""
    return list(TEMPLATES_LIBRARY)


def get_templates_by_industry(industry: Optional[str]) -> List[Template]:
    """
    Templates relevant to an industry: those tagged "all" or the industry itself.

    A falsy industry returns the whole catalog.
    """
    if not industry:
        return get_all_templates()

    return [
        template for template in TEMPLATES_LIBRARY
        if ALL_INDUSTRIES in template.industries or industry in template.industries
    ]


def get_template_by_id(template_id: str) -> Optional[Template]:
    """Look up a template by id; None when unknown."""
    for template in TEMPLATES_LIBRARY:
        if template.id == template_id:
            return template

    logger.debug(f"Template not found in catalog: template_id={template_id}")
    return None


def get_templates_by_type(template_type: Optional[str]) -> List[Template]:
    """Templates of one automation type ("email", "workflow"); falsy returns all."""
    if not template_type:
        return get_all_templates()
    return [template for template in TEMPLATES_LIBRARY if template.type == template_type]
