"""
Recommendation Reasoning Copy

One-sentence explanations shown under each recommended template card.

Lookup order for a template:
1. The sentence for the resolved industry, when the template has one
2. The template's "default" sentence
3. GENERIC_REASONING for templates missing from the table

Reasoning never depends on which keywords matched; two calls with the same
template and industry always produce the same sentence.
"""

from typing import Dict

GENERIC_REASONING = (
    "This automation can help grow your business and improve customer relationships."
)

REASONING_TEMPLATES: Dict[str, Dict[str, str]] = {
    "birthday-rewards": {
        "default": "Birthday campaigns have 481% higher transaction rates than standard emails.",
        "food": "Restaurants see 25% higher redemption rates on birthday offers, often bringing groups.",
        "retail": "Birthday offers drive repeat purchases and create emotional brand connections.",
    },
    "loyalty-program": {
        "default": "Loyalty program members spend 67% more than non-members.",
        "food": "Food businesses with loyalty programs see 20% higher visit frequency.",
        "retail": "Loyalty programs increase customer lifetime value by up to 30%.",
    },
    "happy-hour-alerts": {
        "default": "Timely promotions drive same-day foot traffic and increase average order value.",
        "food": "Location-based alerts can increase slow-period traffic by 15-25%.",
    },
    "appointment-reminders": {
        "default": "Automated reminders reduce no-shows by up to 38%.",
        "health": "Healthcare practices save $150+ per prevented no-show.",
        "service": "Service businesses recover 10-15 hours weekly by reducing scheduling gaps.",
    },
    "post-visit-follow-up": {
        "default": "Follow-up messages increase repeat visits by 20% and generate referrals.",
        "health": "Post-visit follow-ups improve patient satisfaction scores by 25%.",
    },
    "win-back-campaign": {
        "default": "Acquiring new customers costs 5-7x more than retaining existing ones.",
        "retail": "Win-back campaigns typically recover 5-10% of churned customers.",
    },
    "welcome-series": {
        "default": "Welcome emails see 4x higher open rates and set the tone for engagement.",
        "retail": "Welcome series subscribers have 33% higher long-term engagement.",
    },
    "monthly-newsletter": {
        "default": "Regular newsletters keep your brand top-of-mind and drive 2x more referrals.",
        "service": "Professional services with newsletters see 20% higher client retention.",
    },
    "review-request": {
        "default": "93% of consumers read reviews before purchasing. More reviews = more trust.",
        "retail": "Products with reviews see 270% higher conversion rates.",
    },
    "renewal-reminder": {
        "default": "Proactive renewal outreach improves retention by 20%.",
        "service": "Timely renewal reminders prevent involuntary churn from forgotten payments.",
    },
    "abandoned-cart": {
        "default": "Cart recovery emails have 45% open rates and recover 5-15% of lost sales.",
        "retail": "The average cart abandonment rate is 70% - huge recovery opportunity.",
    },
    "thank-you-note": {
        "default": "Thank you messages increase repeat purchase likelihood by 25%.",
        "service": "Appreciation messages generate 3x more referrals than generic follow-ups.",
    },
}


def build_reasoning(
    template_id: str,
    industry: str,
    table: Dict[str, Dict[str, str]] = REASONING_TEMPLATES,
) -> str:
    """Pick the reasoning sentence for a template id in an industry."""
    reasons = table.get(template_id)
    if not reasons:
        return GENERIC_REASONING
    return reasons.get(industry) or reasons.get("default") or GENERIC_REASONING
