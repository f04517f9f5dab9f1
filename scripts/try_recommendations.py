#!/usr/bin/env python3
"""
Recommendation Engine Try-Out Script

Runs the keyword recommendation engine locally against the built-in
template catalog and prints the ranked cards, so copy and rule-table changes
can be eyeballed without the web front end.

Usage:
    python scripts/try_recommendations.py --prompt "We run a cozy coffee shop"
    python scripts/try_recommendations.py --prompt "dental clinic" --goal "fewer no-shows"
    python scripts/try_recommendations.py --industry retail --defaults
    python scripts/try_recommendations.py --suite
"""

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

load_dotenv()

from automata.schemas.templates import ScoredRecommendation
from automata.services.recommendation_service import (
    detect_industry,
    extract_keywords,
    get_industry_defaults,
    get_recommendations,
)
from automata.utils.logging import get_logger


# Route library logs through the standard handler, quiet by default
logger = get_logger("automata", level=logging.WARNING)


def print_result(recommendations: List[ScoredRecommendation]):
    """Pretty print a recommendation list."""
    print("\n" + "=" * 60)
    print(f"RECOMMENDATIONS: {len(recommendations)}")
    print("=" * 60)

    for i, rec in enumerate(recommendations, 1):
        print(f"\n--- #{i} {rec.name} ({rec.id}) ---")
        print(f"  Score:     {rec.score}")
        print(f"  Keywords:  {', '.join(rec.matched_keywords) or '-'}")
        print(f"  Reasoning: {rec.reasoning}")
    print()


def run_prompt(
    prompt: str,
    industry: Optional[str] = None,
    goals: Optional[List[str]] = None,
    pain_points: Optional[List[str]] = None,
    as_json: bool = False,
) -> List[ScoredRecommendation]:
    """Rank the catalog for one prompt and print the result."""
    context = {"industry": industry, "goals": goals or [], "painPoints": pain_points or []}
    recommendations = get_recommendations(prompt, context)

    if as_json:
        print(json.dumps([rec.model_dump(by_alias=True) for rec in recommendations], indent=2))
        return recommendations

    print("\n" + "=" * 60)
    print("RECOMMENDATION ENGINE TRY-OUT")
    print("=" * 60)
    print(f"\nPrompt:    {prompt or '(empty)'}")
    print(f"Industry:  {industry or detect_industry(prompt) + ' (detected)'}")
    print(f"Keywords:  {', '.join(extract_keywords(prompt)) or '-'}")
    print_result(recommendations)
    return recommendations


def run_suite() -> int:
    """Run sample prompts and check which template comes out on top."""
    cases = [
        ("We run a cozy coffee shop and want to celebrate customer birthdays", "birthday-rewards"),
        ("Dental clinic losing money to missed appointment slots", "appointment-reminders"),
        ("Online boutique, lots of shoppers abandon their cart at checkout", "abandoned-cart"),
        ("Yoga studio with monthly membership renewal and subscription churn", "renewal-reminder"),
        ("Consulting agency that wants a newsletter with news and updates", "monthly-newsletter"),
        ("", "birthday-rewards"),
    ]

    failed = 0
    for prompt, expected_top in cases:
        recommendations = get_recommendations(prompt)
        top = recommendations[0].id if recommendations else None
        icon = "✅" if top == expected_top else "❌"
        if top != expected_top:
            failed += 1
        print(f"{icon} {prompt[:60] or '(empty prompt)'}")
        print(f"      Top: {top} (expected: {expected_top})")

    print(f"\nTotal: {len(cases)} | Failed: {failed}")
    return failed


def main():
    parser = argparse.ArgumentParser(description="Try the template recommendation engine locally")
    parser.add_argument("--prompt", default="", help="Business description")
    parser.add_argument("--industry", default=None, help="Explicit industry (skips detection)")
    parser.add_argument("--goal", action="append", default=[], help="Business goal (repeatable)")
    parser.add_argument("--pain-point", action="append", default=[], help="Pain point (repeatable)")
    parser.add_argument("--defaults", action="store_true", help="Show industry defaults instead")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of cards")
    parser.add_argument("--suite", action="store_true", help="Run the sample prompt suite")
    args = parser.parse_args()

    if args.suite:
        sys.exit(1 if run_suite() else 0)

    if args.defaults:
        print_result(get_industry_defaults(args.industry))
        return

    run_prompt(args.prompt, args.industry, args.goal, args.pain_point, args.json)


if __name__ == "__main__":
    main()
