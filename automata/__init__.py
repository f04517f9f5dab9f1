"""
Automata onboarding core.

Keyword/industry template recommendations and the pre-signup onboarding
state store used by the Automata web front end.
"""

__version__ = "0.1.0"
