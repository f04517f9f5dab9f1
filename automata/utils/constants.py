"""
Fixed values shared by the recommendation engine and the onboarding store.

Changing VERSION invalidates every onboarding record already persisted:
records written under another version are discarded on read.
"""

# Onboarding persistence
STORAGE_KEY = 'automata_onboarding'
VERSION = 1
EXPIRY_DAYS = 7
DAY_MS = 24 * 60 * 60 * 1000

# Selection slots (selected templates + a non-empty custom automation)
MAX_SELECTIONS = 3

# Recommendation list shape
MAX_RECOMMENDATIONS = 5
MIN_RECOMMENDATIONS = 3

# Forced scores
BACKFILL_SCORE = 1
INDUSTRY_DEFAULT_SCORE = 10

# Template catalog sentinel meaning "relevant to every industry"
ALL_INDUSTRIES = 'all'
