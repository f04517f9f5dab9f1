"""
Pydantic schemas for templates, recommendations and onboarding records.

Python attributes are snake_case; serialized JSON uses camelCase aliases.
"""
