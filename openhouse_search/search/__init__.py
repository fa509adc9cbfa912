"""
AI-augmented open-day search.

Responsibilities:
- Load the denormalized open-day records.
- Interpret free-text queries with the LLM and recover a structured intent.
- Score records lexically, promote LLM recommendations, apply facet filters.
- Cache complete result bundles for an hour.
"""
