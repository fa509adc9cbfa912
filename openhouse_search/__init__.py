"""
Open House Search API.

Find university open days (journées portes ouvertes) with free-text search
interpreted by an LLM, lexical ranking and exact facet filters.
"""
