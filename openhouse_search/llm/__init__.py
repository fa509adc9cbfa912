"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Build the intent-extraction prompt from a search query and a record sample.
- Return the raw model text; interpreting it is the search parser's job.
"""
