"""
Text embeddings.

Responsibilities:
- Load a lightweight sentence-transformer model on first use.
- Encode arbitrary text for the /embed endpoint.

Embeddings are served to clients but do not take part in search ranking.
"""
