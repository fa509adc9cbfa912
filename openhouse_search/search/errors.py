"""Exceptions raised by the search pipeline.

    SearchError            (base)
    +-- UpstreamUnavailable  (record source or LLM call failed)

An unparsable model answer is not an error: the parser recovers it with a
fallback intent. An empty record set is a normal, empty response.
"""


class SearchError(Exception):
    """Base exception for search failures.

    ``provider_name`` identifies the external collaborator involved, e.g.
    ``records`` or ``groq``.
    """

    def __init__(
        self,
        message: str = "Search failed",
        provider_name: str | None = None,
    ) -> None:
        self.message = message
        self.provider_name = provider_name
        super().__init__(message)

    def __str__(self) -> str:
        if self.provider_name:
            return f"[{self.provider_name}] {self.message}"
        return self.message


class UpstreamUnavailable(SearchError):
    """The record source or the LLM service could not be reached."""
