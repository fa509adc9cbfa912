from __future__ import annotations

import json
import logging
from typing import Any

from groq import Groq

from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You help students find university open days (journées portes ouvertes) "
    "and the programmes presented there. The records are French and use the "
    "column names of the open-day export.\n\n"
    "Your task is twofold:\n"
    "1. Analyse the user query and extract the relevant keywords "
    "(programmes, disciplines, fields of study), the geographic constraints "
    "(cities, regions) and the diploma types being looked for.\n"
    "2. Recommend the open days that best match, with a short explanation.\n\n"
    "Return ONLY valid JSON in this exact format:\n"
    "{\n"
    '  "enhancedQuery": "<the query rephrased and enriched>",\n'
    '  "keywords": ["<keyword>", "..."],\n'
    '  "filters": {"region": ["..."] | null, "city": ["..."] | null, '
    '"diploma": ["..."] | null},\n'
    '  "explanation": "<one or two sentences on how the query was understood>",\n'
    '  "recommendations": [<id_jpo>, "..."]\n'
    "}\n"
    "Order recommendations from most to least relevant."
)


def _build_user_message(
    query: str,
    sample: list[dict[str, Any]],
    total: int,
) -> str:
    return (
        f'User query: "{query}"\n\n'
        f"Available records (sample limited to {len(sample)} items):\n"
        f"{json.dumps(sample, indent=2, ensure_ascii=False, default=str)}\n\n"
        f"The full dataset holds {total} records.\n"
        "Analyse this query and suggest the most relevant open days.\n"
        "Return ONLY a valid JSON object with no other text."
    )


def request_intent(
    query: str,
    records: list[dict[str, Any]],
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> str | None:
    """
    Ask the Groq model to interpret ``query`` against a sample of ``records``.

    Returns the raw content of the first choice, or ``None`` when the LLM is
    disabled or answered without text content. API errors are not caught
    here; the caller decides how an unreachable model is reported.
    """
    if not config.enabled or not config.api_key:
        logger.info("Groq LLM disabled, skipping intent extraction")
        return None

    sample = records[: config.sample_size]
    client = Groq(api_key=config.api_key, timeout=config.timeout)
    response = client.chat.completions.create(
        model=config.model,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {
                "role": "user",
                "content": _build_user_message(query, sample, len(records)),
            },
        ],
        max_tokens=config.max_tokens,
        temperature=config.temperature,
    )

    if not response.choices:
        return None
    content = response.choices[0].message.content
    return content if isinstance(content, str) else None
