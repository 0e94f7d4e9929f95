"""Keyword extraction over authored section text.

Lexical only: tokenize, lowercase, drop short tokens and stopwords, rank by
frequency with ties broken by first occurrence.

Example:
    >>> from promptsmith.builder.state import SectionState
    >>> s = SectionState(id="a", label="A", value="Pricing strategy: pricing tiers and strategy")
    >>> extract_keywords([s])
    ['pricing', 'strategy', 'tiers']
"""

import re
from collections.abc import Sequence
from typing import Final

from promptsmith.builder.state import SectionState

DEFAULT_KEYWORD_LIMIT: Final[int] = 12
MIN_KEYWORD_LENGTH: Final[int] = 4

# Unicode letters and digits; underscores split tokens too
_TOKEN_PATTERN: Final = re.compile(r"[^\W_]+")

STOPWORDS: Final[frozenset[str]] = frozenset(
    {
        "about", "above", "after", "again", "against", "also", "been", "before",
        "being", "below", "between", "both", "but", "can", "could", "does",
        "doing", "down", "during", "each", "either", "else", "every", "from",
        "further", "have", "having", "here", "hers", "herself", "himself", "however",
        "into", "itself", "just", "like", "make", "more", "most", "much", "must",
        "myself", "need", "neither", "only", "other", "ours", "ourselves", "over",
        "same", "shall", "should", "some", "such", "than", "that", "their",
        "theirs", "them", "themselves", "then", "there", "these", "they", "this",
        "those", "through", "under", "until", "upon", "very", "want", "were",
        "what", "when", "where", "which", "while", "whom", "whose", "will",
        "with", "within", "without", "would", "your", "yours", "yourself",
        "yourselves",
    }
)


def tokenize(text: str) -> list[str]:
    """Split text on non-alphanumeric boundaries and lowercase every token."""
    return _TOKEN_PATTERN.findall(text.lower())


def extract_keywords(
    sections: Sequence[SectionState],
    *,
    limit: int = DEFAULT_KEYWORD_LIMIT,
) -> list[str]:
    """Rank the most distinctive terms across all section values.

    Args:
        sections: Sections in display order
        limit: Maximum number of keywords to return

    Returns:
        Distinct lowercase terms ordered by (frequency desc, first occurrence asc).
        Empty when there is nothing to rank.
    """
    if limit <= 0:
        return []

    # Join with a space so tokens never fuse across section boundaries
    text = " ".join(section.value for section in sections)

    counts: dict[str, int] = {}
    first_seen: dict[str, int] = {}
    for position, token in enumerate(tokenize(text)):
        if len(token) < MIN_KEYWORD_LENGTH or token in STOPWORDS:
            continue
        counts[token] = counts.get(token, 0) + 1
        first_seen.setdefault(token, position)

    ranked = sorted(counts, key=lambda token: (-counts[token], first_seen[token]))
    return ranked[:limit]
