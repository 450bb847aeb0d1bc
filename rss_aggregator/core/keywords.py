"""Keyword matching against article text."""

from typing import Optional, Sequence


def match_keywords(text: str, keywords: Optional[Sequence[str]]) -> tuple[list[str], bool]:
    """Find which keywords occur in ``text``.

    Matching is case-insensitive substring containment. Matched keywords are
    returned in the caller's order and casing.

    Args:
        text: Combined title and description of an article.
        keywords: Keywords to look for. ``None`` or empty disables filtering.

    Returns:
        The matched keywords and whether the article is relevant.
    """
    if not keywords:
        return [], True

    lower_text = text.lower()
    matched_keywords = [keyword for keyword in keywords if keyword.lower() in lower_text]
    return matched_keywords, bool(matched_keywords)
