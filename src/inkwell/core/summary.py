"""Post summary helpers shown on feed cards and article headers."""

import math

WORDS_PER_MINUTE = 200
EXCERPT_LENGTH = 150


def reading_time(text: str, words_per_minute: int = WORDS_PER_MINUTE) -> str:
    """
    Estimate reading time as "<n> min read".

    Words are counted by splitting on single spaces, so even an empty post
    reads as one minute.
    """
    words = len(text.split(' '))
    return f"{math.ceil(words / words_per_minute)} min read"


def excerpt(text: str, length: int = EXCERPT_LENGTH) -> str:
    """First `length` characters of the post, with an ellipsis when cut."""
    if not text:
        return ""
    if len(text) <= length:
        return text
    return text[:length] + "..."
