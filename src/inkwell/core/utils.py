"""Slug helpers for heading anchors."""

import re
import unicodedata

# Word characters are ASCII only; whitespace is any Unicode whitespace
_NON_WORD = re.compile(r"[^A-Za-z0-9_\s-]")
_SEPARATORS = re.compile(r"[\s_-]+")


def slugify(text: str, fold_unicode: bool = False) -> str:
    """
    Convert heading text to a URL-safe anchor id.

    - Lowercase
    - Remove everything except ASCII word characters, whitespace and `-`
    - Collapse runs of whitespace, `_` and `-` to a single `-`
    - Strip leading/trailing `-`

    Non-ASCII letters are dropped (`Café` -> `caf`). With `fold_unicode`,
    dash-like characters first become `-` and accents are folded via NFKD
    (`Café` -> `cafe`), which changes anchor ids.

    Examples:
        >>> slugify("Sub Heading")
        'sub-heading'
        >>> slugify("snake_case  and -- dashes")
        'snake-case-and-dashes'
    """
    text = text.lower().strip()

    if fold_unicode:
        # En dash, em dash, minus sign
        text = text.replace('–', '-').replace('—', '-').replace('−', '-')
        text = unicodedata.normalize('NFKD', text)
        text = ''.join(c for c in text if not unicodedata.combining(c))

    text = _NON_WORD.sub('', text)
    text = _SEPARATORS.sub('-', text)

    return text.strip('-')


class SlugRegistry:
    """Hands out unique ids within one document: `a`, `a-2`, `a-3`, ..."""

    def __init__(self) -> None:
        self._used: set[str] = set()
        self._counts: dict[str, int] = {}

    def claim(self, slug: str) -> str:
        if slug not in self._used:
            self._used.add(slug)
            self._counts[slug] = 1
            return slug

        n = self._counts.get(slug, 1)
        while True:
            n += 1
            candidate = f"{slug}-{n}"
            if candidate not in self._used:
                break
        self._counts[slug] = n
        self._used.add(candidate)
        return candidate
