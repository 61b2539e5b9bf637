"""
Locale helpers

Pure functions for matching site-language locales (POSIX style, e.g.
``de_DE.UTF-8``) against BCP 47 tags from request headers.
"""

from __future__ import annotations


def locale_language_code(locale: str) -> str:
    """Return the base language code of a POSIX or BCP 47 locale.

    Examples:
        "de_DE.UTF-8" → "de"
        "fr-CA"       → "fr"
        "en"          → "en"
    """
    base = locale.split(".")[0]
    return base.replace("_", "-").split("-")[0].lower()


def parse_accept_language(header: str, supported: list[str]) -> str | None:
    """Parse an Accept-Language header and return the best matching locale.

    Algorithm:
    1. Split header into tags with optional q-values (default q=1.0).
    2. Sort by q-value descending.
    3. For each tag, try exact match in `supported`, then base-language match.
    4. Return the first match or None if nothing matches.

    Args:
        header:    Value of the Accept-Language HTTP header, e.g.
                   "fr-CA,fr;q=0.9,en-US;q=0.8,en;q=0.7".
        supported: Ordered list of BCP 47 language codes the site serves.

    Returns:
        The best matching code from `supported`, or None.
    """
    if not header:
        return None

    weighted: list[tuple[float, str]] = []
    for part in header.split(","):
        part = part.strip()
        if not part:
            continue
        if ";q=" in part:
            tag, q_str = part.split(";q=", 1)
            try:
                q = float(q_str.strip())
            except ValueError:
                q = 1.0
        else:
            tag = part
            q = 1.0
        # q=0 means "not acceptable"
        if q <= 0:
            continue
        weighted.append((q, tag.strip()))

    # Stable sort keeps header order for equal q-values
    weighted.sort(key=lambda x: x[0], reverse=True)

    supported_lower = [s.lower() for s in supported]

    for _, tag in weighted:
        tag_lower = tag.lower()
        if tag_lower in supported_lower:
            return supported[supported_lower.index(tag_lower)]
        # "fr-CA" → try "fr"
        base = tag_lower.split("-")[0]
        if base in supported_lower:
            return supported[supported_lower.index(base)]

    return None
