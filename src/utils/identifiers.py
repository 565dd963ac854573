"""Stable slug identifiers for catalog categories and items.

Identifiers are the join key between a catalog file and a user's progress
file, so the same source text must always produce the same identifier.
When slugging leaves nothing (input was all punctuation or symbols), the
core falls back to a short SHA-1 digest of the original text rather than a
random suffix, keeping re-syncs of unchanged content stable.
"""

import hashlib
import re

_ASCII_DISALLOWED = re.compile(r"[^a-z0-9]+")
# U+4E00..U+9FA5, the CJK Unified Ideographs block the wiki's names use.
_CJK_DISALLOWED = re.compile(r"[^a-z0-9一-龥]+")

_FALLBACK_LENGTH = 6


def slugify(text: str, allow_cjk: bool = True) -> str:
    """Lower-case *text* and collapse every disallowed run into one underscore.

    Leading and trailing underscores are trimmed, so the result is either
    empty or starts and ends with an allowed character.
    """
    pattern = _CJK_DISALLOWED if allow_cjk else _ASCII_DISALLOWED
    return pattern.sub("_", text.lower()).strip("_")


def build_identifier(text: str, prefix: str, allow_cjk: bool = True) -> str:
    """Derive a ``<prefix>_<slug>`` identifier from free text.

    Args:
        text: Source text, e.g. a category name or ``"<item name>_<position>"``.
        prefix: Short type prefix such as ``"cat"`` or ``"achv"``.
        allow_cjk: Keep CJK ideographs in the slug instead of replacing them.

    Returns:
        A non-empty identifier.  Deterministic for a given (text, prefix).
    """
    core = slugify(text, allow_cjk=allow_cjk)
    if not core:
        digest = hashlib.sha1(text.encode("utf-8")).hexdigest()
        core = digest[:_FALLBACK_LENGTH]
    return f"{prefix}_{core}"
