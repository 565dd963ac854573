"""Text normalization for scraped wiki markup.

Turns raw HTML fragments (table cells, list items, headings) into clean
single-line text.  Only a fixed set of named entities is decoded; anything
else is left as-is because wiki pages in practice only use these six.

The output of :func:`normalize_text` never contains ``<`` or ``>`` and never
contains an undecoded entity from the fixed set.  Decoding can reveal new
markup (``&lt;b&gt;``) or new entities (``&amp;amp;``), so stripping and
decoding are repeated until the text stops changing.
"""

import re

_TAG_PATTERN = re.compile(r"<[^>]+>")
_WHITESPACE_PATTERN = re.compile(r"\s+")
_ANGLE_BRACKETS = re.compile(r"[<>]")

# Order matches the wiki scripts this replaced: &amp; is decoded before
# &lt;/&gt; so double-escaped markup surfaces in the same pass.
_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&lt;", "<"),
    ("&gt;", ">"),
)


def strip_tags(fragment: str) -> str:
    """Replace every ``<...>`` tag with a space."""
    return _TAG_PATTERN.sub(" ", fragment)


def decode_entities(text: str) -> str:
    """Decode the fixed set of named character entities once, in order."""
    for entity, replacement in _ENTITIES:
        text = text.replace(entity, replacement)
    return text


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs (including NBSP and full-width spaces) and trim."""
    return _WHITESPACE_PATTERN.sub(" ", text).strip()


def normalize_text(fragment: str) -> str:
    """Convert a markup fragment into plain text.

    Args:
        fragment: Raw HTML fragment, possibly empty.

    Returns:
        Plain text with tags removed, entities decoded and whitespace
        collapsed.  May be empty.
    """
    if not fragment:
        return ""

    text = fragment
    while True:
        cleaned = strip_tags(decode_entities(strip_tags(text)))
        cleaned = _ANGLE_BRACKETS.sub(" ", cleaned)
        if cleaned == text:
            break
        text = cleaned

    return collapse_whitespace(text)
