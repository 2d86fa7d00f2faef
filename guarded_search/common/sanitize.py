# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Query and response sanitization.

Pure functions: the query side cleans caller input before it reaches the
injection filter and the provider, the response side cleans provider text
before it is wrapped as untrusted content.
"""
import re

from guarded_search.common.content_safety import neutralize_markers

MAX_QUERY_LENGTH = 500
MAX_RESPONSE_LENGTH = 4000

TRUNCATION_MARKER = "\n[truncated]"
REMOVED_MARKER = "[content removed]"

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_WHITESPACE_RUN = re.compile(r"\s+")
_HTML_TAG = re.compile(r"<[^>]*>")
_STRAY_ANGLE = re.compile(r"[<>]")
_SCRIPT_BLOCK = re.compile(r"<script[\s\S]*?</script>", re.IGNORECASE)
_UNCLOSED_SCRIPT = re.compile(r"<script\b[\s\S]*$", re.IGNORECASE)

# Instruction-looking phrases planted in pages to steer the calling agent
_RESPONSE_INSTRUCTION_MARKERS = re.compile(
    r"\b(IMPORTANT SYSTEM NOTE|INSTRUCTION FOR AGENT|EXECUTE COMMAND)[:\s].{0,200}",
    re.IGNORECASE,
)


def sanitize_query(raw: str, max_length: int = MAX_QUERY_LENGTH) -> str:
    """Clean a raw search query.

    Trims, drops ASCII control characters, strips tag-shaped substrings
    (and any angle bracket left over from malformed tags), collapses
    whitespace and truncates to ``max_length`` characters.

    Args:
        raw (str): The caller-supplied query text.
        max_length (int): Maximum length of the returned query.

    Returns:
        str: The sanitized query. May be empty; callers must reject that.
    """
    q = raw.strip()
    q = _CONTROL_CHARS.sub("", q)
    q = _WHITESPACE_RUN.sub(" ", q)
    q = _HTML_TAG.sub("", q)
    q = _STRAY_ANGLE.sub("", q)
    # Tag removal can leave doubled or edge spaces behind
    q = _WHITESPACE_RUN.sub(" ", q).strip()
    if len(q) > max_length:
        q = q[:max_length]
    return q


def sanitize_response(text: str, max_length: int = MAX_RESPONSE_LENGTH) -> str:
    """Clean provider response text before returning it to the caller.

    Script blocks are removed before the remaining tags so their bodies do
    not survive as plain text.

    Args:
        text (str): Raw summary text returned by the provider.
        max_length (int): Maximum length of the cleaned text, excluding the
            truncation marker.

    Returns:
        str: The cleaned text, at most ``max_length + len(TRUNCATION_MARKER)``
            characters long.
    """
    # Removing an inner block can join the pieces of an outer one
    t = text
    while True:
        stripped = _SCRIPT_BLOCK.sub("", t)
        if stripped == t:
            break
        t = stripped
    t = _UNCLOSED_SCRIPT.sub("", t)
    t = _HTML_TAG.sub("", t)
    t = _RESPONSE_INSTRUCTION_MARKERS.sub(REMOVED_MARKER, t)
    t = neutralize_markers(t)
    if len(t) > max_length:
        t = t[:max_length] + TRUNCATION_MARKER
    return t
