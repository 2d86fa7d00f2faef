# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Content safety: filtering prompt-injection attempts in queries and wrapping
untrusted provider content with boundary markers.

Handles marker sanitization (including fullwidth homoglyph attacks) so
provider text cannot close the untrusted block early.
"""
import logging
import re
from typing import Optional, Sequence

logger = logging.getLogger(__name__)

BOUNDARY_START = "--- BEGIN UNTRUSTED WEB CONTENT ---"
BOUNDARY_END = "--- END UNTRUSTED WEB CONTENT ---"

# Ordered (name, pattern) rules, first match wins. Reject-safe: false
# positives such as "execute a trade" are accepted.
QUERY_INJECTION_RULES: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (phrase, re.compile(rf"\b{re.escape(phrase)}\b", re.IGNORECASE))
    for phrase in (
        "ignore previous",
        "ignore above",
        "disregard",
        "you are now",
        "new instructions",
        "system prompt",
        "execute",
        "run command",
        "sudo",
        "bash -c",
    )
)


def detect_query_injection(query: str) -> Optional[str]:
    """Return the name of the first injection rule matching the query.

    Args:
        query (str): The sanitized query text.

    Returns:
        Optional[str]: The matched rule phrase, or None if the query is clean.
    """
    for name, pattern in QUERY_INJECTION_RULES:
        if pattern.search(query):
            return name
    return None


def is_suspicious(query: str) -> bool:
    """Whether the sanitized query looks like an instruction-override attempt."""
    return detect_query_injection(query) is not None


# Fullwidth Unicode → ASCII mapping for homoglyph normalization
_FULLWIDTH_ASCII_OFFSET = 0xFEE0


def _fold_char(char: str) -> str:
    """Fold a single fullwidth character to its ASCII equivalent."""
    code = ord(char)
    # Fullwidth uppercase A-Z
    if 0xFF21 <= code <= 0xFF3A:
        return chr(code - _FULLWIDTH_ASCII_OFFSET)
    # Fullwidth lowercase a-z
    if 0xFF41 <= code <= 0xFF5A:
        return chr(code - _FULLWIDTH_ASCII_OFFSET)
    if code == 0xFF0D:  # －
        return "-"
    if code == 0x3000:  # ideographic space
        return " "
    return char


def _fold_fullwidth(text: str) -> str:
    """Normalize fullwidth Unicode characters to ASCII equivalents.

    Prevents homoglyph attacks where attackers use fullwidth characters
    like －－－ ＥＮＤ ＵＮＴＲＵＳＴＥＤ ... to bypass marker sanitization.
    Folding is one-to-one, so match offsets in the folded text are valid
    in the original.
    """
    return re.sub(
        r"[\uFF21-\uFF3A\uFF41-\uFF5A\uFF0D\u3000]",
        lambda m: _fold_char(m.group(0)),
        text,
    )


_MARKER_PATTERNS = (
    (
        re.compile(r"-{3}\s*BEGIN\s+UNTRUSTED\s+WEB\s+CONTENT\s*-{3}", re.IGNORECASE),
        "[[MARKER_SANITIZED]]",
    ),
    (
        re.compile(r"-{3}\s*END\s+UNTRUSTED\s+WEB\s+CONTENT\s*-{3}", re.IGNORECASE),
        "[[END_MARKER_SANITIZED]]",
    ),
)


def neutralize_markers(content: str) -> str:
    """Replace boundary markers embedded in untrusted content.

    Folds fullwidth characters first, then finds markers in the folded text
    and applies the replacements to the original text.

    Args:
        content (str): Untrusted text that will be placed between the
            boundary markers.

    Returns:
        str: The content with every embedded marker replaced by
            ``[[MARKER_SANITIZED]]`` or ``[[END_MARKER_SANITIZED]]``.
    """
    folded = _fold_fullwidth(content)

    replacements: list[tuple[int, int, str]] = []
    for pattern, replacement in _MARKER_PATTERNS:
        for match in pattern.finditer(folded):
            replacements.append((match.start(), match.end(), replacement))

    if not replacements:
        return content

    logger.warning("Boundary marker found in untrusted content (%d occurrence(s))", len(replacements))

    replacements.sort(key=lambda r: r[0])
    parts: list[str] = []
    cursor = 0
    for start, end, replacement in replacements:
        if start < cursor:
            continue
        parts.append(content[cursor:start])
        parts.append(replacement)
        cursor = end
    parts.append(content[cursor:])
    return "".join(parts)


def format_sources(sources: Sequence) -> str:
    """Render sources as a numbered ``Sources:`` block.

    Args:
        sources (Sequence): Items with ``title`` and ``url`` attributes, in
            provider order.

    Returns:
        str: The block prefixed with a blank line, or an empty string when
            there are no sources.
    """
    if not sources:
        return ""
    lines = [
        f"{i}. {neutralize_markers(s.title)} - {neutralize_markers(s.url)}"
        for i, s in enumerate(sources, start=1)
    ]
    return "\n\nSources:\n" + "\n".join(lines)


def format_search_output(summary: str, sources: Sequence) -> str:
    """Wrap a sanitized summary and its sources between boundary markers.

    Args:
        summary (str): Sanitized provider summary.
        sources (Sequence): Items with ``title`` and ``url`` attributes.

    Returns:
        str: The text returned to the caller.
    """
    return "\n".join([
        BOUNDARY_START,
        "",
        summary,
        format_sources(sources),
        "",
        BOUNDARY_END,
    ])
