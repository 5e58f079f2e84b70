from __future__ import annotations

import re

# ============================================================================
# Render error helpers - line extraction and friendlier messages
#
# The rendering engine reports failures as free-form strings. These helpers
# locate the offending line for editor highlighting and tidy the message.
# ============================================================================

LINE_PATTERNS = [
    re.compile(r"line (\d+)", re.IGNORECASE),
    re.compile(r"at line (\d+)", re.IGNORECASE),
    re.compile(r"on line (\d+)", re.IGNORECASE),
    re.compile(r"\((\d+):\d+\)"),
    re.compile(r"Parse error on line (\d+)", re.IGNORECASE),
    re.compile(r"Error: .*?line (\d+)", re.IGNORECASE),
]

FIX_SUGGESTIONS: list[tuple[re.Pattern[str], str]] = [
    (
        re.compile(r"unknown diagram type", re.IGNORECASE),
        "Tip: Check the diagram keyword (e.g., flowchart, sequenceDiagram, classDiagram)",
    ),
    (
        re.compile(r"lexical error", re.IGNORECASE),
        "Tip: Check for unclosed quotes or brackets near the indicated position",
    ),
    (
        re.compile(r"expecting\b.*?\bgot\s+'NEWLINE'", re.IGNORECASE),
        "Tip: The previous line may be incomplete, check for missing arrows or colons",
    ),
    (
        re.compile(r"expecting\b.*?\bgot\s+'EOF'", re.IGNORECASE),
        "Tip: A block may be missing its 'end' keyword",
    ),
    (
        re.compile(r"syntax error", re.IGNORECASE),
        "Tip: Check for typos in keywords or missing colons/arrows",
    ),
    (
        re.compile(r"duplicate", re.IGNORECASE),
        "Tip: An element with this name already exists, use a unique identifier",
    ),
    (
        re.compile(r"not a valid", re.IGNORECASE),
        "Tip: Check that the value matches the expected format for this diagram type",
    ),
]

MAX_MESSAGE_LENGTH = 150


def parse_error_line(error: str) -> int | None:
    """Return the first positive line number mentioned in ``error``."""
    if not error:
        return None
    for pattern in LINE_PATTERNS:
        m = pattern.search(error)
        if m:
            line = int(m.group(1))
            if line > 0:
                return line
    return None


def format_error(error: str) -> str:
    """Shorten a render error and append a fix suggestion when one applies."""
    if not error:
        return ""

    msg = re.sub(r"^Error:\s*", "", error, flags=re.IGNORECASE)

    parse_match = re.search(r"Parse error on line (\d+):", msg, re.IGNORECASE)
    if parse_match:
        msg = re.sub(r"Parse error on line \d+:\s*", "", msg, count=1, flags=re.IGNORECASE)

    expecting_match = re.search(r"Expecting\s+.+?,\s*got\s+'([^']+)'", msg, re.IGNORECASE)
    if expecting_match and parse_match:
        msg = f"Unexpected token '{expecting_match.group(1)}' on line {parse_match.group(1)}"

    msg = msg[:1].upper() + msg[1:]

    if len(msg) > MAX_MESSAGE_LENGTH:
        msg = msg[: MAX_MESSAGE_LENGTH - 3] + "..."

    for pattern, suggestion in FIX_SUGGESTIONS:
        if pattern.search(error):
            msg += f" - {suggestion}"
            break

    return msg
