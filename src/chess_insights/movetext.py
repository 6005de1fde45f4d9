"""Movetext tokenizer.

Turns a raw PGN blob into the ordered list of SAN tokens, index 0 being
White's first ply. Every stage is a plain left-to-right scan and none of
them raise: malformed input degrades to a partial or empty list.
"""

from __future__ import annotations

_RESULT_MARKERS = ("1-0", "0-1", "1/2-1/2", "*")
_DIGITS = frozenset("0123456789")


def parse_move_tokens(pgn: str | None) -> list[str]:
    """Return the mainline move tokens of a PGN blob.

    Stages run in a fixed order: header tags, comments, variations, NAGs,
    result markers, then move numbers.
    """
    text = strip_header_tags(pgn or "")
    text = _strip_delimited(text, "{", "}")
    text = _strip_delimited(text, "(", ")")
    text = _strip_nags(text)
    text = _strip_result_markers(text)
    tokens: list[str] = []
    for raw in text.split():
        token = strip_move_number(raw)
        if token:
            tokens.append(token)
    return tokens


def strip_header_tags(pgn: str) -> str:
    """Remove every ``[Tag "value"]`` block."""
    return _strip_delimited(pgn, "[", "]")


def strip_move_number(token: str) -> str:
    """Drop a leading ``12.`` or ``12...`` prefix from a token."""
    index = 0
    while index < len(token) and token[index] in _DIGITS:
        index += 1
    if index == 0 or index >= len(token) or token[index] != ".":
        return token
    while index < len(token) and token[index] == ".":
        index += 1
    return token[index:]


def count_move_number_markers(text: str) -> int:
    """Count runs of digits immediately followed by a dot."""
    count = 0
    index = 0
    length = len(text)
    while index < length:
        if text[index] not in _DIGITS:
            index += 1
            continue
        while index < length and text[index] in _DIGITS:
            index += 1
        if index < length and text[index] == ".":
            count += 1
            index += 1
    return count


def _strip_delimited(text: str, open_char: str, close_char: str) -> str:
    # Non-nested: a span runs from the opener to the first closer after it.
    # An opener without a closer leaves the rest of the text untouched.
    parts: list[str] = []
    index = 0
    while index < len(text):
        start = text.find(open_char, index)
        if start == -1:
            break
        end = text.find(close_char, start + 1)
        if end == -1:
            break
        parts.append(text[index:start])
        parts.append(" ")
        index = end + 1
    parts.append(text[index:])
    return "".join(parts)


def _strip_nags(text: str) -> str:
    parts: list[str] = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char == "$" and index + 1 < length and text[index + 1] in _DIGITS:
            index += 1
            while index < length and text[index] in _DIGITS:
                index += 1
            parts.append(" ")
            continue
        parts.append(char)
        index += 1
    return "".join(parts)


def _strip_result_markers(text: str) -> str:
    parts: list[str] = []
    index = 0
    while index < len(text):
        marker = _result_marker_at(text, index)
        if marker is not None:
            parts.append(" ")
            index += len(marker)
            continue
        parts.append(text[index])
        index += 1
    return "".join(parts)


def _result_marker_at(text: str, index: int) -> str | None:
    for marker in _RESULT_MARKERS:
        if text.startswith(marker, index):
            return marker
    return None
