"""Small text helpers: code dedenting and URL query lookup."""

from __future__ import annotations


def _indent_width(line: str) -> int:
    return len(line) - len(line.lstrip(" \t"))


def remove_leading_indentation(code: str) -> str:
    """Remove from every line at most the indentation of the first line."""
    first_indent = _indent_width(code)
    pieces = code.split("\n")
    lines = [piece + "\n" for piece in pieces[:-1]]
    if pieces[-1]:
        lines.append(pieces[-1])
    return "".join(line[min(first_indent, _indent_width(line)):] for line in lines)


def parse_url_query_string(query: str, search_key: str) -> str | None:
    """Find the value of ``search_key`` in a ``?key=value&...`` query string.

    Returns None when the query does not start with '?', when the key is
    missing, or when a pair before it has no '='.
    """
    if not query.startswith("?"):
        return None
    for pair in query[1:].split("&"):
        parts = pair.split("=")
        if len(parts) < 2:
            return None
        key, value = parts[0], parts[1]
        if key == search_key:
            return value
    return None