"""Maven-style version ordering.

Versions are tokenized the way Maven's ComparableVersion does it: numbers compare
numerically, well-known qualifiers compare by release maturity, and anything else
sorts after the known qualifiers, lexically.
"""

from __future__ import annotations

import re


_QUALIFIERS: tuple[str, ...] = ("alpha", "beta", "milestone", "rc", "snapshot", "", "sp")
_ALIASES: dict[str, str] = {"ga": "", "final": "", "release": "", "cr": "rc"}
_SHORT_QUALIFIERS: dict[str, str] = {"a": "alpha", "b": "beta", "m": "milestone"}

_RELEASE_RANK = _QUALIFIERS.index("")
_UNKNOWN_RANK = len(_QUALIFIERS)

_TOKEN_RE = re.compile(r"\d+|[^\d.\-]+|[.\-]")

VersionKey = tuple[tuple[int, int, str], ...]


def _qualifier_item(text: str) -> tuple[int, int, str]:
    name = _ALIASES.get(text, text)
    if name in _QUALIFIERS:
        return (1, _QUALIFIERS.index(name), "")
    return (1, _UNKNOWN_RANK, name)


def _is_null(token: str) -> bool:
    if token.isdigit():
        return int(token) == 0
    return _ALIASES.get(token, token) == ""


def _tokenize(version: str) -> list[str]:
    """Split a version into number and qualifier tokens.

    A '-' closes the current segment, dropping its trailing null items so that
    ``1.0-SNAPSHOT`` tokenizes like ``1-SNAPSHOT``.
    """
    raw = _TOKEN_RE.findall(version.strip().lower())
    tokens: list[str] = []
    segment_start = 0
    for i, tok in enumerate(raw):
        if tok == ".":
            continue
        if tok == "-":
            while len(tokens) > segment_start and _is_null(tokens[-1]):
                tokens.pop()
            segment_start = len(tokens)
            continue
        nxt = raw[i + 1] if i + 1 < len(raw) else ""
        if tok in _SHORT_QUALIFIERS and nxt.isdigit():
            tok = _SHORT_QUALIFIERS[tok]
        tokens.append(tok)
    while len(tokens) > segment_start and _is_null(tokens[-1]):
        tokens.pop()
    while tokens and _is_null(tokens[-1]):
        tokens.pop()
    return tokens


def version_key(version: str) -> VersionKey:
    """Return a sort key ordering versions the way Maven does.

    Examples:
        ``1.9 < 1.10``, ``1.0-SNAPSHOT < 1.0``, ``1.0-alpha < 1.0-rc < 1.0 < 1.0-sp``.
    """
    items: list[tuple[int, int, str]] = []
    for tok in _tokenize(version):
        if tok.isdigit():
            items.append((2, int(tok), ""))
        else:
            items.append(_qualifier_item(tok))
    # End marker: a missing item compares like the release qualifier.
    items.append((1, _RELEASE_RANK, ""))
    return tuple(items)
