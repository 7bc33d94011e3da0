# rxpipe/core/replacement.py
"""
Replacement templates with ``$`` back-references.

Supported tokens:
    $$        literal "$"
    $&        the whole match
    $`        text before the match
    $'        text after the match
    $1..$99   capture group (unmatched group inserts "")
    $<name>   named capture group

References to groups the pattern does not have are kept literally, so
"$9" against a two-group pattern renders as "$9". A two-digit reference
that does not exist falls back to a one-digit reference followed by the
second digit: with three groups "$12" renders group 1 then "2".
"""

from __future__ import annotations

import re
from typing import Callable, List, Mapping

Renderer = Callable[[re.Match], str]

_TOKEN_RE = re.compile(r"\$(?:(?P<dollar>\$)|(?P<whole>&)|(?P<before>`)|(?P<after>')|(?P<num>\d{1,2})|<(?P<name>[^>]*)>)")


def _literal(text: str) -> Renderer:
    return lambda match: text


def _group(ref) -> Renderer:
    return lambda match: match.group(ref) or ""


def _whole(match: re.Match) -> str:
    return match.group(0)


def _before(match: re.Match) -> str:
    return match.string[: match.start()]


def _after(match: re.Match) -> str:
    return match.string[match.end() :]


def _numbered(token: str, group_count: int) -> List[Renderer]:
    number = int(token)
    if 1 <= number <= group_count:
        return [_group(number)]

    if len(token) == 2:
        first = int(token[0])
        if 1 <= first <= group_count:
            return [_group(first), _literal(token[1])]

    return [_literal("$" + token)]


def _tokenize(template: str, group_count: int, group_names: Mapping[str, int]) -> List[Renderer]:
    parts: List[Renderer] = []
    pos = 0

    while True:
        token = _TOKEN_RE.search(template, pos)
        if token is None:
            break

        if token.start() > pos:
            parts.append(_literal(template[pos : token.start()]))
        pos = token.end()

        kind = token.lastgroup
        if kind == "dollar":
            parts.append(_literal("$"))
        elif kind == "whole":
            parts.append(_whole)
        elif kind == "before":
            parts.append(_before)
        elif kind == "after":
            parts.append(_after)
        elif kind == "num":
            parts.extend(_numbered(token.group("num"), group_count))
        elif not group_names:
            # Without named groups "$<" is plain text; rescan after it.
            parts.append(_literal("$<"))
            pos = token.start() + 2
        else:
            name = token.group("name")
            parts.append(_group(name) if name in group_names else _literal(""))

    if pos < len(template):
        parts.append(_literal(template[pos:]))

    return parts


def compile_template(template: str, regex: re.Pattern) -> Renderer:
    """
    Pre-tokenize ``template`` for ``regex``.

    Returns:
        A callable suitable as the ``repl`` argument of ``regex.sub``.
    """
    parts = _tokenize(template, regex.groups, regex.groupindex)

    if not parts:
        return _literal("")
    if len(parts) == 1:
        return parts[0]

    def render(match: re.Match) -> str:
        return "".join(part(match) for part in parts)

    return render


def expand_template(match: re.Match, template: str) -> str:
    """Render ``template`` for a single match."""
    return compile_template(template, match.re)(match)


__all__ = ["compile_template", "expand_template"]
