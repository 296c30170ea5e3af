"""Pattern decoding: compiled matchers back to readable path templates.

Reverses ``routedoc.routing.pattern.compile_path``::

    ^\\/?$                                  -> ("/",)
    ^(.*)\\/?$                              -> ("*",)
    ^\\/users\\/(?:([^\\/]+?))\\/?$           -> ("users", PARAM)
    ^\\/basic\\/?(?=\\/|$)                    -> ("basic",)

Each ``PARAM`` placeholder stands for one capture-group name, taken in
order from the matcher's ``keys`` by the collator. A matcher whose source
cannot be split cleanly is returned unchanged.
"""

import re

from routedoc.routing.nodes import PathElement
from routedoc.routing.pattern import (
    OPTIONAL_PARAM_SOURCE,
    PARAM_SOURCE,
    SEPARATOR,
    WILDCARD_SOURCE,
    Matcher,
)


class Placeholder:
    """Marker for a parameter position in a decoded path.

    ``template`` formats the parameter name bound to this position.
    """

    __slots__ = ("label", "template")

    def __init__(self, label: str, template: str) -> None:
        self.label = label
        self.template = template

    def render(self, name: str) -> str:
        return self.template.format(name)

    def __repr__(self) -> str:
        return self.label


PARAM = Placeholder("PARAM", ":{}")
OPTIONAL = Placeholder("OPTIONAL", ":{}?")
WILDCARD = Placeholder("WILDCARD", "*")

Token = str | Placeholder
Decoded = tuple[Token, ...]

ROOT_SOURCE = r"^\/?$"
CATCH_ALL_SOURCE = r"^(.*)\/?$"

_HEAD = "^"
_TAIL = "?$"

# Adjacent-token patterns left behind by splitting on the separator
_COLLAPSE: tuple[tuple[tuple[str, ...], Placeholder | None], ...] = (
    (("(?:([^", "]+?))?"), OPTIONAL),
    (("(?:([^", "]+?))"), PARAM),
    (("?(?=", "|$)"), None),
    ((WILDCARD_SOURCE,), WILDCARD),
)

_ESCAPE = re.compile(r"\\(.)")

# Plain characters, or metacharacters escaped the way compile_path escapes them
_LITERAL = re.compile(r"(?:[^\\.+*?^$()\[\]{}|]|\\[.+*?=^!$(){}\[\]|\\/-])*")


def decode(pattern: Matcher) -> Decoded | Matcher:
    """Decode a matcher into path tokens, or return it unchanged.

    Splits the source on the escaped separator, strips the anchor tokens,
    collapses parameter token runs into placeholders and optional-suffix
    pairs into nothing. If any remaining token still holds a bare ``/`` or
    unescaped regex syntax (such as ``\\d``, or a parameter sharing a
    segment with literal text), the whole pattern is undecodable and the
    original matcher comes back.
    """
    if pattern.source == ROOT_SOURCE:
        return ("/",)
    if pattern.source == CATCH_ALL_SOURCE:
        return ("*",)

    # "/:name?" compiles with the separator inside the optional group
    source = pattern.source.replace(OPTIONAL_PARAM_SOURCE, SEPARATOR + PARAM_SOURCE + "?")
    pieces = source.split(SEPARATOR)
    if pieces and pieces[0] == _HEAD:
        pieces.pop(0)
    if pieces and pieces[-1] == _TAIL:
        pieces.pop()

    tokens: list[Token] = []
    i = 0
    while i < len(pieces):
        for run, replacement in _COLLAPSE:
            if tuple(pieces[i : i + len(run)]) == run:
                if replacement is not None:
                    tokens.append(replacement)
                i += len(run)
                break
        else:
            piece = pieces[i]
            if "/" in _ESCAPE.sub("", piece) or _LITERAL.fullmatch(piece) is None:
                return pattern
            tokens.append(_ESCAPE.sub(r"\1", piece))
            i += 1

    return tuple(tokens)


def resolve_element(element: PathElement) -> Decoded | Matcher:
    """Return the path tokens one chain element contributes.

    A literal ``path`` passes through unchanged. Otherwise the matcher
    is decoded, falling back to the mount fragment.
    """
    if element.path is not None:
        return (element.path,)
    if element.matcher is not None:
        return decode(element.matcher)
    if element.mount_path is not None:
        return (element.mount_path,)
    return ()
