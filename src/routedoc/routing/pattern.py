"""Path compilation: turns ``/users/:id`` style paths into matchers.

A ``Matcher`` is the compiled form of a registered path: regex source
text plus the ordered names of its capture groups. Sources are written
in a path-separator-escaped dialect (every ``/`` is ``\\/``) so that
``routedoc.decoder`` can split them back into human-readable segments.
"""

import functools
import re
from dataclasses import dataclass

from routedoc.errors import RegistrationError

SEPARATOR = r"\/"
PARAM_SOURCE = r"(?:([^\/]+?))"
OPTIONAL_PARAM_SOURCE = r"(?:\/([^\/]+?))?"
WILDCARD_SOURCE = "(.*)"

_PARAM_NAME = re.compile(r":([A-Za-z_]\w*)(\?)?")

# Escaped with a backslash; "/" and "*" are handled separately
_SPECIAL_CHARS = frozenset(".+?=^!${}()[]|\\")


@functools.lru_cache(maxsize=512)
def _compile(source: str, ignore_case: bool) -> re.Pattern[str]:
    return re.compile(source, re.IGNORECASE if ignore_case else 0)


@dataclass(frozen=True, slots=True)
class Matcher:
    """A compiled path pattern.

    ``keys`` lists capture-group names in declaration order. The n-th
    parameter placeholder in ``source`` belongs to ``keys[n]``.
    """

    source: str
    keys: tuple[str, ...] = ()
    ignore_case: bool = True

    @classmethod
    def from_regex(cls, pattern: re.Pattern[str]) -> "Matcher":
        """Wrap a user-supplied compiled regex.

        Named groups keep their names; unnamed groups are keyed by
        their zero-based position, the way wildcard keys are.
        """
        names = {index: name for name, index in pattern.groupindex.items()}
        keys = tuple(names.get(i, str(i - 1)) for i in range(1, pattern.groups + 1))
        return cls(
            source=pattern.pattern,
            keys=keys,
            ignore_case=bool(pattern.flags & re.IGNORECASE),
        )

    @property
    def regex(self) -> re.Pattern[str]:
        return _compile(self.source, self.ignore_case)

    def match(self, path: str) -> dict[str, str] | None:
        """Match *path* from its start; return captured parameters or None."""
        found = self.regex.match(path)
        if found is None:
            return None
        return {
            key: value
            for key, value in zip(self.keys, found.groups(), strict=False)
            if value is not None
        }

    def __str__(self) -> str:
        return self.source


def compile_path(
    path: str,
    *,
    end: bool = True,
    ignore_case: bool = True,
) -> Matcher:
    """Compile a route path into a ``Matcher``.

    Examples::

        "/"                  -> ^\\/?$
        "*"                  -> ^(.*)\\/?$
        "/users/:id"         -> ^\\/users\\/(?:([^\\/]+?))\\/?$
        "/basic/" (end=False) -> ^\\/basic\\/?(?=\\/|$)

    ``end=False`` compiles a prefix matcher, used for mounts and
    middleware. One trailing slash is ignored and always optional.

    Raises ``RegistrationError`` for a ``:`` with no parameter name
    or a parameter name used twice.
    """
    if not isinstance(path, str):
        msg = f"Route path must be a string, got {type(path).__name__}"
        raise RegistrationError(msg)

    if path.endswith("/"):
        path = path[:-1]

    keys: list[str] = []
    parts: list[str] = ["^"]
    wildcards = 0
    i = 0

    while i < len(path):
        char = path[i]

        if char == "/":
            # "/:name?" makes the separator optional along with the parameter
            param = _PARAM_NAME.match(path, i + 1)
            if param is not None and param.group(2):
                _add_key(keys, param.group(1), path)
                parts.append(OPTIONAL_PARAM_SOURCE)
                i = param.end()
                continue
            parts.append(SEPARATOR)
            i += 1
        elif char == ":":
            param = _PARAM_NAME.match(path, i)
            if param is None:
                msg = f"Missing parameter name after ':' at offset {i} in {path!r}"
                raise RegistrationError(msg)
            _add_key(keys, param.group(1), path)
            parts.append(PARAM_SOURCE + ("?" if param.group(2) else ""))
            i = param.end()
        elif char == "*":
            keys.append(str(wildcards))
            wildcards += 1
            parts.append(WILDCARD_SOURCE)
            i += 1
        else:
            parts.append("\\" + char if char in _SPECIAL_CHARS else char)
            i += 1

    parts.append(SEPARATOR + "?")
    parts.append("$" if end else r"(?=\/|$)")

    return Matcher(source="".join(parts), keys=tuple(keys), ignore_case=ignore_case)


def _add_key(keys: list[str], name: str, path: str) -> None:
    if name in keys:
        msg = f"Parameter {name!r} appears more than once in {path!r}"
        raise RegistrationError(msg)
    keys.append(name)
