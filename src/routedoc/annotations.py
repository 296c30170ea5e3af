"""Annotation text helpers.

``assemble_doc`` merges literal fragments with interpolated values into
one annotation string. ``parse_doc`` splits such a string into a summary,
a free-text description, and JSDoc-style ``@tag`` lines::

    Spits your params back out at you
    @param fizz
    @returns {fizz, buzz, quux}

Neither is needed by the walker, which treats docs as opaque values.
"""

import inspect
import re
from collections.abc import Sequence
from dataclasses import dataclass

_TAG_LINE = re.compile(r"^@(?P<title>[\w-]+)\s*(?:\{(?P<type>[^}]*)\})?\s*(?P<rest>.*)$")

# Tags whose first word after the type is a name, not description
_NAMED_TAGS = frozenset({"param", "arg", "argument", "prop", "property"})


@dataclass(frozen=True, slots=True)
class Tag:
    title: str
    type: str | None = None
    name: str | None = None
    description: str = ""


@dataclass(frozen=True, slots=True)
class Annotation:
    """A parsed documentation string. ``str()`` gives back the source text."""

    text: str
    summary: str = ""
    description: str = ""
    tags: tuple[Tag, ...] = ()

    def tags_named(self, title: str) -> list[Tag]:
        return [tag for tag in self.tags if tag.title == title]

    def __str__(self) -> str:
        return self.text


def assemble_doc(fragments: Sequence[str] | str, values: Sequence[object] = ()) -> str:
    """Interleave literal *fragments* with *values* into one string.

    ``fragments`` has one more entry than ``values``, the shape a
    template literal splits into. A plain string is returned unchanged,
    and several fragments with no values are joined line by line.
    """
    if isinstance(fragments, str):
        return fragments

    if not values:
        return "\n".join(fragments)

    if len(fragments) != len(values) + 1:
        msg = f"Expected {len(values) + 1} fragments for {len(values)} values, got {len(fragments)}"
        raise ValueError(msg)

    parts: list[str] = []
    for fragment, value in zip(fragments, values, strict=False):
        parts.append(fragment)
        parts.append(str(value))
    parts.append(fragments[-1])
    return "".join(parts)


def parse_doc(text: str) -> Annotation:
    """Parse annotation text into summary, description and tags.

    Indentation is normalized first, so triple-quoted strings indented
    with the surrounding code parse the same as flush-left ones. Lines
    after a tag line, up to the next tag, continue that tag's description.
    """
    cleaned = inspect.cleandoc(text)
    prose: list[str] = []
    tags: list[Tag] = []
    current: dict[str, str | None] | None = None

    for line in cleaned.splitlines():
        match = _TAG_LINE.match(line.strip())
        if match is not None:
            if current is not None:
                tags.append(_make_tag(current))
            current = {
                "title": match.group("title"),
                "type": match.group("type"),
                "rest": match.group("rest"),
            }
        elif current is not None:
            current["rest"] = f"{current['rest']} {line.strip()}".strip()
        else:
            prose.append(line)

    if current is not None:
        tags.append(_make_tag(current))

    description = "\n".join(prose).strip()
    summary = description.split("\n\n", 1)[0].splitlines()[0] if description else ""
    return Annotation(text=cleaned, summary=summary, description=description, tags=tuple(tags))


def _make_tag(parts: dict[str, str | None]) -> Tag:
    title = parts["title"] or ""
    rest = (parts["rest"] or "").strip()
    type_ = parts["type"].strip() if parts["type"] is not None else None

    name = None
    if title in _NAMED_TAGS and rest:
        name, _, rest = rest.partition(" ")
        rest = rest.strip().removeprefix("- ").strip()

    return Tag(title=title, type=type_, name=name, description=rest)
