"""Collation: simplified paths, sort keys, and buckets.

Each doc item's path chain is folded left to right into a simplified
path: literal segments and ``:name`` placeholders. Items sharing a
simplified path share a bucket, whatever their kind or verb::

    chain:  "/" , ^\\/basic\\/?(?=\\/|$) , ^\\/:id\\/?$
    path:   ("basic", ":id")
    key:    "|basic|:id|"

Buckets keep first-seen key order, and items inside a bucket keep walker
order, so reports are stable from one run to the next.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field, replace

from routedoc.config import ReportConfig
from routedoc.decoder import Placeholder, resolve_element
from routedoc.routing.pattern import Matcher
from routedoc.walker import DocItem, ReportSection, WalkReport

# Tokens that carry no path information of their own
_DEGENERATE = frozenset({"", "/"})


@dataclass(frozen=True, slots=True)
class CollatedSection:
    """One container's items grouped by sort key."""

    name: str
    index: int | None = None
    buckets: dict[str, list[DocItem]] = field(default_factory=dict)

    def __iter__(self) -> Iterator[tuple[str, list[DocItem]]]:
        return iter(self.buckets.items())

    def __len__(self) -> int:
        return len(self.buckets)


@dataclass(frozen=True, slots=True)
class CollatedReport:
    app: CollatedSection
    routers: tuple[CollatedSection, ...] = ()


def simplify(item: DocItem, *, delimiter: str = "|") -> DocItem:
    """Return *item* with ``simple_path``, ``params`` and ``sort_key`` filled in."""
    simple_path: list[str | Matcher] = []
    keys: list[str] = []

    for element in item.path_chain:
        keys.extend(element.keys)
        resolved = resolve_element(element)
        if isinstance(resolved, Matcher):
            simple_path.append(resolved)
            continue

        # Placeholders bind to the names of the element that produced them
        consumed = 0
        for token in resolved:
            if isinstance(token, Placeholder):
                name = element.keys[consumed] if consumed < len(element.keys) else str(consumed)
                simple_path.append(token.render(name))
                consumed += 1
            elif token not in _DEGENERATE:
                simple_path.append(token)

    sort_key = delimiter.join(["", *(str(token) for token in simple_path), ""])
    return replace(item, simple_path=tuple(simple_path), params=tuple(keys), sort_key=sort_key)


def collate_items(items: tuple[DocItem, ...], *, delimiter: str = "|") -> dict[str, list[DocItem]]:
    """Group simplified items by sort key, preserving first-seen order."""
    buckets: dict[str, list[DocItem]] = {}
    for item in items:
        simplified = simplify(item, delimiter=delimiter)
        buckets.setdefault(simplified.sort_key or "", []).append(simplified)
    return buckets


def _collate_section(section: ReportSection, delimiter: str) -> CollatedSection:
    return CollatedSection(
        name=section.name,
        index=section.index,
        buckets=collate_items(section.items, delimiter=delimiter),
    )


def collate(report: WalkReport, *, config: ReportConfig | None = None) -> CollatedReport:
    """Collate the application and every router section independently."""
    delimiter = (config or ReportConfig()).delimiter
    return CollatedReport(
        app=_collate_section(report.app, delimiter),
        routers=tuple(_collate_section(router, delimiter) for router in report.routers),
    )
