"""Tree walker: one pass over a routing graph, one doc list per container.

Containers are processed first-discovered-first-processed from a FIFO
worklist. A container is enqueued at most once, checked against the
visited map at the moment it is discovered, so sub-routers mounted at
several paths, or mounted inside themselves, are each walked exactly once.

Within a container the walk is depth-first. The path chain is a tuple:
each node extends its parent's chain without touching it, so siblings
never see each other's elements.

Mounts are not followed inline. A ``ContainerRef`` records the mount and
queues its target, which is later walked from a fresh, empty chain.
"""

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from routedoc.config import ReportConfig
from routedoc.errors import StructuralError
from routedoc.registry import AnnotationStore
from routedoc.routing.nodes import Container, Method, NodeKind, PathElement
from routedoc.routing.pattern import Matcher

logger = logging.getLogger("routedoc.walker")

PathChain = tuple[PathElement, ...]


@dataclass(frozen=True, slots=True)
class DocItem:
    """One documented (or structurally relevant) node.

    ``simple_path``, ``params`` and ``sort_key`` are empty until the
    collator fills them in.
    """

    kind: NodeKind
    path_chain: PathChain
    doc: object | None = None
    verb: str | None = None
    name: str | None = None
    index: int | None = None
    handler: Callable[..., Any] | None = None
    simple_path: tuple[str | Matcher, ...] = ()
    params: tuple[str, ...] = ()
    sort_key: str | None = None


@dataclass(frozen=True, slots=True)
class ReportSection:
    """The doc items of one container, in emission order."""

    name: str
    index: int | None = None
    items: tuple[DocItem, ...] = ()


@dataclass(frozen=True, slots=True)
class WalkReport:
    app: ReportSection
    routers: tuple[ReportSection, ...] = field(default_factory=tuple)


class _ContainerWalk:
    """Depth-first walk of one container's nodes."""

    __slots__ = ("_discover", "_items", "_store")

    def __init__(self, store: AnnotationStore, discover: Callable[[Container], None]) -> None:
        self._store = store
        self._discover = discover
        self._items: list[DocItem] = []

    def run(self, container: Container) -> list[DocItem]:
        self._visit(container, ())
        return self._items

    def _visit(self, node: Any, parent_chain: PathChain) -> None:
        kind = getattr(node, "kind", None)
        if not isinstance(kind, NodeKind):
            msg = f"Malformed routing node {node!r}: no node kind"
            raise StructuralError(msg)

        element = getattr(node, "element", None)
        if not isinstance(element, PathElement):
            msg = f"Malformed routing node {node!r}: no path element"
            raise StructuralError(msg)

        chain = (*parent_chain, element)
        doc = self._store.lookup_doc(node)

        if kind is NodeKind.METHOD:
            self._emit(kind, chain, doc, verb=node.verb, handler=node.handler)

        elif kind is NodeKind.ROUTE:
            if doc is not None:
                self._emit(kind, chain, doc)
            for child in _children_of(node):
                if not isinstance(child, Method):
                    msg = f"Route group at {node.path!r} holds a non-method node {child!r}"
                    raise StructuralError(msg)
                self._visit(child, chain)

        elif kind is NodeKind.CONTAINER:
            self._emit(
                kind,
                chain,
                doc,
                name=self._store.container_name(node),
                index=self._store.container_index(node),
            )
            for child in _children_of(node):
                self._visit(child, chain)

        elif kind is NodeKind.CONTAINER_REF:
            target = node.target
            if not isinstance(target, Container):
                msg = f"Mount at {node.path!r} does not reference a container"
                raise StructuralError(msg)
            self._emit(
                kind,
                chain,
                doc,
                name=self._store.container_name(target),
                index=self._store.container_index(target),
            )
            self._discover(target)

        elif kind is NodeKind.MIDDLEWARE:
            self._emit(kind, chain, doc, name=node.name, handler=node.handler)

    def _emit(self, kind: NodeKind, chain: PathChain, doc: object | None, **fields: Any) -> None:
        self._items.append(DocItem(kind=kind, path_chain=chain, doc=doc, **fields))


def _children_of(node: Any) -> list[Any] | tuple[Any, ...]:
    children = getattr(node, "children", None)
    if not isinstance(children, list | tuple):
        msg = f"Node {node!r} has no child sequence"
        raise StructuralError(msg)
    return children


def walk(
    root: Container,
    store: AnnotationStore,
    *,
    config: ReportConfig | None = None,
) -> WalkReport:
    """Walk the routing graph reachable from *root*.

    Returns the application's doc items plus one section per sub-router,
    routers ordered by registration index. Unregistered routers sort last,
    in discovery order.

    Raises ``StructuralError`` for malformed nodes, for a second
    application container, or when no application container is found.
    """
    config = config or ReportConfig()
    if not isinstance(root, Container):
        msg = f"Walk root must be a container, got {type(root).__name__}"
        raise StructuralError(msg)

    todo: deque[Container] = deque([root])
    visited: dict[Container, list[DocItem] | None] = {root: None}

    def discover(container: Container) -> None:
        if container in visited:
            return
        logger.debug("Queued container %r", store.container_name(container))
        visited[container] = None
        todo.append(container)

    while todo:
        current = todo.popleft()
        logger.debug("Walking container %r", store.container_name(current))
        visited[current] = _ContainerWalk(store, discover).run(current)

    app: ReportSection | None = None
    routers: list[ReportSection] = []

    for container, items in visited.items():
        if container.is_app:
            if app is not None:
                msg = "Multiple application containers encountered in one walk"
                raise StructuralError(msg)
            app = ReportSection(name=config.app_name, items=tuple(items or ()))
        else:
            routers.append(
                ReportSection(
                    name=store.container_name(container) or config.unnamed_router,
                    index=store.container_index(container),
                    items=tuple(items or ()),
                )
            )

    if app is None:
        msg = "No application container reachable from the walk root"
        raise StructuralError(msg)

    routers.sort(key=lambda section: (section.index is None, section.index or 0))
    return WalkReport(app=app, routers=tuple(routers))
