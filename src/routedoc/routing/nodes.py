"""Routing node variants.

Every node class fixes its ``kind`` at class level, so traversal
dispatches on one discriminant instead of inspecting which optional
fields a node happens to carry.

Nodes compare and hash by identity (``eq=False``): two routes with the
same path are still two different registrations, and the annotation
store keys docs by node identity.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, TypeAlias

from routedoc.routing.pattern import Matcher


class NodeKind(Enum):
    METHOD = "method"
    ROUTE = "route"
    CONTAINER = "container"
    CONTAINER_REF = "container-ref"
    MIDDLEWARE = "middleware"


@dataclass(frozen=True, slots=True)
class PathElement:
    """One node's contribution to a path chain.

    ``path`` is a literal segment, ``matcher`` a compiled pattern and
    ``mount_path`` the fragment a container was mounted under. When more
    than one is present, they take precedence in that order.
    """

    path: str | None = None
    matcher: Matcher | None = None
    mount_path: str | None = None

    @property
    def keys(self) -> tuple[str, ...]:
        return self.matcher.keys if self.matcher is not None else ()

    @property
    def is_empty(self) -> bool:
        return self.path is None and self.matcher is None and self.mount_path is None


@dataclass(eq=False, slots=True)
class Method:
    """Terminal handler for one HTTP verb inside a route group."""

    kind: ClassVar[NodeKind] = NodeKind.METHOD

    verb: str
    handler: Callable[..., Any]

    @property
    def name(self) -> str:
        return getattr(self.handler, "__name__", "<anonymous>")

    @property
    def element(self) -> PathElement:
        return PathElement()


@dataclass(eq=False, slots=True)
class RouteGroup:
    """A shared path holding one or more ``Method`` children."""

    kind: ClassVar[NodeKind] = NodeKind.ROUTE

    matcher: Matcher
    path: str | None = None
    children: list[Method] = field(default_factory=list)

    @property
    def element(self) -> PathElement:
        return PathElement(matcher=self.matcher)

    @property
    def verbs(self) -> list[str]:
        return [method.verb for method in self.children]


@dataclass(eq=False, slots=True)
class Container:
    """An ordered sequence of child nodes: an application or a sub-router."""

    kind: ClassVar[NodeKind] = NodeKind.CONTAINER

    children: list[Any] = field(default_factory=list, repr=False)
    mount_path: str = "/"
    is_app: bool = False

    @property
    def element(self) -> PathElement:
        return PathElement(mount_path=self.mount_path)


@dataclass(eq=False, slots=True)
class ContainerRef:
    """A mount: a leaf pointing at another ``Container``."""

    kind: ClassVar[NodeKind] = NodeKind.CONTAINER_REF

    matcher: Matcher
    target: Container
    path: str | None = None

    @property
    def element(self) -> PathElement:
        return PathElement(matcher=self.matcher)


@dataclass(eq=False, slots=True)
class Middleware:
    """Opaque leaf handler, matched by path prefix."""

    kind: ClassVar[NodeKind] = NodeKind.MIDDLEWARE

    matcher: Matcher
    handler: Callable[..., Any]
    path: str | None = None

    @property
    def name(self) -> str | None:
        return getattr(self.handler, "__name__", None)

    @property
    def element(self) -> PathElement:
        return PathElement(matcher=self.matcher)


RoutingNode: TypeAlias = Method | RouteGroup | Container | ContainerRef | Middleware
