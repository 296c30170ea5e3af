"""Annotation store: docs, router names and registration indexes.

The walker reads from the store through the ``AnnotationStore``
protocol and never mutates it. ``Registry`` is the concrete store that
the registration API writes into.

Registration index is a router's position in registration order. It is
assigned once, when the router is first registered, and never changes.
"""

import logging
from typing import TYPE_CHECKING, Protocol

from routedoc.config import ReportConfig
from routedoc.errors import RegistrationError
from routedoc.routing.nodes import Container
from routedoc.routing.router import App, Router

if TYPE_CHECKING:
    from routedoc.collate import CollatedReport
    from routedoc.walker import WalkReport

logger = logging.getLogger("routedoc.registry")


class AnnotationStore(Protocol):
    """What the walker needs from an annotation store."""

    def lookup_doc(self, node: object) -> object | None: ...

    def container_name(self, container: Container) -> str | None: ...

    def container_index(self, container: Container) -> int | None: ...


class Registry:
    """The annotation store and router factory.

    Usage::

        registry = Registry()
        app = registry.app(doc="what a superb app")
        basic = registry.router("basic", doc="just your plain ol' basic router")

        basic.get("/", handler, doc="Returns 'basic'")
        app.use("/basic/", basic)

        collated = registry.collate(app)
    """

    __slots__ = ("_docs", "_indexes", "_names", "_routers")

    def __init__(self) -> None:
        self._docs: dict[object, object] = {}
        self._routers: list[Container] = []
        self._indexes: dict[Container, int] = {}
        self._names: dict[Container, str | None] = {}

    # -- Factories --

    def app(self, *, doc: object | None = None, mount_path: str = "/") -> App:
        """Create an application root bound to this registry."""
        app = App(registry=self, mount_path=mount_path)
        if doc is not None:
            self.attach(app, doc)
        return app

    def router(self, name: str | None = None, *, doc: object | None = None) -> Router:
        """Create a router and register it under *name*."""
        return self.register(Router(registry=self), name, doc=doc)

    def register(
        self,
        router: Router,
        name: str | None = None,
        *,
        doc: object | None = None,
    ) -> Router:
        """Register an existing router, assigning its index.

        Raises ``RegistrationError`` if the router is already registered,
        is an application, or *name* is not a string.
        """
        if not isinstance(router, Router) or router.is_app:
            msg = f"Only routers can be registered, got {type(router).__name__}"
            raise RegistrationError(msg)
        if router in self._indexes:
            msg = f"Router is already registered at index {self._indexes[router]}"
            raise RegistrationError(msg)
        if name is not None and not isinstance(name, str):
            msg = f"Router name must be a string, got {type(name).__name__}"
            raise RegistrationError(msg)

        router.bind(self)
        self._indexes[router] = len(self._routers)
        self._routers.append(router)
        self._names[router] = name or None
        if doc is not None:
            self.attach(router, doc)

        logger.debug("Registered router %r at index %d", name, self._indexes[router])
        return router

    def attach(self, node: object, doc: object) -> None:
        """Attach *doc* to *node*. A node holds at most one doc; the last one wins."""
        if node in self._docs:
            logger.debug("Replacing doc on %r", node)
        self._docs[node] = doc

    # -- AnnotationStore --

    def lookup_doc(self, node: object) -> object | None:
        return self._docs.get(node)

    def container_name(self, container: Container) -> str | None:
        return self._names.get(container)

    def container_index(self, container: Container) -> int | None:
        return self._indexes.get(container)

    def container_at(self, index: int) -> Container | None:
        """Return the router registered at *index*, or None."""
        if 0 <= index < len(self._routers):
            return self._routers[index]
        return None

    @property
    def routers(self) -> tuple[Container, ...]:
        return tuple(self._routers)

    # -- Reporting --

    def walk(self, root: Container, *, config: ReportConfig | None = None) -> "WalkReport":
        from routedoc.walker import walk

        return walk(root, self, config=config)

    def collate(self, root: Container, *, config: ReportConfig | None = None) -> "CollatedReport":
        """Walk *root* and collate the result in one step."""
        from routedoc.collate import collate

        return collate(self.walk(root, config=config), config=config)
