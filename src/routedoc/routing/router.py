"""Registration API: builds routing trees out of nodes.

Every registration call takes its documentation as an explicit
``doc=`` argument. A doc attaches to exactly one node:

- ``router.get(path, *handlers, doc=...)`` documents the first ``Method``
  the call creates; the implicit ``RouteGroup`` stays undocumented.
- ``router.route(path, doc=...)`` documents the ``RouteGroup`` itself.
- ``router.use(path, *handlers, doc=...)`` documents the first node the
  call appends.
"""

import re
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from routedoc.errors import RegistrationError
from routedoc.routing.nodes import Container, ContainerRef, Method, Middleware, RouteGroup
from routedoc.routing.pattern import Matcher, compile_path

if TYPE_CHECKING:
    from routedoc.registry import Registry

Handler = Callable[..., Any]
Path = str | re.Pattern[str]


def _matcher(path: Path, *, end: bool = True) -> Matcher:
    if isinstance(path, re.Pattern):
        return Matcher.from_regex(path)
    return compile_path(path, end=end)


def _path_text(path: Path) -> str:
    return path.pattern if isinstance(path, re.Pattern) else path


def _check_handlers(handlers: tuple[Any, ...]) -> None:
    for handler in handlers:
        if not callable(handler):
            msg = f"Route handler must be callable, got {type(handler).__name__}"
            raise RegistrationError(msg)


def _router_verb(verb: str) -> Callable[..., Any]:
    def register(
        self: "Router", path: Path, *handlers: Handler, doc: object | None = None
    ) -> Any:
        return self.add(verb, path, *handlers, doc=doc)

    register.__name__ = verb.replace("-", "_")
    register.__doc__ = f"Register ``{verb.upper()}`` handlers for *path*."
    return register


def _builder_verb(verb: str) -> Callable[..., Any]:
    def register(self: "RouteBuilder", *handlers: Handler, doc: object | None = None) -> Any:
        return self.add(verb, *handlers, doc=doc)

    register.__name__ = verb.replace("-", "_")
    register.__doc__ = f"Add ``{verb.upper()}`` handlers to this route."
    return register


class Router(Container):
    """A mountable container of routes, middleware and sub-routers.

    Usage::

        registry = Registry()
        users = registry.router("users")

        users.get("/", list_users, doc="List every user")

        @users.post("/:id", doc="Replace one user")
        def replace_user(request): ...

        app = registry.app()
        app.use("/users/", users, doc="User management")

    Routers created directly (``Router()``) are unregistered: they walk
    fine but carry no name or index and cannot hold docs.
    """

    __slots__ = ("_registry",)

    def __init__(self, *, registry: "Registry | None" = None, mount_path: str = "/") -> None:
        Container.__init__(self, children=[], mount_path=mount_path, is_app=False)
        self._registry = registry

    @property
    def registry(self) -> "Registry | None":
        return self._registry

    def bind(self, registry: "Registry") -> None:
        """Attach this router to *registry*. Called by ``Registry.register``."""
        if self._registry is not None and self._registry is not registry:
            msg = "Router already belongs to another registry"
            raise RegistrationError(msg)
        self._registry = registry

    def _attach(self, node: object, doc: object | None) -> None:
        if doc is None:
            return
        if self._registry is None:
            msg = "Cannot attach a doc: router is not registered with a Registry"
            raise RegistrationError(msg)
        self._registry.attach(node, doc)

    # -- Verb registration --

    def add(self, verb: str, path: Path, *handlers: Handler, doc: object | None = None) -> Any:
        """Register handlers for one verb at *path*.

        With handlers, returns the router for chaining. Without, returns
        a decorator that registers the decorated function.
        """
        if not handlers:

            def decorator(func: Handler) -> Handler:
                self.add(verb, path, func, doc=doc)
                return func

            return decorator

        _check_handlers(handlers)
        group = RouteGroup(matcher=_matcher(path), path=_path_text(path))
        group.children.extend(Method(verb=verb, handler=h) for h in handlers)
        self.children.append(group)
        self._attach(group.children[0], doc)
        return self

    get = _router_verb("get")
    post = _router_verb("post")
    put = _router_verb("put")
    delete = _router_verb("delete")
    patch = _router_verb("patch")
    head = _router_verb("head")
    options = _router_verb("options")
    trace = _router_verb("trace")
    propfind = _router_verb("propfind")
    m_search = _router_verb("m-search")
    all = _router_verb("all")

    def route(self, path: Path, *, doc: object | None = None) -> "RouteBuilder":
        """Create a route group at *path* and return a builder for its verbs.

        Usage::

            (
                router.route("/base/route/:param/", doc="Route-wide doc")
                .get(read, doc="get it")
                .put(write, doc="put it")
            )
        """
        group = RouteGroup(matcher=_matcher(path), path=_path_text(path))
        self.children.append(group)
        self._attach(group, doc)
        return RouteBuilder(self, group)

    # -- Middleware and mounts --

    def use(self, *args: Any, doc: object | None = None) -> "Router":
        """Append middleware or mount sub-routers under an optional path prefix.

        ``use(handler)`` and ``use("/prefix/", handler, other_router)`` are
        both accepted. Containers become mounts; callables become
        middleware.
        """
        path: Path = "/"
        if args and isinstance(args[0], str | re.Pattern):
            path, args = args[0], args[1:]

        if not args:
            msg = f"use() at {path!r} requires at least one handler or router"
            raise RegistrationError(msg)

        matcher = _matcher(path, end=False)
        nodes: list[ContainerRef | Middleware] = []
        for target in args:
            if isinstance(target, Container):
                nodes.append(ContainerRef(matcher=matcher, target=target, path=_path_text(path)))
            elif callable(target):
                nodes.append(Middleware(matcher=matcher, handler=target, path=_path_text(path)))
            else:
                msg = f"use() expects callables or routers, got {type(target).__name__}"
                raise RegistrationError(msg)

        self.children.extend(nodes)
        self._attach(nodes[0], doc)
        return self


class App(Router):
    """The application root. Exactly one is allowed per walk."""

    __slots__ = ()

    def __init__(self, *, registry: "Registry | None" = None, mount_path: str = "/") -> None:
        Router.__init__(self, registry=registry, mount_path=mount_path)
        self.is_app = True


class RouteBuilder:
    """Chainable verb registration for one ``RouteGroup``."""

    __slots__ = ("_group", "_router")

    def __init__(self, router: Router, group: RouteGroup) -> None:
        self._router = router
        self._group = group

    @property
    def group(self) -> RouteGroup:
        return self._group

    def add(self, verb: str, *handlers: Handler, doc: object | None = None) -> Any:
        if not handlers:

            def decorator(func: Handler) -> Handler:
                self.add(verb, func, doc=doc)
                return func

            return decorator

        _check_handlers(handlers)
        methods = [Method(verb=verb, handler=h) for h in handlers]
        self._group.children.extend(methods)
        self._router._attach(methods[0], doc)
        return self

    get = _builder_verb("get")
    post = _builder_verb("post")
    put = _builder_verb("put")
    delete = _builder_verb("delete")
    patch = _builder_verb("patch")
    head = _builder_verb("head")
    options = _builder_verb("options")
    trace = _builder_verb("trace")
    propfind = _builder_verb("propfind")
    m_search = _builder_verb("m-search")
    all = _builder_verb("all")
