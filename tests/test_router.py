"""Tests for routedoc.routing.router: the registration API."""

import re

import pytest

from routedoc.errors import RegistrationError
from routedoc.registry import Registry
from routedoc.routing.nodes import ContainerRef, Method, Middleware, NodeKind, RouteGroup
from routedoc.routing.router import App, Router


def _handler(request: object) -> str:
    return "ok"


def _other(request: object) -> str:
    return "other"


class TestVerbRegistration:
    def test_get_creates_route_group(self) -> None:
        router = Router()
        router.get("/users", _handler)

        [group] = router.children
        assert isinstance(group, RouteGroup)
        assert group.path == "/users"
        assert group.verbs == ["get"]
        assert group.children[0].handler is _handler

    def test_multiple_handlers_share_one_group(self) -> None:
        router = Router()
        router.get("/", _handler, _other)

        [group] = router.children
        assert [m.handler for m in group.children] == [_handler, _other]

    def test_chaining(self) -> None:
        router = Router()
        result = router.get("/a", _handler).post("/b", _handler)
        assert result is router
        assert len(router.children) == 2

    def test_decorator_form(self) -> None:
        router = Router()

        @router.post("/items")
        def create_item(request: object) -> str:
            return "created"

        assert create_item(None) == "created"
        [group] = router.children
        assert group.children[0].verb == "post"
        assert group.children[0].handler is create_item

    def test_hyphenated_verb(self) -> None:
        router = Router()
        router.m_search("/", _handler)
        assert router.children[0].verbs == ["m-search"]

    def test_all_verb(self) -> None:
        router = Router()
        router.all("*", _handler)
        assert router.children[0].verbs == ["all"]

    def test_regex_path(self) -> None:
        router = Router()
        router.get(re.compile(r"/regex/(.*)"), _handler)
        group = router.children[0]
        assert group.path == "/regex/(.*)"
        assert group.matcher.keys == ("0",)

    def test_non_callable_handler(self) -> None:
        router = Router()
        with pytest.raises(RegistrationError, match="must be callable"):
            router.get("/", "not a handler")  # type: ignore[arg-type]


class TestRouteBuilder:
    def test_route_chain(self) -> None:
        router = Router()
        builder = router.route("/base/route/:param/").get(_handler).put(_other)

        group = builder.group
        assert router.children == [group]
        assert group.verbs == ["get", "put"]

    def test_builder_decorator(self) -> None:
        router = Router()
        builder = router.route("/things")

        @builder.delete()
        def remove(request: object) -> None:
            return None

        assert builder.group.children[0].handler is remove


class TestUse:
    def test_middleware_defaults_to_root(self) -> None:
        router = Router()
        router.use(_handler)

        [node] = router.children
        assert isinstance(node, Middleware)
        assert node.path == "/"
        assert node.name == "_handler"
        assert node.matcher.source == r"^\/?(?=\/|$)"

    def test_mount_creates_container_ref(self) -> None:
        parent, child = Router(), Router()
        parent.use("/child/", child)

        [node] = parent.children
        assert isinstance(node, ContainerRef)
        assert node.target is child
        assert node.kind is NodeKind.CONTAINER_REF

    def test_mixed_targets(self) -> None:
        parent, child = Router(), Router()
        parent.use("/mixed/", _handler, child)
        assert [type(n) for n in parent.children] == [Middleware, ContainerRef]

    def test_self_mount(self) -> None:
        router = Router()
        router.use("/more/", router)
        assert router.children[0].target is router

    def test_use_requires_target(self) -> None:
        with pytest.raises(RegistrationError, match="requires at least one"):
            Router().use("/nothing/")

    def test_use_rejects_non_callable(self) -> None:
        with pytest.raises(RegistrationError, match="expects callables or routers"):
            Router().use("/", 42)


class TestDocAttribution:
    def test_simple_verb_documents_first_method(self) -> None:
        registry = Registry()
        router = registry.router("r")
        router.get("/", _handler, _other, doc="first")

        group = router.children[0]
        assert registry.lookup_doc(group) is None
        assert registry.lookup_doc(group.children[0]) == "first"
        assert registry.lookup_doc(group.children[1]) is None

    def test_back_to_back_registrations_do_not_share_docs(self) -> None:
        registry = Registry()
        router = registry.router("r")
        router.get("/a", _handler, doc="only a")
        router.get("/b", _handler)

        a, b = router.children
        assert registry.lookup_doc(a.children[0]) == "only a"
        assert registry.lookup_doc(b.children[0]) is None

    def test_route_documents_group(self) -> None:
        registry = Registry()
        router = registry.router("r")
        router.route("/x", doc="group doc").get(_handler, doc="get doc")

        group = router.children[0]
        assert registry.lookup_doc(group) == "group doc"
        assert registry.lookup_doc(group.children[0]) == "get doc"

    def test_use_documents_first_node(self) -> None:
        registry = Registry()
        router = registry.router("r")
        router.use("/", _handler, _other, doc="mw doc")

        first, second = router.children
        assert registry.lookup_doc(first) == "mw doc"
        assert registry.lookup_doc(second) is None

    def test_unregistered_router_rejects_docs(self) -> None:
        with pytest.raises(RegistrationError, match="not registered"):
            Router().get("/", _handler, doc="nowhere to go")

    def test_unregistered_router_accepts_undocumented(self) -> None:
        router = Router()
        router.get("/", _handler)
        assert isinstance(router.children[0].children[0], Method)


class TestApp:
    def test_app_flag(self) -> None:
        assert App().is_app is True
        assert Router().is_app is False

    def test_app_is_router(self) -> None:
        app = App()
        app.get("/", _handler)
        assert len(app.children) == 1

    def test_containers_hash_by_identity(self) -> None:
        a, b = Router(), Router()
        assert a != b
        assert len({a, b}) == 2
