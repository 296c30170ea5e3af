"""Sample application covering every node kind, shared mounts and a self-mount."""

import re

from routedoc.registry import Registry
from routedoc.routing.router import App


def ok(request):
    return "ok"


def passthrough(request, next_):
    return next_()


def this_is_a_use_route(request, next_):
    return next_()


def create_app() -> App:
    registry = Registry()
    app = registry.app(doc="what a superb app")

    basic = registry.router("basic", doc="just your plain ol' basic router")
    routed = registry.router("routed")
    recursive = registry.router("recursive")
    param = registry.router("param")
    all_router = registry.router("all")
    param_in_use = registry.router("paramInUse")
    chain = registry.router("chainGet")

    app.use("/", this_is_a_use_route, doc="This is a no-op middleware")
    app.get("/", passthrough, ok, doc="Says 'hello world'.\n@returns 'hello world'")
    app.post("/", ok, doc="Posts something?\n@param {query} what")
    app.propfind("/", ok, doc="Not sure why you'd use propfind but here you go")
    app.m_search("/", ok, doc='"m-search"? Seriously?')

    basic.get("/", ok, doc="@returns 'basic'")
    basic.get(
        "/parameterized/:fizz/:buzz/const/:quux",
        ok,
        doc="Spits your params back out at you\n@param fizz\n@param buzz\n@param quux",
    )
    basic.get(re.compile(r"/regex/(.*)"), ok, doc="Captures a regex match and returns it.")

    (
        routed.route("/base/route/:param/", doc="route doc cool")
        .get(ok, doc="get it")
        .put(ok, doc="put it")
    )

    recursive.get("/", ok)
    recursive.use("/more/", recursive)

    param.get("/:thing/", ok)
    all_router.all("*", ok)
    param_in_use.get("/wow/", ok)
    chain.get("/", passthrough, passthrough, ok)

    app.use("/basic/", basic)
    app.use("/routed/", routed)
    app.use("/recursive/", recursive)
    app.use("/param/", param)
    app.use("/all/", all_router)
    app.use("/param-in-use/:param/", param_in_use)
    app.use("/chain/", chain)

    return app


app = create_app()
