"""Routedoc: documentation reports for routing trees.

Walks an application's routing tree, sub-routers included (even when
mounted at several paths or inside themselves), and reports every
documented route under a readable path template.

Basic usage::

    from routedoc import Registry

    registry = Registry()
    app = registry.app(doc="what a superb app")
    users = registry.router("users")

    users.get("/:id", show_user, doc="Show one user")
    app.use("/users/", users, doc="User management")

    registry.collate(app)

Printing a report (``routedoc dump myapp:app`` does the same)::

    from routedoc import dump
    dump(registry.collate(app))
"""

__version__ = "0.1.0-dev"
__all__ = [
    "App",
    "CollatedReport",
    "DocItem",
    "Matcher",
    "NodeKind",
    "RegistrationError",
    "Registry",
    "ReportConfig",
    "RoutedocError",
    "Router",
    "StructuralError",
    "WalkReport",
    "compile_path",
    "decode",
    "dump",
    "parse_doc",
    "render_text",
    "walk",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import routedoc`` fast and defers the kida import until a
    report is actually rendered.
    """
    if name == "Registry":
        from routedoc.registry import Registry

        return Registry

    if name == "ReportConfig":
        from routedoc.config import ReportConfig

        return ReportConfig

    if name in ("App", "Router"):
        from routedoc.routing import router as _router

        return getattr(_router, name)

    if name in ("Matcher", "compile_path"):
        from routedoc.routing import pattern as _pattern

        return getattr(_pattern, name)

    if name == "NodeKind":
        from routedoc.routing.nodes import NodeKind

        return NodeKind

    if name == "decode":
        from routedoc.decoder import decode

        return decode

    if name in ("DocItem", "WalkReport", "walk"):
        from routedoc import walker as _walker

        return getattr(_walker, name)

    if name == "CollatedReport":
        from routedoc.collate import CollatedReport

        return CollatedReport

    if name in ("dump", "render_text"):
        from routedoc import render as _render

        return getattr(_render, name)

    if name == "parse_doc":
        from routedoc.annotations import parse_doc

        return parse_doc

    if name in ("RegistrationError", "RoutedocError", "StructuralError"):
        from routedoc import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
