"""Import-string resolution for CLI commands.

``routedoc dump`` and ``routedoc routes`` take a ``"module:attribute"``
string naming either an App or a zero-argument factory that builds one.
The App must come from ``Registry().app()``, since the registry holds
every doc, router name and index the report needs.
"""

import importlib
from typing import NamedTuple

from routedoc.registry import Registry
from routedoc.routing.router import App


class Target(NamedTuple):
    app: App
    registry: Registry


def _load(import_string: str) -> object:
    module_name, _, attr_name = import_string.partition(":")
    module = importlib.import_module(module_name)
    return getattr(module, attr_name or "app")


def resolve_app(import_string: str) -> App:
    """Load the App named by *import_string*.

    ``"myapp"`` is shorthand for ``"myapp:app"``. A callable that is not
    itself an App is treated as a factory and called once.

    Raises:
        ModuleNotFoundError: The module part does not import.
        AttributeError: The module has no such attribute.
        TypeError: The factory failed, or the result is not an App.

    """
    obj = _load(import_string)

    if not isinstance(obj, App) and callable(obj):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, App):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a routedoc.App instance"
        raise TypeError(msg)
    return obj


def resolve_registry(app: App) -> Registry:
    """Return the Registry that documents *app*.

    Raises ``TypeError`` for an App created without a Registry.
    """
    if app.registry is None:
        msg = "App is not bound to a Registry; create it with Registry().app()"
        raise TypeError(msg)
    return app.registry


def resolve_target(import_string: str) -> Target:
    """Resolve an import string to its App and the App's Registry."""
    app = resolve_app(import_string)
    return Target(app=app, registry=resolve_registry(app))
