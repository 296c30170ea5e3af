"""Tests for routedoc.render: text output and route tables."""

import io

from routedoc.config import ReportConfig
from routedoc.registry import Registry
from routedoc.render import dump, format_path, render_text, route_table
from routedoc.routing.router import App


def _handler(request: object) -> str:
    return "ok"


def _simple_report():
    registry = Registry()
    app = registry.app(doc="tiny app")
    users = registry.router("users", doc="user routes")
    users.get("/:id", _handler, doc="Show one user")
    users.delete("/:id", _handler)
    app.get("/", _handler, doc="root")
    app.use("/users/", users, doc="mount users")
    return registry.collate(app)


class TestRenderText:
    def test_sections(self) -> None:
        text = render_text(_simple_report())
        assert "APP:\t<app>" in text
        assert "ROUTER:\tusers" in text
        assert "INDEX:\t0" in text
        assert text.index("APP:") < text.index("ROUTER:")

    def test_buckets_and_items(self) -> None:
        text = render_text(_simple_report())
        assert "\tPATH:\t|" in text
        assert "\tPATH:\t|:id|" in text
        assert "\t\tTYPE:\tmethod" in text
        assert "\t\tMETHOD:\tget" in text
        assert "\t\tDOC:\troot" in text
        assert "\t\tDOC:\tShow one user" in text

    def test_container_ref_line(self) -> None:
        text = render_text(_simple_report())
        assert "\t\tTYPE:\tcontainer-ref" in text
        assert "\t\tROUTER:\tusers #0" in text

    def test_app_has_no_index_line(self) -> None:
        report = _simple_report()
        text = render_text(report)
        app_block = text.split("ROUTER:\tusers\n", 1)[0]
        assert "INDEX:" not in app_block

    def test_multiline_doc(self) -> None:
        registry = Registry()
        app = registry.app()
        app.get("/", _handler, doc="Says hello.\n@returns 'hello'")

        text = render_text(registry.collate(app))
        assert "\t\tDOC:\tSays hello." in text
        assert "@returns 'hello'" in text

    def test_handlers_hidden_by_default(self) -> None:
        assert "HANDLER:" not in render_text(_simple_report())

    def test_show_handlers(self) -> None:
        config = ReportConfig(show_handlers=True)
        text = render_text(_simple_report(), config=config)
        assert "HANDLER:\t_handler" in text

    def test_hide_undocumented_buckets(self) -> None:
        registry = Registry()
        app = registry.app()
        app.get("/documented", _handler, doc="here")
        app.get("/bare", _handler)

        config = ReportConfig(show_empty_buckets=False)
        text = render_text(registry.collate(app, config=config), config=config)
        assert "PATH:\t|documented|" in text
        assert "PATH:\t|bare|" not in text

    def test_custom_indent(self) -> None:
        config = ReportConfig(indent="  ")
        text = render_text(_simple_report(), config=config)
        assert "APP:  <app>" in text
        assert "    TYPE:  method" in text

    def test_sample_app(self, sample_app: App) -> None:
        text = render_text(sample_app.registry.collate(sample_app))
        for name in ("basic", "routed", "recursive", "param", "all", "paramInUse", "chainGet"):
            assert f"ROUTER:\t{name}" in text
        assert "PATH:\t|parameterized|:fizz|:buzz|const|:quux|" in text
        assert "PATH:\t|/regex/(.*)|" in text
        assert "METHOD:\tm-search" in text


class TestRouteTable:
    def test_rows(self) -> None:
        rows = route_table(_simple_report())
        assert rows == [
            ("GET", "/", "<app>"),
            ("GET", "/:id", "users"),
            ("DELETE", "/:id", "users"),
        ]

    def test_regex_path(self, sample_app: App) -> None:
        rows = route_table(sample_app.registry.collate(sample_app))
        assert ("GET", "/regex/(.*)", "basic") in rows
        assert ("ALL", "/*", "all") in rows

    def test_format_root(self) -> None:
        report = _simple_report()
        [root] = [item for item in report.app.buckets["|"] if item.verb == "get"]
        assert format_path(root) == "/"


class TestDump:
    def test_dump_collated(self) -> None:
        out = io.StringIO()
        dump(_simple_report(), file=out)
        assert "ROUTER:\tusers" in out.getvalue()

    def test_dump_collates_walk_report(self) -> None:
        registry = Registry()
        app = registry.app()
        app.get("/hello", _handler, doc="hi")

        out = io.StringIO()
        dump(registry.walk(app), file=out)
        assert "PATH:\t|hello|" in out.getvalue()

    def test_dump_defaults_to_stdout(self, capsys) -> None:
        dump(_simple_report())
        assert "APP:\t<app>" in capsys.readouterr().out
