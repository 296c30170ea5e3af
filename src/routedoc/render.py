"""Text rendering for collated reports.

Flattens a ``CollatedReport`` into plain view rows, then renders them
through a kida template. Docs are opaque, so they are rendered with
``str()``; multi-line docs are re-indented under their item.
"""

import functools
import sys
from dataclasses import dataclass
from typing import TextIO

from kida import Environment

from routedoc.collate import CollatedReport, CollatedSection, collate
from routedoc.config import ReportConfig
from routedoc.routing.nodes import NodeKind
from routedoc.walker import DocItem, WalkReport

REPORT_TEMPLATE = """\
{% for section in sections %}
{{ section.title }}
{% if section.index_line %}
{{ section.index_line }}
{% end %}

{% for bucket in section.buckets %}
{{ indent }}PATH:{{ indent }}{{ bucket.path }}

{% for row in bucket.rows %}
{% for line in row.lines %}
{{ indent }}{{ indent }}{{ line }}
{% end %}

{% end %}

{% end %}


{% end %}
"""


@dataclass(frozen=True, slots=True)
class _Bucket:
    path: str
    rows: tuple["_Row", ...]


@dataclass(frozen=True, slots=True)
class _Row:
    lines: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class _Section:
    title: str
    index_line: str
    buckets: tuple[_Bucket, ...]


@functools.cache
def _environment() -> Environment:
    return Environment(autoescape=False, trim_blocks=True, lstrip_blocks=True)


def format_path(item: DocItem) -> str:
    """Render an item's simplified path as ``/a/:b``."""
    return "/" + "/".join(str(token).strip("/") for token in item.simple_path)


def _item_lines(item: DocItem, config: ReportConfig) -> tuple[str, ...]:
    lines = [f"TYPE:{config.indent}{item.kind.value}"]
    if item.verb:
        lines.append(f"METHOD:{config.indent}{item.verb}")
    if item.kind is NodeKind.CONTAINER_REF:
        name = item.name or config.unnamed_router
        index = "" if item.index is None else f" #{item.index}"
        lines.append(f"ROUTER:{config.indent}{name}{index}")
    if config.show_handlers and item.handler is not None:
        handler = getattr(item.handler, "__name__", repr(item.handler))
        lines.append(f"HANDLER:{config.indent}{handler}")
    if item.doc is not None:
        doc_lines = str(item.doc).splitlines() or [""]
        lines.append(f"DOC:{config.indent}{doc_lines[0]}")
        lines.extend(f"{config.indent}{config.indent}{line}" for line in doc_lines[1:])
    return tuple(lines)


def _section(section: CollatedSection, title: str, config: ReportConfig) -> _Section:
    buckets = []
    for path, items in section.buckets.items():
        if not config.show_empty_buckets and all(item.doc is None for item in items):
            continue
        rows = tuple(_Row(lines=_item_lines(item, config)) for item in items)
        buckets.append(_Bucket(path=path, rows=rows))
    index_line = "" if section.index is None else f"INDEX:{config.indent}{section.index}"
    return _Section(title=title, index_line=index_line, buckets=tuple(buckets))


def render_text(report: CollatedReport, *, config: ReportConfig | None = None) -> str:
    """Render a collated report as indented plain text.

    The application comes first, then each router in index order::

        APP:    <app>

            PATH:   ||

                    TYPE:   method
                    METHOD: get
                    DOC:    Says 'hello world'.
    """
    config = config or ReportConfig()
    sections = [_section(report.app, f"APP:{config.indent}{report.app.name}", config)]
    sections.extend(
        _section(router, f"ROUTER:{config.indent}{router.name}", config)
        for router in report.routers
    )
    template = _environment().from_string(REPORT_TEMPLATE)
    return template.render({"sections": sections, "indent": config.indent})


def route_table(report: CollatedReport) -> list[tuple[str, str, str]]:
    """One ``(VERB, path, container)`` row per method item, in report order."""
    rows: list[tuple[str, str, str]] = []
    for section in (report.app, *report.routers):
        for items in section.buckets.values():
            rows.extend(
                (item.verb.upper(), format_path(item), section.name)
                for item in items
                if item.kind is NodeKind.METHOD and item.verb
            )
    return rows


def dump(
    report: CollatedReport | WalkReport,
    *,
    config: ReportConfig | None = None,
    file: TextIO | None = None,
) -> None:
    """Print a report to *file* (default: stdout), collating it first if needed."""
    if isinstance(report, WalkReport):
        report = collate(report, config=config)
    print(render_text(report, config=config), file=file or sys.stdout)
