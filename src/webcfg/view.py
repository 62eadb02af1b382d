"""
HTML rendering of a Page.

Produces a single Bulma-styled document: one box per section, each a form
posting to ``/<action>``. All dynamic text is escaped.
"""

import html
from typing import Any, List

from webcfg.page import Page
from webcfg.schema import Field, Section

BULMA_CSS = "https://cdn.jsdelivr.net/npm/bulma@1.0.4/css/bulma.min.css"
FONTAWESOME_CSS = "https://cdn.jsdelivr.net/npm/@fortawesome/fontawesome-free@7.2.0/css/all.min.css"


def _escape(s: Any) -> str:
    return html.escape("" if s is None else str(s))


def _status_class(prefix: str, status: str) -> str:
    return f" {prefix}-{_escape(status)}" if status else ""


def render_control(f: Field) -> str:
    """Render the input element of one field."""
    name = _escape(f.name)
    readonly = " readonly" if f.readonly else ""

    if f.type == "checkbox":
        checked = " checked" if f.checked else ""
        disabled = " disabled" if f.readonly else ""
        return (
            f'<label class="checkbox">'
            f'<input type="checkbox" name="{name}"{checked}{disabled}> {_escape(f.label)}'
            f'</label>'
        )

    status = _status_class("is", f.status)
    if f.type == "textarea":
        return f'<textarea class="textarea{status}" name="{name}"{readonly}>{_escape(f.value)}</textarea>'

    icon_class = " has-icons-left" if f.icon else ""
    icon = (
        f'<span class="icon is-small is-left"><i class="fas fa-{_escape(f.icon)}"></i></span>'
        if f.icon else ""
    )
    return (
        f'<div class="control{icon_class}">'
        f'<input class="input{status}" type="{_escape(f.type)}" name="{name}" '
        f'value="{_escape(f.value)}"{readonly}>{icon}'
        f'</div>'
    )


def render_field(f: Field) -> str:
    parts = ['<div class="field">']
    if f.type != "checkbox":
        parts.append(f'<label class="label">{_escape(f.label)}</label>')
    parts.append(render_control(f))
    if f.help:
        parts.append(f'<p class="help{_status_class("is", f.status)}">{_escape(f.help)}</p>')
    parts.append("</div>")
    return "".join(parts)


def render_section(section: Section) -> str:
    parts = [
        '<section class="box">',
        f'<h2 class="title is-4">{_escape(section.title)}</h2>',
    ]
    if section.subtitle:
        parts.append(f'<p class="subtitle is-6">{_escape(section.subtitle)}</p>')
    parts.append(f'<form method="post" action="/{_escape(section.action)}">')
    parts.extend(render_field(f) for f in section.fields)
    parts.append(
        '<div class="field"><div class="control">'
        '<button class="button is-primary" type="submit">Submit</button>'
        '</div></div>'
    )
    parts.append("</form></section>")
    return "\n".join(parts)


def render_index(page: Page) -> str:
    """Render the complete index document."""
    head: List[str] = [
        '<meta charset="utf-8">',
        '<meta name="viewport" content="width=device-width, initial-scale=1">',
        f"<title>{_escape(page.title)}</title>",
        f'<link rel="stylesheet" href="{BULMA_CSS}">',
        f'<link rel="stylesheet" href="{FONTAWESOME_CSS}">',
    ]
    if page.has_theme:
        head.append('<link rel="stylesheet" href="/assets/css/custom.css">')
    if page.has_assets:
        head.append('<link rel="icon" href="/assets/favicon.ico">')

    hero_icon = '<img src="/assets/icon.png" alt="" width="64" height="64">' if page.has_assets else ""
    body: List[str] = [
        '<section class="hero is-primary"><div class="hero-body">',
        hero_icon,
        f'<p class="title">{_escape(page.title)}</p>',
    ]
    if page.subtitle:
        body.append(f'<p class="subtitle">{_escape(page.subtitle)}</p>')
    body.append('</div></section><div class="container mt-5">')
    for n in page.notifications:
        body.append(f'<div class="notification{_status_class("is", n.status)}">{_escape(n.message)}</div>')
    body.extend(render_section(s) for s in page.sections)
    body.append("</div>")

    return (
        "<!DOCTYPE html>\n<html>\n<head>\n"
        + "\n".join(head)
        + "\n</head>\n<body>\n"
        + "\n".join(body)
        + "\n</body>\n</html>\n"
    )
