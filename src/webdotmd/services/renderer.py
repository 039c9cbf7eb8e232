"""Content tree -> HTML rendering, with a heading outline built on the way.

Terminal elements render directly (text literally, breaks as ``<br />``);
links, code, lists and headers go through element-level templates. Defaults
live in ``DEFAULT_ELEMENT_TEMPLATES``; a loaded template whose path sits in an
``elements/`` directory (e.g. ``elements/link.html``) replaces the default of
the same stem.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Iterable, Mapping

from loguru import logger

from ..document import Break, Code, Document, Element, Header, Link, ListBlock, ListKind, Text
from ..errors import TemplateNotFoundError
from ..template import AutofillFunc, Template

BREAK_MARKUP = "<br />"
ELEMENT_TEMPLATE_DIR = "elements"

DEFAULT_ELEMENT_TEMPLATES: dict[str, str] = {
    "header": '<h{{ $level$ }} id="{{ $anchor$ }}">{{ $content$ }}</h{{ $level$ }}>',
    "link": '<a href="{{ $target$ }}">{{ $text$ }}</a>',
    "code": '<pre><code class="language-{{ $language$ }}">{{ $body$ }}</code></pre>',
    "list": "<{{ $tag$ }}{{ $type_attr$ }}>{{ $items$ }}</{{ $tag$ }}>",
    "list_item": "<li>{{ $content$ }}</li>",
    "outline": '<ul class="outline">{{ $entries$ }}</ul>',
    "outline_entry": '<li class="outline-h{{ $level$ }}"><a href="{{ $link$ }}">{{ $text$ }}</a></li>',
}

_DEFAULTS = {name: Template.from_text(raw) for name, raw in DEFAULT_ELEMENT_TEMPLATES.items()}

_TAG_RE = re.compile(r"<[^>]*>")
_NON_WORD_RE = re.compile(r"[\W_]+")


@dataclass(frozen=True)
class OutlineEntry:
    text: str
    link: str
    level: int


def strip_markup(rendered: str) -> str:
    """Drop tags and collapse whitespace."""
    return " ".join(_TAG_RE.sub("", rendered).split())


def slugify(text: str) -> str:
    return _NON_WORD_RE.sub("-", text.lower()).strip("-") or "section"


class _Outline:
    """Heading entries collected during one render pass; anchors are unique per page."""

    def __init__(self) -> None:
        self.entries: list[OutlineEntry] = []
        self._used: set[str] = set()

    def _unique(self, slug: str) -> str:
        anchor, idx = slug, 2
        while anchor in self._used:
            anchor = f"{slug}-{idx}"
            idx += 1
        self._used.add(anchor)
        return anchor

    def add(self, text: str, level: int) -> str:
        anchor = self._unique(slugify(text))
        self.entries.append(OutlineEntry(text=text, link=f"#{anchor}", level=level))
        return anchor


def element_templates_from(templates: Mapping[str, Template]) -> dict[str, Template]:
    merged = dict(_DEFAULTS)
    for name, template in templates.items():
        path = PurePosixPath(name)
        if path.parent.name == ELEMENT_TEMPLATE_DIR and path.stem in merged:
            merged[path.stem] = template
    return merged


class PageRenderer:
    """Renders documents against a shared, read-only template set."""

    def __init__(
        self,
        templates: Mapping[str, Template],
        autofill: Mapping[str, AutofillFunc] | None = None,
    ) -> None:
        self.templates = templates
        self.autofill = autofill
        self.element_templates = element_templates_from(templates)

    def _fill(self, kind: str, values: dict[str, str]) -> str:
        return self.element_templates[kind].fill(values, self.autofill)

    def render(self, document: Document, values: Mapping[str, str] | None = None) -> str:
        """Render a document into its page template.

        The page template receives ``values``, then every metadata pair, then
        ``content`` and ``outline``; each layer wins over the one before it.
        """
        name = document.template_name
        template = self.templates.get(name)
        if template is None:
            raise TemplateNotFoundError(name)
        body, outline = self.render_body(document.elements)
        page_values = dict(values or {})
        page_values.update(document.metadata)
        page_values["content"] = body
        page_values["outline"] = self.render_outline(outline)
        logger.debug(f"Rendering page with template {name}: {len(outline)} headers")
        return template.fill(page_values, self.autofill)

    def render_body(self, elements: Iterable[Element]) -> tuple[str, list[OutlineEntry]]:
        outline = _Outline()
        body = self._render_elements(elements, outline)
        return body, outline.entries

    def render_outline(self, entries: list[OutlineEntry]) -> str:
        if not entries:
            return ""
        rendered = "".join(
            self._fill("outline_entry", {"text": e.text, "link": e.link, "level": str(e.level)})
            for e in entries
        )
        return self._fill("outline", {"entries": rendered})

    def _render_elements(self, elements: Iterable[Element], outline: _Outline) -> str:
        return "".join(self._render_element(el, outline) for el in elements)

    def _render_element(self, el: Element, outline: _Outline) -> str:
        if isinstance(el, Text):
            return el.text
        if isinstance(el, Break):
            return BREAK_MARKUP
        if isinstance(el, Header):
            content = self._render_elements(el.children, outline)
            anchor = outline.add(strip_markup(content), el.level)
            return self._fill("header", {"level": str(el.level), "anchor": anchor, "content": content})
        if isinstance(el, Link):
            return self._fill("link", {"text": el.text, "target": html.escape(el.target)})
        if isinstance(el, Code):
            return self._fill(
                "code",
                {"language": html.escape(el.language), "body": html.escape(el.body, quote=False)},
            )
        if isinstance(el, ListBlock):
            items = "".join(
                self._fill("list_item", {"content": self._render_elements(item, outline)})
                for item in el.items
            )
            ordered = el.kind == ListKind.ORDERED
            return self._fill(
                "list",
                {
                    "tag": "ol" if ordered else "ul",
                    "type_attr": ' type="a"' if el.marker == "a)" else "",
                    "marker": el.marker,
                    "items": items,
                },
            )
        raise TypeError(f"Unknown element: {el!r}")


def render_document(
    document: Document,
    templates: Mapping[str, Template],
    autofill: Mapping[str, AutofillFunc] | None = None,
) -> str:
    return PageRenderer(templates, autofill).render(document)
