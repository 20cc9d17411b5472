"""Helpers for rewriting cross-document markdown links to built page paths."""

from __future__ import annotations

import posixpath
import typing as typ

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from sfdevops_pages.models import LinkStatus

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown

    from sfdevops_pages.links import LinkIndex
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any
    LinkIndex = typ.Any


def page_dir(route_prefix: str, slug: str) -> str:
    """Return the output folder of ``slug`` relative to the site root."""
    parts = [part for part in (route_prefix, slug) if part]
    return "/".join(parts) or "."


def relative_href(
    route_prefix: str, from_dir: str, slug: str, anchor: str | None = None
) -> str:
    """Return a relative link from ``from_dir`` to the page published at ``slug``."""
    target = posixpath.join(page_dir(route_prefix, slug), "index.html")
    href = posixpath.relpath(target, start=from_dir)
    if anchor:
        href = f"{href}#{anchor}"
    return href


class CrossLinkExtension(Extension):
    """Rewrite ``/docs/...`` routes and relative ``.md`` links to built pages.

    Insert this extension into a ``markdown.Markdown`` instance to make
    internal references navigable in the static output. Resolved links point
    at the target page's ``index.html`` relative to the current page; broken
    links keep their href and gain a ``broken-link`` class so the rendering
    stays honest about them; external links are left untouched.
    """

    def __init__(self, index: LinkIndex, source: str, from_dir: str) -> None:
        self.index = index
        self.source = source
        self.from_dir = from_dir

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the cross-link treeprocessor on the Markdown instance."""
        processor = CrossLinkTreeprocessor(md, self.index, self.source, self.from_dir)
        md.treeprocessors.register(processor, "sfdevops_cross_links", 15)


class CrossLinkTreeprocessor(Treeprocessor):
    """Rewrite anchors in the parsed markdown tree to built page paths."""

    def __init__(
        self, md: Markdown, index: LinkIndex, source: str, from_dir: str
    ) -> None:
        super().__init__(md)
        self.index = index
        self.source = source
        self.from_dir = from_dir

    def run(self, root: Element) -> Element:
        """Rewrite internal anchors in the parsed markdown tree."""
        for element in root.iter("a"):
            href = element.get("href")
            if not href:
                continue
            link = self.index.classify(self.source, href)
            if link is None or link.status is LinkStatus.EXTERNAL:
                continue
            if link.status is LinkStatus.UNRESOLVED or link.slug is None:
                classes = f"{element.get('class', '')} broken-link".strip()
                element.set("class", classes)
                continue
            prefix = self.index.route_base.strip("/")
            element.set(
                "href", relative_href(prefix, self.from_dir, link.slug, link.anchor)
            )
        return root


__all__ = [
    "CrossLinkExtension",
    "CrossLinkTreeprocessor",
    "page_dir",
    "relative_href",
]
