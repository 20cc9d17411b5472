"""Navbar and footer context shared by documentation pages and the homepage."""

from __future__ import annotations

import datetime as dt
import typing as typ

from sfdevops_pages.links import FOOTER_SOURCE
from sfdevops_pages.models import LinkStatus

from .link_rewriter import relative_href

if typ.TYPE_CHECKING:
    from sfdevops_pages.config import FooterConfig, FooterLink
    from sfdevops_pages.links import LinkIndex
    from sfdevops_pages.models import SiteGraph


def navbar_items(
    graph: SiteGraph, from_dir: str, current: str | None = None
) -> list[dict[str, typ.Any]]:
    """Return one navbar entry per sidebar, linking its first document.

    A folder-generated tree yields a single entry labelled with the root
    label. ``current`` marks the entry whose sidebar holds that slug.
    """
    route_prefix = graph.route_base.strip("/")
    active = graph.sidebar_for(current) if current is not None else None
    items: list[dict[str, typ.Any]] = []
    for tree in graph.named_sidebars or [graph.sidebar]:
        documents = tree.documents()
        if not documents:
            continue
        items.append(
            {
                "label": tree.label,
                "href": relative_href(route_prefix, from_dir, documents[0].slug),
                "active": tree is active,
            }
        )
    return items


def _footer_entry(
    link: FooterLink, index: LinkIndex, from_dir: str
) -> dict[str, typ.Any]:
    entry = {
        "label": link.label,
        "href": link.target,
        "external": link.href is not None,
        "broken": False,
    }
    classified = index.classify(FOOTER_SOURCE, link.target)
    if classified is None or classified.status is LinkStatus.EXTERNAL:
        return entry
    if classified.slug is None:
        entry["broken"] = True
        return entry
    route_prefix = index.route_base.strip("/")
    entry["href"] = relative_href(
        route_prefix, from_dir, classified.slug, classified.anchor
    )
    return entry


def footer_context(
    footer: FooterConfig,
    index: LinkIndex,
    from_dir: str,
    *,
    site_title: str,
    generated_at: dt.datetime,
) -> dict[str, typ.Any]:
    """Return footer columns with routes rewritten to built pages.

    Unresolved routes keep their target and are flagged ``broken`` so the
    template can mark them like broken body links.
    """
    return {
        "columns": [
            {
                "title": column.title,
                "items": [
                    _footer_entry(link, index, from_dir) for link in column.items
                ],
            }
            for column in footer.links
        ],
        "copyright": footer.copyright
        or f"Copyright © {generated_at.year} {site_title}.",
        "generated_at": generated_at,
    }


__all__ = ["footer_context", "navbar_items"]
