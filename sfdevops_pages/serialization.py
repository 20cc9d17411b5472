"""Canonical JSON encoding of a :class:`~sfdevops_pages.models.SiteGraph`.

The encoding is byte-reproducible: mapping keys are sorted by ``msgspec`` and
every sequence is already in a deterministic order inside the graph, so two
builds of unchanged content produce identical bytes.
"""

from __future__ import annotations

import typing as typ

import msgspec.json as msgspec_json

if typ.TYPE_CHECKING:
    from .models import CrossLink, Document, FeatureFragment, SidebarNode, SiteGraph


def _document(document: Document) -> dict[str, typ.Any]:
    return {
        "path": document.path,
        "slug": document.slug,
        "title": document.title,
        "description": document.description,
        "sidebarPosition": document.sidebar_position,
        "sidebarLabel": document.sidebar_label,
        "hasFrontmatter": document.has_frontmatter,
        "body": document.body,
    }


def _node(node: SidebarNode) -> dict[str, typ.Any]:
    return {
        "label": node.label,
        "kind": str(node.kind),
        "key": node.key,
        "position": node.position,
        "document": node.document.slug if node.document is not None else None,
        "children": [_node(child) for child in node.children],
    }


def _link(link: CrossLink) -> dict[str, typ.Any]:
    return {
        "source": link.source,
        "target": link.target,
        "status": str(link.status),
        "slug": link.slug,
        "anchor": link.anchor,
        "line": link.line,
    }


def _fragment(fragment: FeatureFragment) -> dict[str, typ.Any]:
    return {
        "index": fragment.index,
        "title": fragment.title,
        "icon": fragment.icon,
        "html": fragment.html,
    }


def site_graph_to_builtins(graph: SiteGraph) -> dict[str, typ.Any]:
    """Return ``graph`` as plain dictionaries and lists."""
    return {
        "routeBase": graph.route_base,
        "documents": [_document(document) for document in graph.documents],
        "sidebar": _node(graph.sidebar),
        "links": [_link(link) for link in graph.links],
        "features": [_fragment(fragment) for fragment in graph.features],
        "diagnostics": graph.diagnostics.as_list(),
    }


def serialize_site_graph(graph: SiteGraph) -> bytes:
    """Encode ``graph`` as canonical UTF-8 JSON terminated by a newline."""
    return msgspec_json.encode(site_graph_to_builtins(graph), order="sorted") + b"\n"


__all__ = ["serialize_site_graph", "site_graph_to_builtins"]
