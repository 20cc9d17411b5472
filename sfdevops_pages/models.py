"""Dataclasses describing documents, navigation, cross links, and the site graph.

Every type here is a value object: documents are immutable after load, the
sidebar is a tree of tuples, and :class:`SiteGraph` is built once per site
generation pass and never mutated. Consumers (the HTML renderer, the JSON
serializer, tests) read from these types only.
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from ._constants import MAX_POSITION

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .diagnostics import DiagnosticsReport


@dc.dataclass(frozen=True, slots=True)
class Document:
    """A single Markdown document loaded from the content root.

    Attributes
    ----------
    path : str
        POSIX path relative to the content root; the stable identity.
    slug : str
        URL path below the route base (``foundations/version-control-git``).
        The root ``index.md`` has an empty slug.
    title : str
        Frontmatter title, first level-one heading, or a title derived from
        the filename.
    description : str or None
        Optional frontmatter description.
    sidebar_position : int
        Explicit ordering weight; ``MAX_POSITION`` when not declared.
    body : str
        Markdown body with any valid frontmatter block removed.
    sidebar_label : str or None
        Optional label overriding the title in navigation.
    has_frontmatter : bool
        ``True`` when a frontmatter block was parsed successfully.
    """

    path: str
    slug: str
    title: str
    description: str | None
    sidebar_position: int
    body: str
    sidebar_label: str | None = None
    has_frontmatter: bool = False

    @property
    def label(self) -> str:
        """Return the navigation label for the document."""
        return self.sidebar_label or self.title

    @property
    def folder_segments(self) -> tuple[str, ...]:
        """Return the directory names leading to the document."""
        return tuple(self.path.split("/")[:-1])

    @property
    def has_explicit_position(self) -> bool:
        """Return ``True`` when ``sidebar_position`` came from frontmatter."""
        return self.sidebar_position != MAX_POSITION


class NodeKind(enum.StrEnum):
    """Kinds of sidebar nodes."""

    ROOT = "root"
    SIDEBAR = "sidebar"
    CATEGORY = "category"
    DOC = "doc"


@dc.dataclass(frozen=True, slots=True)
class SidebarNode:
    """Navigation tree node; siblings are ordered by ``(position, label, key)``."""

    label: str
    position: int
    kind: NodeKind
    key: str
    document: Document | None = None
    children: tuple[SidebarNode, ...] = ()

    def walk(self) -> cabc.Iterator[SidebarNode]:
        """Yield this node and its descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def documents(self) -> list[Document]:
        """Return documents referenced by the subtree in navigation order."""
        return [node.document for node in self.walk() if node.document is not None]


@dc.dataclass(frozen=True, slots=True)
class SidebarCategory:
    """Hand-ordered group of sidebar items with an optional linked document."""

    label: str
    items: tuple[str | SidebarCategory, ...] = ()
    link: str | None = None


@dc.dataclass(frozen=True, slots=True)
class SidebarDefinition:
    """Named sidebar listing document ids and categories in display order.

    Attributes
    ----------
    id : str
        Sidebar identifier, for example ``tutorialSidebar``.
    label : str
        Navbar label of the sidebar.
    items : tuple[str or SidebarCategory, ...]
        Document ids (path without suffix, such as ``interview-prep/index``,
        or a slug) and categories, in the order they are shown.
    """

    id: str
    label: str
    items: tuple[str | SidebarCategory, ...] = ()


def _unique(documents: cabc.Iterable[Document]) -> list[Document]:
    seen: set[str] = set()
    unique: list[Document] = []
    for document in documents:
        if document.slug not in seen:
            seen.add(document.slug)
            unique.append(document)
    return unique


class LinkStatus(enum.StrEnum):
    """Resolution outcome of a cross-document reference."""

    RESOLVED = "resolved"
    UNRESOLVED = "unresolved"
    EXTERNAL = "external"


@dc.dataclass(frozen=True, slots=True)
class CrossLink:
    """A reference found in a document body and its resolution outcome.

    Attributes
    ----------
    source : str
        Path of the document containing the reference.
    target : str
        Raw target exactly as written in the Markdown.
    status : LinkStatus
        ``RESOLVED``, ``UNRESOLVED`` or ``EXTERNAL``.
    slug : str or None
        Slug of the resolved document; ``None`` unless resolved.
    anchor : str or None
        Fragment following ``#``; never validated against the target.
    line : int
        1-based line in the body where the reference appears.
    """

    source: str
    target: str
    status: LinkStatus
    slug: str | None = None
    anchor: str | None = None
    line: int = 0

    @property
    def is_broken(self) -> bool:
        """Return ``True`` for internal references with no matching document."""
        return self.status is LinkStatus.UNRESOLVED


@dc.dataclass(frozen=True, slots=True)
class FeatureBlock:
    """Declarative homepage highlight."""

    title: str
    description: str
    icon: str | None = None


@dc.dataclass(frozen=True, slots=True)
class FeatureFragment:
    """Rendered homepage highlight ready to be placed in a page."""

    index: int
    title: str
    icon: str | None
    html: str


@dc.dataclass(frozen=True, slots=True)
class SiteGraph:
    """Aggregate of one build pass: documents, navigation, links, features."""

    documents: tuple[Document, ...]
    sidebar: SidebarNode
    links: tuple[CrossLink, ...]
    features: tuple[FeatureFragment, ...]
    diagnostics: DiagnosticsReport
    route_base: str = "/docs"

    def get(self, slug: str) -> Document | None:
        """Return the document published at ``slug`` or ``None``."""
        for document in self.documents:
            if document.slug == slug:
                return document
        return None

    @property
    def named_sidebars(self) -> list[SidebarNode]:
        """Return the explicitly defined sidebars, empty for a folder tree."""
        return [
            node for node in self.sidebar.children if node.kind is NodeKind.SIDEBAR
        ]

    def sidebar_for(self, slug: str) -> SidebarNode | None:
        """Return the navigation tree shown on the page at ``slug``.

        A folder-generated tree is shown everywhere. With named sidebars the
        first one listing the document is returned, or ``None`` when the
        document belongs to none of them.
        """
        named = self.named_sidebars
        if not named:
            return self.sidebar
        for node in named:
            if any(document.slug == slug for document in node.documents()):
                return node
        return None

    def ordered_documents(self) -> list[Document]:
        """Return documents in sidebar (reading) order, each listed once."""
        return _unique(self.sidebar.documents())

    def neighbours(self, slug: str) -> tuple[Document | None, Document | None]:
        """Return the previous and next documents around ``slug``.

        Pagination never leaves the sidebar that contains the document.
        """
        tree = self.sidebar_for(slug)
        if tree is None:
            return None, None
        ordered = _unique(tree.documents())
        for idx, document in enumerate(ordered):
            if document.slug == slug:
                previous = ordered[idx - 1] if idx > 0 else None
                following = ordered[idx + 1] if idx + 1 < len(ordered) else None
                return previous, following
        return None, None

    def broken_links(self) -> list[CrossLink]:
        """Return the unresolved internal links in discovery order."""
        return [link for link in self.links if link.is_broken]

    def url_for(self, slug: str, anchor: str | None = None) -> str:
        """Return the public URL path of the document at ``slug``."""
        base = self.route_base.rstrip("/")
        url = f"{base}/{slug}" if slug else f"{base}/"
        if anchor:
            url = f"{url}#{anchor}"
        return url


__all__ = [
    "CrossLink",
    "Document",
    "FeatureBlock",
    "FeatureFragment",
    "LinkStatus",
    "NodeKind",
    "SidebarCategory",
    "SidebarDefinition",
    "SidebarNode",
    "SiteGraph",
]
