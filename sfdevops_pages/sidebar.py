"""Assemble the sidebar navigation tree from flat document metadata.

The tree mirrors the folder structure of the content root. Every sibling list
is ordered by the explicit comparator ``(position, label, key)`` so the result
is identical for any enumeration order of the input documents:

* a document's position is its ``sidebar_position``;
* a folder's position is the minimum position among everything it contains,
  unless a ``_category_.yml`` declares one; folders without any explicit
  position fall back to ``MAX_POSITION`` and sort last;
* ties break on the case-folded label, then on the document path or folder
  path, which is unique.

Named sidebars (:func:`build_named_sidebars`) replace the folder tree when the
site configuration declares them: their items keep the declared order and
document ids that match nothing are reported, not raised.

Example
-------
>>> from sfdevops_pages.models import Document
>>> docs = [
...     Document("b.md", "b", "Beta", None, 2, ""),
...     Document("a.md", "a", "Alpha", None, 1, ""),
... ]
>>> [node.label for node in build_sidebar(docs).children]
['Alpha', 'Beta']
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from ._constants import MAX_POSITION
from .content.loader import titleize
from .diagnostics import Diagnostic, IssueKind
from .models import Document, NodeKind, SidebarCategory, SidebarNode

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .content.loader import CategoryMeta
    from .models import SidebarDefinition

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class _Folder:
    """Mutable scratch structure used while grouping documents by folder."""

    path: str
    documents: list[Document] = dc.field(default_factory=list)
    folders: dict[str, _Folder] = dc.field(default_factory=dict)
    index: Document | None = None

    def child(self, name: str) -> _Folder:
        if name not in self.folders:
            path = f"{self.path}/{name}" if self.path else name
            self.folders[name] = _Folder(path)
        return self.folders[name]


def sort_key(node: SidebarNode) -> tuple[int, str, str]:
    """Return the deterministic ordering key for sibling nodes."""
    return (node.position, node.label.casefold(), node.key)


def folder_label(path: str) -> str:
    """Return a readable label for a folder path such as ``interview-prep``."""
    return titleize(path.rsplit("/", 1)[-1])


def _group(documents: cabc.Iterable[Document]) -> _Folder:
    root = _Folder("")
    for document in documents:
        folder = root
        for segment in document.folder_segments:
            folder = folder.child(segment)
        if document.slug == folder.path:
            if folder.index is None or folder.index.path < document.path:
                folder.index = document
        else:
            folder.documents.append(document)
    return root


def _doc_node(document: Document) -> SidebarNode:
    return SidebarNode(
        label=document.label,
        position=document.sidebar_position,
        kind=NodeKind.DOC,
        key=document.path,
        document=document,
    )


def _folder_node(
    folder: _Folder, categories: typ.Mapping[str, CategoryMeta]
) -> SidebarNode:
    children = [_doc_node(document) for document in folder.documents]
    children.extend(_folder_node(sub, categories) for sub in folder.folders.values())
    children.sort(key=sort_key)

    candidates = [child.position for child in children]
    if folder.index is not None:
        candidates.append(folder.index.sidebar_position)
    position = min(candidates, default=MAX_POSITION)
    label = folder_label(folder.path)

    meta = categories.get(folder.path)
    if meta is not None:
        if meta.position is not None:
            position = meta.position
        if meta.label:
            label = meta.label

    return SidebarNode(
        label=label,
        position=position,
        kind=NodeKind.CATEGORY,
        key=f"{folder.path}/",
        document=folder.index,
        children=tuple(children),
    )


def build_sidebar(
    documents: cabc.Iterable[Document],
    *,
    categories: typ.Mapping[str, CategoryMeta] | None = None,
    root_label: str = "Docs",
) -> SidebarNode:
    """Build the navigation tree for ``documents``.

    Parameters
    ----------
    documents : Iterable[Document]
        Loaded documents in any order.
    categories : Mapping[str, CategoryMeta], optional
        Folder metadata keyed by folder path; overrides derived labels and
        positions.
    root_label : str, optional
        Label of the synthetic root node.

    Returns
    -------
    SidebarNode
        Root node whose ``document`` is the root ``index`` document, if any.
        A folder that holds an ``index`` document references it as its
        category link instead of listing it as a child.
    """
    root = _group(documents)
    categories = categories or {}
    children = [_doc_node(document) for document in root.documents]
    children.extend(_folder_node(sub, categories) for sub in root.folders.values())
    children.sort(key=sort_key)
    return SidebarNode(
        label=root_label,
        position=0,
        kind=NodeKind.ROOT,
        key="",
        document=root.index,
        children=tuple(children),
    )


@dc.dataclass(slots=True)
class _ItemResolver:
    """Turn the items of one named sidebar into nodes, recording misses."""

    sidebar_id: str
    by_id: dict[str, Document]
    by_slug: dict[str, Document]
    diagnostics: list[Diagnostic] = dc.field(default_factory=list)

    def lookup(self, doc_id: str) -> Document | None:
        key = doc_id.strip().strip("/")
        document = self.by_id.get(key)
        if document is None:
            document = self.by_slug.get(key)
        if document is None:
            detail = f"sidebar item '{doc_id}' does not match any document"
            diagnostic = Diagnostic(
                f"sidebar:{self.sidebar_id}", IssueKind.UNRESOLVED_SIDEBAR_ITEM, detail
            )
            logger.warning("%s", diagnostic)
            self.diagnostics.append(diagnostic)
        return document

    def nodes(
        self, items: cabc.Sequence[str | SidebarCategory], parent_key: str
    ) -> tuple[SidebarNode, ...]:
        nodes: list[SidebarNode] = []
        for position, item in enumerate(items):
            if isinstance(item, SidebarCategory):
                key = f"{parent_key}/{position}"
                nodes.append(
                    SidebarNode(
                        label=item.label,
                        position=position,
                        kind=NodeKind.CATEGORY,
                        key=key,
                        document=self.lookup(item.link) if item.link else None,
                        children=self.nodes(item.items, key),
                    )
                )
                continue
            document = self.lookup(item)
            if document is not None:
                nodes.append(
                    SidebarNode(
                        label=document.label,
                        position=position,
                        kind=NodeKind.DOC,
                        key=document.path,
                        document=document,
                    )
                )
        return tuple(nodes)


def build_named_sidebars(
    documents: cabc.Iterable[Document],
    definitions: cabc.Sequence[SidebarDefinition],
    *,
    root_label: str = "Docs",
) -> tuple[SidebarNode, list[Diagnostic]]:
    """Build hand-ordered sidebars instead of the folder tree.

    Parameters
    ----------
    documents : Iterable[Document]
        Loaded documents in any order.
    definitions : Sequence[SidebarDefinition]
        Named sidebars in navbar order. Items keep their declared order.
    root_label : str, optional
        Label of the synthetic root node.

    Returns
    -------
    tuple[SidebarNode, list[Diagnostic]]
        A root whose children are one ``SIDEBAR`` node per definition, and
        one ``UNRESOLVED_SIDEBAR_ITEM`` diagnostic per document id that names
        no document. Such items are left out of the tree.
    """
    ordered = sorted(documents, key=lambda doc: doc.path)
    by_id = {doc.path.rsplit(".", 1)[0]: doc for doc in ordered}
    by_slug = {doc.slug: doc for doc in ordered}
    diagnostics: list[Diagnostic] = []
    sidebars: list[SidebarNode] = []
    for position, definition in enumerate(definitions):
        resolver = _ItemResolver(definition.id, by_id, by_slug)
        sidebars.append(
            SidebarNode(
                label=definition.label,
                position=position,
                kind=NodeKind.SIDEBAR,
                key=definition.id,
                children=resolver.nodes(definition.items, definition.id),
            )
        )
        diagnostics.extend(resolver.diagnostics)
    root = SidebarNode(
        label=root_label,
        position=0,
        kind=NodeKind.ROOT,
        key="",
        children=tuple(sidebars),
    )
    return root, diagnostics


__all__ = ["build_named_sidebars", "build_sidebar", "folder_label", "sort_key"]
