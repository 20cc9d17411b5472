"""Orchestrate loading, navigation, linking, and features into a ``SiteGraph``.

:class:`SiteAssembler` walks an explicit state machine::

    EMPTY -> LOADING -> LINKING -> READY
                 \\          \\
                  +----------+--> FAILED

``FAILED`` is reached only when the content root cannot be read; broken links
and malformed documents end up in the diagnostics report of a ``READY``
graph. Nothing is published before ``READY`` and no module-level state is
kept, so several builds can run in one process.

Example
-------
>>> from pathlib import Path
>>> graph = build(Path("docs"))  # doctest: +SKIP
>>> graph.diagnostics.has_unresolved_links  # doctest: +SKIP
False
"""

from __future__ import annotations

import enum
import logging
import typing as typ
from pathlib import Path

from ._constants import DEFAULT_ROUTE_BASE
from .content.loader import load_documents
from .diagnostics import ContentRootUnreadable, DiagnosticsReport
from .features import FeatureBlockRenderer
from .links import resolve_links
from .models import SiteGraph
from .sidebar import build_named_sidebars, build_sidebar

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .diagnostics import Diagnostic
    from .models import FeatureBlock, SidebarDefinition

logger = logging.getLogger(__name__)


class AssemblyState(enum.StrEnum):
    """Lifecycle of a single assembly pass."""

    EMPTY = "empty"
    LOADING = "loading"
    LINKING = "linking"
    READY = "ready"
    FAILED = "failed"


class SiteAssembler:
    """Build one :class:`SiteGraph` from a content root."""

    def __init__(
        self,
        content_root: Path,
        *,
        features: cabc.Sequence[FeatureBlock] = (),
        route_base: str = DEFAULT_ROUTE_BASE,
        root_label: str = "Docs",
        workers: int = 1,
        feature_renderer: FeatureBlockRenderer | None = None,
        sidebars: cabc.Sequence[SidebarDefinition] = (),
        footer_links: cabc.Sequence[str] = (),
    ) -> None:
        """Initialize the assembler.

        Parameters
        ----------
        content_root : Path
            Directory of Markdown sources, treated as read-only.
        features : Sequence[FeatureBlock], optional
            Homepage highlights rendered into the graph in the given order.
        route_base : str, optional
            URL prefix that internal links use, ``/docs`` by default.
        root_label : str, optional
            Label of the sidebar root node.
        workers : int, optional
            Parser threads used while loading.
        feature_renderer : FeatureBlockRenderer, optional
            Renderer override, mainly for custom templates.
        sidebars : Sequence[SidebarDefinition], optional
            Named, hand-ordered sidebars. When empty the sidebar is generated
            from the folder structure.
        footer_links : Sequence[str], optional
            Footer targets checked against the document set like body links.
        """
        self.content_root = Path(content_root)
        self.features = tuple(features)
        self.route_base = route_base
        self.root_label = root_label
        self.workers = workers
        self.feature_renderer = feature_renderer
        self.sidebars = tuple(sidebars)
        self.footer_links = tuple(footer_links)
        self.state = AssemblyState.EMPTY
        self.graph: SiteGraph | None = None

    def run(self) -> SiteGraph:
        """Run the full pass and return the ready graph.

        Returns
        -------
        SiteGraph
            Documents sorted by slug, the sidebar tree, cross links, rendered
            feature fragments, and the merged diagnostics report.

        Raises
        ------
        ContentRootUnreadable
            If the content root is missing or unreadable; ``state`` becomes
            ``FAILED`` first.
        RuntimeError
            If the assembler has already run.
        """
        if self.state is not AssemblyState.EMPTY:
            msg = f"SiteAssembler already ran (state: {self.state})."
            raise RuntimeError(msg)

        self.state = AssemblyState.LOADING
        try:
            loaded = load_documents(self.content_root, workers=self.workers)
        except ContentRootUnreadable as exc:
            self.state = AssemblyState.FAILED
            logger.error("Site build failed: %s", exc)
            raise
        logger.info(
            "Loaded %d documents from %s", len(loaded.documents), self.content_root
        )

        self.state = AssemblyState.LINKING
        sidebar_diagnostics: list[Diagnostic] = []
        if self.sidebars:
            sidebar, sidebar_diagnostics = build_named_sidebars(
                loaded.documents, self.sidebars, root_label=self.root_label
            )
        else:
            sidebar = build_sidebar(
                loaded.documents,
                categories=loaded.categories,
                root_label=self.root_label,
            )
        links, link_diagnostics = resolve_links(
            loaded.documents,
            route_base=self.route_base,
            footer_links=self.footer_links,
        )
        renderer = self.feature_renderer or FeatureBlockRenderer()
        fragments = renderer.render(self.features)

        diagnostics = DiagnosticsReport(
            [*loaded.diagnostics, *sidebar_diagnostics, *link_diagnostics]
        )
        self.graph = SiteGraph(
            documents=tuple(sorted(loaded.documents, key=lambda doc: doc.slug)),
            sidebar=sidebar,
            links=tuple(links),
            features=tuple(fragments),
            diagnostics=diagnostics,
            route_base=self.route_base,
        )
        self.state = AssemblyState.READY
        logger.info(
            "Site graph ready: %d links, %d diagnostics",
            len(links),
            len(diagnostics),
        )
        return self.graph


def build(content_root: Path, **options: typ.Any) -> SiteGraph:
    """Build a :class:`SiteGraph` for ``content_root`` in a single pass.

    Keyword options are forwarded to :class:`SiteAssembler`.
    """
    return SiteAssembler(content_root, **options).run()


__all__ = ["AssemblyState", "SiteAssembler", "build"]
