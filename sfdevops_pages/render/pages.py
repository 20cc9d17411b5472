"""Render every document of a ``SiteGraph`` into a themed HTML page.

Each document is written to ``<output>/<route>/<slug>/index.html`` with the
sidebar that contains it (current page highlighted), previous/next pagination
within that sidebar, the navbar and footer, and its Markdown body rendered by
:class:`HtmlContentRenderer`.
Cross-document links inside the body point at the built pages.
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from sfdevops_pages.content.loader import first_heading
from sfdevops_pages.links import LinkIndex
from sfdevops_pages.models import NodeKind

from .link_rewriter import CrossLinkExtension, page_dir, relative_href
from .navigation import footer_context, navbar_items
from .renderer import HtmlContentRenderer

if typ.TYPE_CHECKING:
    from sfdevops_pages.config import SiteConfig
    from sfdevops_pages.models import Document, SidebarNode, SiteGraph


class DocPageBuilder:
    """Write one HTML file per document in the graph."""

    def __init__(
        self,
        graph: SiteGraph,
        config: SiteConfig,
        *,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the builder with the graph, config, and Jinja environment.

        Parameters
        ----------
        graph : SiteGraph
            Ready graph produced by the assembler.
        config : SiteConfig
            Site settings providing the output directory and Pygments style.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package
            templates.
        """
        self.graph = graph
        self.config = config
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.renderer = HtmlContentRenderer(config.pygments_style)
        self.index = LinkIndex.from_documents(
            graph.documents, route_base=graph.route_base
        )
        self.route_prefix = graph.route_base.strip("/")
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("doc_page.jinja")

    def run(self) -> list[Path]:
        """Render every document and return the written paths in sidebar order."""
        generated_at = dt.datetime.now(dt.UTC)
        written: list[Path] = []
        for document in self._documents_in_order():
            written.append(self._write_page(document, generated_at))
        return written

    def output_path(self, document: Document) -> Path:
        """Return the file the page for ``document`` is written to."""
        folder = page_dir(self.route_prefix, document.slug)
        return self.config.output_dir / folder / "index.html"

    def _documents_in_order(self) -> list[Document]:
        ordered = self.graph.ordered_documents()
        seen = {document.slug for document in ordered}
        ordered.extend(doc for doc in self.graph.documents if doc.slug not in seen)
        return ordered

    def _write_page(self, document: Document, generated_at: dt.datetime) -> Path:
        from_dir = page_dir(self.route_prefix, document.slug)
        body_html = self.renderer.markdown(
            document.body,
            link_extension=CrossLinkExtension(self.index, document.path, from_dir),
            mdx=document.path.endswith(".mdx"),
        )
        previous, following = self.graph.neighbours(document.slug)
        tree = self.graph.sidebar_for(document.slug)
        context = {
            "site": self.config,
            "document": document,
            "show_title": first_heading(document.body) is None,
            "body_html": body_html,
            "sidebar_label": tree.label if tree is not None else None,
            "nav_items": (
                self._nav_items(tree, document.slug, from_dir)
                if tree is not None
                else []
            ),
            "navbar": navbar_items(self.graph, from_dir, document.slug),
            "footer": footer_context(
                self.config.footer,
                self.index,
                from_dir,
                site_title=self.config.title,
                generated_at=generated_at,
            ),
            "previous": self._pager(previous, from_dir),
            "next": self._pager(following, from_dir),
            "home_href": self._home_href(from_dir),
            "pygments_css": self.renderer.stylesheet,
            "generated_at": generated_at,
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        output_path = self.output_path(document)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
        return output_path

    def _nav_items(
        self, node: SidebarNode, current: str, from_dir: str
    ) -> list[dict[str, typ.Any]]:
        """Flatten sidebar children into template-friendly dictionaries."""
        items: list[dict[str, typ.Any]] = []
        for child in node.children:
            document = child.document
            items.append(
                {
                    "label": child.label,
                    "kind": str(child.kind),
                    "href": (
                        relative_href(self.route_prefix, from_dir, document.slug)
                        if document is not None
                        else None
                    ),
                    "active": document is not None and document.slug == current,
                    "children": (
                        self._nav_items(child, current, from_dir)
                        if child.kind is NodeKind.CATEGORY
                        else []
                    ),
                }
            )
        return items

    def _pager(self, document: Document | None, from_dir: str) -> dict[str, str] | None:
        if document is None:
            return None
        return {
            "label": document.label,
            "href": relative_href(self.route_prefix, from_dir, document.slug),
        }

    @staticmethod
    def _home_href(from_dir: str) -> str:
        depth = 0 if from_dir == "." else len(from_dir.split("/"))
        return "../" * depth + "index.html"


__all__ = ["DocPageBuilder"]
