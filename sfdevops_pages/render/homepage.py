"""Landing page rendering pipeline.

This module turns the homepage entry of the site configuration plus the
feature fragments carried by a :class:`~sfdevops_pages.models.SiteGraph` into
``<output>/index.html``. Hero CTAs and footer links pointing at ``/docs/...``
routes are rewritten to the built pages when the target document exists.

>>> from sfdevops_pages.config import SiteConfig
>>> builder = HomePageBuilder(graph, SiteConfig())  # doctest: +SKIP
>>> builder.run()  # doctest: +SKIP
PosixPath('build/index.html')
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from sfdevops_pages.config import default_homepage
from sfdevops_pages.links import LinkIndex
from sfdevops_pages.models import LinkStatus

from .link_rewriter import relative_href
from .navigation import footer_context, navbar_items

if typ.TYPE_CHECKING:
    from sfdevops_pages.config import HomepageConfig, SiteConfig
    from sfdevops_pages.models import SiteGraph


class HomePageBuilder:
    """Render the landing page from config data and rendered feature fragments."""

    def __init__(
        self,
        graph: SiteGraph,
        config: SiteConfig,
        *,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the builder and Jinja environment.

        Parameters
        ----------
        graph : SiteGraph
            Ready graph whose ``features`` are placed in order on the page.
        config : SiteConfig
            Site settings; ``config.homepage`` provides the hero and CTAs.
        templates_dir : Path, optional
            Directory containing Jinja templates. Defaults to the package
            ``templates`` directory.
        """
        self.graph = graph
        self.config = config
        self.homepage: HomepageConfig = config.homepage or default_homepage(
            config.title, config.tagline
        )
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("home_page.jinja")
        self.index = LinkIndex.from_documents(
            graph.documents, route_base=graph.route_base
        )

    def run(self) -> Path:
        """Render and write the homepage HTML, returning the output path."""
        output_path = self.config.output_dir / "index.html"
        output_path.parent.mkdir(parents=True, exist_ok=True)
        generated_at = dt.datetime.now(dt.UTC)
        context = {
            "site": self.config,
            "homepage": self.homepage,
            "ctas": [
                {"label": cta.label, "variant": cta.variant, "href": self._href(cta.href)}
                for cta in self.homepage.ctas
            ],
            "features": [
                Markup(fragment.html)  # noqa: S704 - rendered by FeatureBlockRenderer
                for fragment in self.graph.features
            ],
            "navbar": navbar_items(self.graph, "."),
            "footer": footer_context(
                self.config.footer,
                self.index,
                ".",
                site_title=self.config.title,
                generated_at=generated_at,
            ),
            "generated_at": generated_at,
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        output_path.write_text(html, encoding="utf-8")
        return output_path

    def _href(self, target: str) -> str:
        """Rewrite resolvable internal routes relative to the site root."""
        link = self.index.classify("index.md", target)
        if link is None or link.status is not LinkStatus.RESOLVED or link.slug is None:
            return target
        prefix = self.graph.route_base.strip("/")
        return relative_href(prefix, ".", link.slug, link.anchor)


__all__ = ["HomePageBuilder"]
