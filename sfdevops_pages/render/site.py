"""Write the complete static site for a ready ``SiteGraph``."""

from __future__ import annotations

import logging
import typing as typ

from sfdevops_pages._constants import SITE_GRAPH_FILENAME
from sfdevops_pages.serialization import serialize_site_graph

from .homepage import HomePageBuilder
from .pages import DocPageBuilder

if typ.TYPE_CHECKING:
    from pathlib import Path

    from sfdevops_pages.config import SiteConfig
    from sfdevops_pages.models import SiteGraph

logger = logging.getLogger(__name__)


class SiteRenderer:
    """Render documentation pages, the homepage, and the graph JSON."""

    def __init__(
        self,
        graph: SiteGraph,
        config: SiteConfig,
        *,
        templates_dir: Path | None = None,
    ) -> None:
        self.graph = graph
        self.config = config
        self.templates_dir = templates_dir

    def run(self) -> list[Path]:
        """Write every artefact and return the paths in write order.

        The homepage is written after the documentation pages, so it wins if
        a route base of ``/`` makes a root ``index`` document share its path.
        """
        written = DocPageBuilder(
            self.graph, self.config, templates_dir=self.templates_dir
        ).run()
        written.append(
            HomePageBuilder(
                self.graph, self.config, templates_dir=self.templates_dir
            ).run()
        )
        graph_path = self.config.output_dir / SITE_GRAPH_FILENAME
        graph_path.write_bytes(serialize_site_graph(self.graph))
        written.append(graph_path)
        logger.info("Wrote %d files to %s", len(written), self.config.output_dir)
        return written


__all__ = ["SiteRenderer"]
