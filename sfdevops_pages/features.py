"""Render declarative homepage feature blocks into HTML fragments.

The renderer is a pure composition boundary: the output list has exactly the
length and order of the input, and the same blocks always produce the same
fragments. The Jinja environment is created once per renderer and only read
afterwards.

Example
-------
>>> from sfdevops_pages.models import FeatureBlock
>>> fragments = render_features([FeatureBlock("Learn", "Start *here*.")])
>>> fragments[0].title
'Learn'
>>> "<em>here</em>" in fragments[0].html
True
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markdown import markdown
from markupsafe import Markup

from .models import FeatureBlock, FeatureFragment

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class FeatureBlockRenderer:
    """Turn :class:`FeatureBlock` values into :class:`FeatureFragment` values."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Initialize the renderer.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing ``feature_block.jinja``. Defaults to the
            package ``templates`` directory.
        """
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("feature_block.jinja")
        self._markdown_extensions = ["sane_lists"]

    def render(self, blocks: cabc.Iterable[FeatureBlock]) -> list[FeatureFragment]:
        """Render ``blocks`` in input order without sorting or filtering."""
        return [self.render_one(index, block) for index, block in enumerate(blocks)]

    def render_one(self, index: int, block: FeatureBlock) -> FeatureFragment:
        """Render a single block at ``index``."""
        description_html = self._render_description(block.description)
        html = self.template.render(
            index=index,
            block=block,
            description_html=Markup(description_html),  # noqa: S704 - rendered markdown
        )
        return FeatureFragment(
            index=index,
            title=block.title,
            icon=block.icon,
            html=html.strip(),
        )

    def _render_description(self, text: str) -> str:
        normalized = (text or "").strip()
        if not normalized:
            return ""
        return markdown(
            normalized,
            extensions=self._markdown_extensions,
            output_format="html",
        )


def render_features(
    blocks: cabc.Iterable[FeatureBlock], *, templates_dir: Path | None = None
) -> list[FeatureFragment]:
    """Render ``blocks`` with a fresh :class:`FeatureBlockRenderer`."""
    return FeatureBlockRenderer(templates_dir=templates_dir).render(blocks)


__all__ = ["FeatureBlockRenderer", "render_features"]
