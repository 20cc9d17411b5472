"""Render Docusaurus-flavoured Markdown bodies to HTML.

Learning-path documents are written for Docusaurus, so a body may contain
MDX ``import``/``export`` lines, ``:::tip`` style admonitions, fence metadata
such as ``title="deploy.yml"`` and ``mermaid`` diagrams. Before conversion
:class:`HtmlContentRenderer` rewrites those constructs into input that
Python-Markdown understands:

* MDX statements are dropped;
* admonitions become ``<div class="admonition admonition-<kind>">`` blocks
  whose content is still parsed as Markdown (``md_in_html``);
* heading ids written as ``{#id}`` become ``attr_list`` ids;
* fence metadata is removed and remembered, then attached to the highlighted
  block as ``data-language`` / ``data-title`` attributes;
* ``mermaid`` fences become ``<pre class="mermaid">`` so a client-side
  renderer can draw them instead of Pygments highlighting them.

>>> renderer = HtmlContentRenderer()
>>> 'data-title="ci.yml"' in renderer.markdown('```yaml title="ci.yml"\\na: 1\\n```\\n')
True
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

FENCE_OPEN_PATTERN = re.compile(
    r"^[ ]{0,3}(?P<fence>`{3,}|~{3,})[ \t]*(?P<lang>[A-Za-z0-9_+#.-]+)?(?P<meta>[^\r\n]*)$"
)
FENCE_CLOSE_PATTERN = re.compile(r"^[ ]{0,3}(?P<fence>`{3,}|~{3,})[ \t]*$")
FENCE_TITLE_PATTERN = re.compile(r"""title=(?:"([^"]*)"|'([^']*)'|(\S+))""")
ADMONITION_OPEN_PATTERN = re.compile(
    r"^:::(?P<kind>[A-Za-z]+)(?:\[(?P<title>[^\]]*)\]|[ \t]+(?P<legacy>\S[^\r\n]*))?[ \t]*$"
)
ADMONITION_CLOSE_PATTERN = re.compile(r"^:::[ \t]*$")
HEADING_ID_PATTERN = re.compile(
    r"^(?P<heading>#{1,6}[ \t]+.*?)[ \t]*\{#(?P<id>[A-Za-z0-9_-]+)\}[ \t]*$"
)
MDX_STATEMENT_PATTERN = re.compile(r"^(?:import|export)\s[^\n]*\n?", re.MULTILINE)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
DIAGRAM_LANGUAGES = frozenset({"mermaid"})


@dc.dataclass(frozen=True, slots=True)
class FenceInfo:
    """Language and optional title declared on a fenced code block."""

    language: str
    title: str | None = None

    def attributes(self) -> str:
        """Return the HTML attributes describing the block."""
        attrs = f' data-language="{escape(self.language, quote=True)}"'
        if self.title:
            attrs += f' data-title="{escape(self.title, quote=True)}"'
        return attrs


def _fence_title(meta: str) -> str | None:
    found = FENCE_TITLE_PATTERN.search(meta)
    if found is None:
        return None
    return next(group for group in found.groups() if group is not None)


def _diagram_block(kind: str, lines: cabc.Sequence[str]) -> str:
    source = escape("".join(lines).rstrip("\n"))
    return f'\n<pre class="{kind}">{source}</pre>\n\n'


def _admonition_open(found: re.Match[str]) -> str:
    kind = found.group("kind").lower()
    title = found.group("title") or found.group("legacy") or kind.capitalize()
    return (
        f'\n<div class="admonition admonition-{kind}" markdown="1">\n'
        f'<p class="admonition__title">{escape(title.strip())}</p>\n\n'
    )


def _heading_with_id(line: str, content: str) -> str:
    heading = HEADING_ID_PATTERN.match(content)
    if heading is None:
        return line
    return f"{heading.group('heading')} {{: #{heading.group('id')} }}\n"


def prepare_source(text: str) -> tuple[str, list[FenceInfo]]:
    """Rewrite Docusaurus constructs into Python-Markdown input.

    Parameters
    ----------
    text : str
        Markdown body, possibly containing admonitions and fence metadata.

    Returns
    -------
    tuple[str, list[FenceInfo]]
        The rewritten Markdown and the metadata of every highlighted fence,
        in document order. Diagram fences are not part of the list.
    """
    output: list[str] = []
    fences: list[FenceInfo] = []
    open_fence: str | None = None
    diagram: tuple[str, list[str]] | None = None
    admonition_depth = 0

    for line in text.splitlines(keepends=True):
        content = line.rstrip("\r\n")
        if open_fence is not None:
            closing = FENCE_CLOSE_PATTERN.match(content)
            if (
                closing
                and closing.group("fence")[0] == open_fence[0]
                and len(closing.group("fence")) >= len(open_fence)
            ):
                if diagram is not None:
                    output.append(_diagram_block(*diagram))
                    diagram = None
                else:
                    output.append(f"{open_fence}\n")
                open_fence = None
            elif diagram is not None:
                diagram[1].append(line)
            else:
                output.append(line)
            continue

        opening = FENCE_OPEN_PATTERN.match(content)
        if opening is not None:
            open_fence = opening.group("fence")
            language = opening.group("lang") or ""
            if language.lower() in DIAGRAM_LANGUAGES:
                diagram = (language.lower(), [])
                continue
            fences.append(
                FenceInfo(language or "text", _fence_title(opening.group("meta")))
            )
            output.append(f"{open_fence}{language}\n")
            continue

        admonition = ADMONITION_OPEN_PATTERN.match(content)
        if admonition is not None:
            admonition_depth += 1
            output.append(_admonition_open(admonition))
        elif admonition_depth and ADMONITION_CLOSE_PATTERN.match(content):
            admonition_depth -= 1
            output.append("\n</div>\n\n")
        else:
            output.append(_heading_with_id(line, content))

    if diagram is not None:
        output.append(_diagram_block(*diagram))
    elif open_fence is not None:
        output.append(f"\n{open_fence}\n")
    output.extend("\n</div>\n\n" for _ in range(admonition_depth))
    return "".join(output), fences


class HtmlContentRenderer:
    """Render document bodies with Pygments highlighting and link rewriting."""

    def __init__(self, pygments_style: str = "monokai") -> None:
        """Initialize a renderer with an optional pygments style.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def markdown(
        self,
        text: str,
        *,
        link_extension: Extension | None = None,
        mdx: bool = False,
    ) -> str:
        """Render a document body into HTML.

        Parameters
        ----------
        text : str
            Markdown body without frontmatter.
        link_extension : Extension, optional
            Extension rewriting cross-document links for the current page.
        mdx : bool, optional
            Drop top-level ``import``/``export`` statements of MDX documents.
        """
        if mdx:
            text = MDX_STATEMENT_PATTERN.sub("", text)
        source, fences = prepare_source(text)
        if not source.strip():
            return ""
        extensions: list[Extension | str] = [
            "fenced_code",
            "codehilite",
            "md_in_html",
            "attr_list",
            "tables",
            "sane_lists",
            "toc",
        ]
        if link_extension is not None:
            extensions.append(link_extension)
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                },
                "toc": {"permalink": False},
            },
        )
        return self._annotate_fences(md.convert(source), fences)

    @staticmethod
    def _annotate_fences(html: str, fences: list[FenceInfo]) -> str:
        """Attach fence metadata to highlighted blocks in document order."""
        if not fences:
            return html
        remaining = iter(fences)

        def _repl(match: re.Match[str]) -> str:
            info = next(remaining, FenceInfo("text"))
            return f'<div class="codehilite"{info.attributes()}>'

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(fences))


__all__ = ["FenceInfo", "HtmlContentRenderer", "prepare_source"]
