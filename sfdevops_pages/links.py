r"""Find cross-document references in Markdown bodies and resolve them.

Targets are collected from inline links, reference definitions, autolinks,
and HTML/JSX ``href``/``to`` attributes; fenced code blocks, inline code
spans, and images are ignored. Each target is classified as:

``EXTERNAL``
    Anything with a URL scheme (``https:``, ``mailto:``) or a protocol
    relative ``//host`` prefix. Passed through untouched.
``RESOLVED`` / ``UNRESOLVED``
    Routes under the route base (``/docs/a/b#anchor``) matched by slug, and
    relative ``.md``/``.mdx`` file links matched by path. Anchors are never
    checked, only document existence.

Other targets (bare ``#anchor`` links, unrelated site routes) are not
cross-document references and are not recorded.

Example
-------
>>> from sfdevops_pages.models import Document
>>> docs = [Document("a/b.md", "a/b", "B", None, 1, "")]
>>> links, issues = resolve_links(
...     [Document("x.md", "x", "X", None, 1, "[b](/docs/a/b#top) [c](/docs/a/c)")]
...     + docs
... )
>>> [(link.target, str(link.status)) for link in links]
[('/docs/a/b#top', 'resolved'), ('/docs/a/c', 'unresolved')]
>>> len(issues)
1
"""

from __future__ import annotations

import dataclasses as dc
import logging
import posixpath
import re
import typing as typ
from urllib.parse import unquote

from ._constants import DEFAULT_ROUTE_BASE, DOCUMENT_SUFFIXES
from .diagnostics import Diagnostic, IssueKind
from .models import CrossLink, Document, LinkStatus

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)

FENCED_BLOCK_PATTERN = re.compile(
    r"^[ ]{0,3}(?P<fence>`{3,}|~{3,})[^\n]*\n.*?(?:^[ ]{0,3}(?P=fence)[`~]*[ \t]*$|\Z)",
    re.MULTILINE | re.DOTALL,
)
# Code spans never cross a blank line; an unmatched backtick run stays literal.
INLINE_CODE_PATTERN = re.compile(
    r"(?<!`)(`+)(?!`)(?:(?!\n[ \t]*\n).)+?(?<!`)\1(?!`)", re.DOTALL
)
INLINE_LINK_PATTERN = re.compile(
    r"(?<!!)\[(?:[^\[\]\n]|\[[^\]\n]*\])*\]\(\s*<?(?P<target>[^)\s>]+)>?"
    r"(?:\s+(?:\"[^\"]*\"|'[^']*'|\([^)]*\)))?\s*\)"
)
REFERENCE_PATTERN = re.compile(
    r"^[ ]{0,3}\[[^\]\n]+\]:[ \t]*<?(?P<target>[^\s>]+)>?", re.MULTILINE
)
AUTOLINK_PATTERN = re.compile(r"<(?P<target>[A-Za-z][A-Za-z0-9+.-]*:[^\s<>]+)>")
ATTRIBUTE_PATTERN = re.compile(
    r"\b(?:href|to)\s*=\s*(?:\{\s*)?(?P<quote>[\"'`])(?P<target>[^\"'`]+)(?P=quote)"
)
SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")
FOOTER_SOURCE = "footer"
TARGET_PATTERNS = (
    INLINE_LINK_PATTERN,
    REFERENCE_PATTERN,
    AUTOLINK_PATTERN,
    ATTRIBUTE_PATTERN,
)


def _blank(match: re.Match[str]) -> str:
    """Replace matched text with spaces while keeping newlines in place."""
    return re.sub(r"[^\n]", " ", match.group(0))


def _mask_code(body: str) -> str:
    """Return ``body`` with code blocks and spans blanked out, same offsets."""
    masked = FENCED_BLOCK_PATTERN.sub(_blank, body)
    return INLINE_CODE_PATTERN.sub(_blank, masked)


def extract_targets(body: str) -> list[tuple[int, str]]:
    """Return ``(line, target)`` pairs for every link target in ``body``.

    Parameters
    ----------
    body : str
        Markdown body of a document.

    Returns
    -------
    list[tuple[int, str]]
        1-based line numbers and raw targets in order of appearance.
    """
    masked = _mask_code(body)
    found: list[tuple[int, str]] = []
    claimed: list[tuple[int, int]] = []
    for pattern in TARGET_PATTERNS:
        for match in pattern.finditer(masked):
            start = match.start("target")
            # ``[x](<https://a>)`` is also an autolink; record it once.
            if any(low <= start < high for low, high in claimed):
                continue
            found.append((start, match.group("target")))
            claimed.append(match.span())
    found.sort(key=lambda item: item[0])
    return [(masked.count("\n", 0, offset) + 1, target) for offset, target in found]


def _split_target(target: str) -> tuple[str, str | None]:
    """Split ``target`` into its path and fragment, dropping any query."""
    path, _, fragment = target.partition("#")
    path = path.partition("?")[0]
    return path, (fragment or None)


@dc.dataclass(frozen=True, slots=True)
class LinkIndex:
    """Lookup tables used to classify link targets against the document set."""

    by_slug: typ.Mapping[str, Document]
    by_path: typ.Mapping[str, Document]
    route_base: str = DEFAULT_ROUTE_BASE

    @classmethod
    def from_documents(
        cls,
        documents: cabc.Iterable[Document],
        *,
        route_base: str = DEFAULT_ROUTE_BASE,
    ) -> LinkIndex:
        """Index ``documents`` by slug and path; later paths win slug clashes."""
        ordered = sorted(documents, key=lambda doc: doc.path)
        return cls(
            by_slug={doc.slug: doc for doc in ordered},
            by_path={doc.path: doc for doc in ordered},
            route_base="/" + route_base.strip("/"),
        )

    def route_slug(self, path: str) -> str | None:
        """Return the slug addressed by a route path, or ``None`` if outside."""
        base = self.route_base.rstrip("/")
        if path == base or path == f"{base}/":
            return ""
        if not path.startswith(f"{base}/"):
            return None
        return unquote(path[len(base) + 1 :]).strip("/")

    def classify(self, source: str, target: str, *, line: int = 0) -> CrossLink | None:
        """Classify ``target`` found in the document at ``source``.

        Returns
        -------
        CrossLink or None
            The outcome, or ``None`` when ``target`` is not a cross-document
            reference at all.
        """
        target = target.strip()
        if not target:
            return None
        if SCHEME_PATTERN.match(target) or target.startswith("//"):
            return CrossLink(source, target, LinkStatus.EXTERNAL, line=line)

        path, anchor = _split_target(target)
        slug = self.route_slug(path)
        if slug is not None:
            document = self.by_slug.get(slug)
        elif path and not path.startswith("/") and path.endswith(DOCUMENT_SUFFIXES):
            folder = posixpath.dirname(source)
            joined = posixpath.normpath(posixpath.join(folder, unquote(path)))
            document = self.by_path.get(joined)
        else:
            return None

        if document is None:
            return CrossLink(
                source, target, LinkStatus.UNRESOLVED, anchor=anchor, line=line
            )
        return CrossLink(
            source,
            target,
            LinkStatus.RESOLVED,
            slug=document.slug,
            anchor=anchor,
            line=line,
        )


def _record(
    index: LinkIndex,
    source: str,
    target: str,
    line: int,
    links: list[CrossLink],
    diagnostics: list[Diagnostic],
) -> None:
    link = index.classify(source, target, line=line)
    if link is None:
        return
    links.append(link)
    if link.is_broken:
        detail = f"broken link '{target}'"
        if line:
            detail = f"{detail} on line {line}"
        diagnostic = Diagnostic(source, IssueKind.UNRESOLVED_LINK, detail)
        logger.warning("%s", diagnostic)
        diagnostics.append(diagnostic)


def resolve_links(
    documents: cabc.Iterable[Document],
    *,
    route_base: str = DEFAULT_ROUTE_BASE,
    footer_links: cabc.Sequence[str] = (),
) -> tuple[list[CrossLink], list[Diagnostic]]:
    """Resolve every cross-document reference in ``documents``.

    Parameters
    ----------
    documents : Iterable[Document]
        The full document set; also the resolution universe.
    route_base : str, optional
        URL prefix under which documents are published (``/docs``).
    footer_links : Sequence[str], optional
        Targets of the site footer. They are classified like body links with
        ``"footer"`` as their source and line ``0``, after every document.

    Returns
    -------
    tuple[list[CrossLink], list[Diagnostic]]
        Links ordered by source path then appearance, and one
        ``UNRESOLVED_LINK`` diagnostic per broken internal link. Broken links
        never raise.
    """
    ordered = sorted(documents, key=lambda doc: doc.path)
    index = LinkIndex.from_documents(ordered, route_base=route_base)
    links: list[CrossLink] = []
    diagnostics: list[Diagnostic] = []
    for document in ordered:
        for line, target in extract_targets(document.body):
            _record(index, document.path, target, line, links, diagnostics)
    for target in footer_links:
        _record(index, FOOTER_SOURCE, target, 0, links, diagnostics)
    return links, diagnostics


__all__ = ["FOOTER_SOURCE", "LinkIndex", "extract_targets", "resolve_links"]
