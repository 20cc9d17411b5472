"""Discover Markdown documents under a content root and build ``Document`` values.

The loader never writes to the content root. Discovery order is irrelevant:
sources are sorted by POSIX relative path before parsing, and parsing is a
pure function per file so it can optionally run on a thread pool whose
results are merged afterwards in that same order.

Example
-------
>>> from pathlib import Path
>>> result = load_documents(Path("docs"))  # doctest: +SKIP
>>> [doc.slug for doc in result.documents][:2]  # doctest: +SKIP
['foundations/cicd-concepts', 'foundations/version-control-git']
"""

from __future__ import annotations

import concurrent.futures
import dataclasses as dc
import logging
import os
import re
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from sfdevops_pages._constants import (
    CATEGORY_FILENAMES,
    DOCUMENT_SUFFIXES,
    INDEX_STEMS,
)
from sfdevops_pages.diagnostics import ContentRootUnreadable, Diagnostic, IssueKind
from sfdevops_pages.models import Document

from .frontmatter import parse_frontmatter

logger = logging.getLogger(__name__)

HEADING_PATTERN = re.compile(r"^#[ \t]+(?P<title>.+?)(?:[ \t]+#+)?[ \t]*$")
HEADING_ID_PATTERN = re.compile(r"[ \t]*\{#[^{}\s]*\}$")
FENCE_PATTERN = re.compile(r"^[ ]{0,3}(`{3,}|~{3,})")
SKIPPED_DIRECTORIES = frozenset({"node_modules"})


@dc.dataclass(frozen=True, slots=True)
class CategoryMeta:
    """Folder metadata read from a ``_category_.yml`` file."""

    label: str | None = None
    position: int | None = None


@dc.dataclass(frozen=True, slots=True)
class ParsedFile:
    """Result of parsing one source file; ``document`` is ``None`` on failure."""

    path: str
    document: Document | None
    diagnostics: tuple[Diagnostic, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class LoadResult:
    """Documents, folder metadata, and diagnostics produced by a load pass."""

    documents: tuple[Document, ...]
    categories: dict[str, CategoryMeta]
    diagnostics: tuple[Diagnostic, ...]


def _clean_heading(text: str) -> str:
    """Return a cleaned heading without escapes or a trailing ``{#id}``."""
    return HEADING_ID_PATTERN.sub("", text).replace("\\", "").strip()


def titleize(name: str) -> str:
    """Turn a file or folder name such as ``version-control-git`` into a title."""
    words = re.split(r"[-_\s]+", name)
    return " ".join(word[:1].upper() + word[1:] for word in words if word) or name


def derive_slug(path: str) -> str:
    """Return the URL slug for a POSIX path relative to the content root.

    ``foundations/version-control-git.md`` maps to
    ``foundations/version-control-git``; ``interview-prep/index.md`` maps to
    ``interview-prep`` and the root ``index.md`` to the empty slug.
    """
    parts = path.split("/")
    stem = parts[-1]
    for suffix in DOCUMENT_SUFFIXES:
        if stem.endswith(suffix):
            stem = stem[: -len(suffix)]
            break
    if stem in INDEX_STEMS:
        return "/".join(parts[:-1])
    return "/".join([*parts[:-1], stem])


def first_heading(body: str) -> str | None:
    """Return the first level-one ATX heading outside fenced code, if any."""
    fence: str | None = None
    for line in body.splitlines():
        fence_match = FENCE_PATTERN.match(line)
        if fence_match:
            marker = fence_match.group(1)
            if fence is None:
                fence = marker[0] * 3
            elif marker.startswith(fence):
                fence = None
            continue
        if fence is not None:
            continue
        heading = HEADING_PATTERN.match(line)
        if heading:
            title = _clean_heading(heading.group("title"))
            if title:
                return title
    return None


def _fallback_title(path: str) -> str:
    slug = derive_slug(path)
    name = slug.rsplit("/", 1)[-1] if slug else Path(path).stem
    return titleize(name)


def parse_document(path: str, text: str) -> ParsedFile:
    """Build a :class:`Document` from the raw text of ``path``.

    Parameters
    ----------
    path : str
        POSIX path relative to the content root.
    text : str
        Full file contents.

    Returns
    -------
    ParsedFile
        The document plus a ``MALFORMED_FRONTMATTER`` diagnostic for every
        frontmatter issue. Malformed blocks leave the raw text in the body.
    """
    result = parse_frontmatter(text)
    meta = result.metadata
    title = meta.title or first_heading(result.body) or _fallback_title(path)
    document = Document(
        path=path,
        slug=derive_slug(path),
        title=title,
        description=meta.description,
        sidebar_position=meta.sidebar_position,
        body=result.body,
        sidebar_label=meta.sidebar_label,
        has_frontmatter=result.present,
    )
    diagnostics = tuple(
        Diagnostic(path, IssueKind.MALFORMED_FRONTMATTER, issue)
        for issue in result.issues
    )
    for diagnostic in diagnostics:
        logger.warning("%s", diagnostic)
    return ParsedFile(path=path, document=document, diagnostics=diagnostics)


def _read_source(root: Path, path: str) -> ParsedFile:
    """Read and parse one source file, converting IO failures into diagnostics."""
    try:
        text = (root / path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        diagnostic = Diagnostic(path, IssueKind.UNREADABLE_DOCUMENT, str(exc))
        logger.warning("%s", diagnostic)
        return ParsedFile(path=path, document=None, diagnostics=(diagnostic,))
    return parse_document(path, text)


def _is_hidden(name: str) -> bool:
    return name.startswith(("_", "."))


def discover_sources(content_root: Path) -> tuple[list[str], list[str]]:
    """Return sorted document paths and category file paths under the root.

    Raises
    ------
    ContentRootUnreadable
        If ``content_root`` does not exist, is not a directory, or cannot be
        listed.
    """
    if not content_root.is_dir():
        msg = f"Content root '{content_root}' does not exist or is not a directory."
        raise ContentRootUnreadable(msg)
    try:
        with os.scandir(content_root):
            pass
    except OSError as exc:
        msg = f"Content root '{content_root}' cannot be read: {exc}"
        raise ContentRootUnreadable(msg) from exc

    def _on_error(exc: OSError) -> None:
        logger.warning("Skipping unreadable folder %s: %s", exc.filename, exc)

    documents: list[str] = []
    categories: list[str] = []
    for current, dirnames, filenames in os.walk(content_root, onerror=_on_error):
        dirnames[:] = [
            name
            for name in dirnames
            if not _is_hidden(name) and name not in SKIPPED_DIRECTORIES
        ]
        relative = Path(current).relative_to(content_root)
        for filename in filenames:
            rel_path = (relative / filename).as_posix()
            if filename in CATEGORY_FILENAMES:
                categories.append(rel_path)
            elif filename.endswith(DOCUMENT_SUFFIXES) and not _is_hidden(filename):
                documents.append(rel_path)
            else:
                logger.debug("Ignoring non-document file %s", rel_path)
    return sorted(documents), sorted(categories)


def _load_category(
    root: Path, path: str
) -> tuple[str, CategoryMeta | None, Diagnostic | None]:
    """Read one ``_category_.yml`` file into folder metadata.

    An invalid ``position`` keeps the label and records a diagnostic; an
    unreadable or non-mapping file yields no metadata at all.
    """
    folder = path.rsplit("/", 1)[0] if "/" in path else ""
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load((root / path).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, YAMLError, RecursionError) as exc:
        detail = f"category metadata is unreadable: {exc.__class__.__name__}"
        return folder, None, Diagnostic(path, IssueKind.MALFORMED_FRONTMATTER, detail)

    if not isinstance(loaded, dict):
        detail = "category metadata must be a mapping"
        return folder, None, Diagnostic(path, IssueKind.MALFORMED_FRONTMATTER, detail)

    label = str(loaded["label"]) if loaded.get("label") else None
    position = loaded.get("position")
    match position:
        case None:
            return folder, CategoryMeta(label=label), None
        case bool():
            pass
        case int():
            return folder, CategoryMeta(label=label, position=position), None
    detail = f"'position' must be an integer, got {position!r}"
    diagnostic = Diagnostic(path, IssueKind.MALFORMED_FRONTMATTER, detail)
    return folder, CategoryMeta(label=label), diagnostic


def _merge(parsed: typ.Iterable[ParsedFile]) -> tuple[list[Document], list[Diagnostic]]:
    """Merge parse results in path order; the later path wins a slug clash."""
    by_slug: dict[str, Document] = {}
    diagnostics: list[Diagnostic] = []
    for item in parsed:
        diagnostics.extend(item.diagnostics)
        document = item.document
        if document is None:
            continue
        previous = by_slug.get(document.slug)
        if previous is not None:
            detail = (
                f"slug '{document.slug}' is also produced by '{previous.path}'; "
                f"keeping '{document.path}'"
            )
            diagnostic = Diagnostic(document.path, IssueKind.DUPLICATE_SLUG, detail)
            logger.warning("%s", diagnostic)
            diagnostics.append(diagnostic)
        by_slug[document.slug] = document
    documents = sorted(by_slug.values(), key=lambda doc: doc.path)
    return documents, diagnostics


def load_documents(content_root: Path, *, workers: int = 1) -> LoadResult:
    """Load every document under ``content_root``.

    Parameters
    ----------
    content_root : Path
        Directory holding the Markdown sources.
    workers : int, optional
        Number of parser threads. ``1`` (default) parses sequentially.

    Returns
    -------
    LoadResult
        Documents sorted by path, folder metadata keyed by folder path, and
        all recoverable diagnostics.

    Raises
    ------
    ContentRootUnreadable
        If the content root is missing or cannot be listed.
    """
    root = Path(content_root)
    document_paths, category_paths = discover_sources(root)
    logger.debug("Discovered %d documents under %s", len(document_paths), root)

    if workers > 1 and len(document_paths) > 1:
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            parsed = list(
                executor.map(lambda rel: _read_source(root, rel), document_paths)
            )
    else:
        parsed = [_read_source(root, rel) for rel in document_paths]

    documents, diagnostics = _merge(parsed)

    categories: dict[str, CategoryMeta] = {}
    for path in category_paths:
        folder, meta, diagnostic = _load_category(root, path)
        if diagnostic is not None:
            logger.warning("%s", diagnostic)
            diagnostics.append(diagnostic)
        if meta is not None and folder not in categories:
            categories[folder] = meta

    return LoadResult(
        documents=tuple(documents),
        categories=categories,
        diagnostics=tuple(diagnostics),
    )


__all__ = [
    "CategoryMeta",
    "LoadResult",
    "ParsedFile",
    "derive_slug",
    "discover_sources",
    "first_heading",
    "load_documents",
    "parse_document",
    "titleize",
]
