"""Error taxonomy and the non-fatal diagnostics report for site builds.

Only :class:`ContentRootUnreadable` aborts a build. Every other problem found
in the content (broken links, malformed frontmatter, duplicate slugs,
unreadable files, sidebar items naming no document) is recorded as a :class:`Diagnostic` value so the site still
renders and the caller decides whether to fail, for example in CI strict mode.

Examples
--------
>>> report = DiagnosticsReport(
...     [Diagnostic("intro.md", IssueKind.UNRESOLVED_LINK, "/docs/missing")]
... )
>>> report.has_unresolved_links
True
>>> report.count_of(IssueKind.DUPLICATE_SLUG)
0
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum


class SiteBuildError(RuntimeError):
    """Base class for fatal site build failures."""


class ContentRootUnreadable(SiteBuildError):
    """Raised when the content root is missing or cannot be listed."""


class IssueKind(enum.StrEnum):
    """Kinds of recoverable problems surfaced alongside a successful build."""

    MALFORMED_FRONTMATTER = "malformed_frontmatter"
    UNRESOLVED_LINK = "unresolved_link"
    DUPLICATE_SLUG = "duplicate_slug"
    UNREADABLE_DOCUMENT = "unreadable_document"
    UNRESOLVED_SIDEBAR_ITEM = "unresolved_sidebar_item"


@dc.dataclass(frozen=True, slots=True, order=True)
class Diagnostic:
    """A single non-fatal issue attached to a source document.

    Attributes
    ----------
    document_path : str
        POSIX path of the affected document relative to the content root.
    issue_kind : IssueKind
        Category of the problem.
    detail : str
        Human-readable description, including the offending value.
    """

    document_path: str
    issue_kind: IssueKind
    detail: str

    def as_dict(self) -> dict[str, str]:
        """Return the ``{documentPath, issueKind, detail}`` payload."""
        return {
            "documentPath": self.document_path,
            "issueKind": str(self.issue_kind),
            "detail": self.detail,
        }

    def __str__(self) -> str:
        return f"{self.document_path}: [{self.issue_kind}] {self.detail}"


class DiagnosticsReport(cabc.Sequence[Diagnostic]):
    """Immutable, deterministically ordered collection of diagnostics."""

    __slots__ = ("_items",)

    def __init__(self, items: cabc.Iterable[Diagnostic] = ()) -> None:
        self._items = tuple(sorted(items))

    def __getitem__(self, index):  # type: ignore[override]
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DiagnosticsReport):
            return self._items == other._items
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"DiagnosticsReport({list(self._items)!r})"

    def of_kind(self, kind: IssueKind) -> list[Diagnostic]:
        """Return the diagnostics matching ``kind`` in report order."""
        return [item for item in self._items if item.issue_kind is kind]

    def count_of(self, kind: IssueKind) -> int:
        """Return how many diagnostics of ``kind`` were recorded."""
        return len(self.of_kind(kind))

    @property
    def has_unresolved_links(self) -> bool:
        """Return ``True`` when at least one internal link is broken."""
        return any(
            item.issue_kind is IssueKind.UNRESOLVED_LINK for item in self._items
        )

    def fails_strict(self) -> bool:
        """Return ``True`` when a strict build must exit non-zero.

        Broken links, footer routes included, and sidebar items naming no
        document both fail a strict build.
        """
        return self.has_unresolved_links or any(
            item.issue_kind is IssueKind.UNRESOLVED_SIDEBAR_ITEM for item in self._items
        )

    def as_list(self) -> list[dict[str, str]]:
        """Return the report as plain dictionaries for serialization."""
        return [item.as_dict() for item in self._items]


__all__ = [
    "ContentRootUnreadable",
    "Diagnostic",
    "DiagnosticsReport",
    "IssueKind",
    "SiteBuildError",
]
