"""Tests for cross-document link extraction and resolution."""

from __future__ import annotations

import pytest

from sfdevops_pages.content import derive_slug
from sfdevops_pages.diagnostics import IssueKind
from sfdevops_pages.links import (
    FOOTER_SOURCE,
    LinkIndex,
    extract_targets,
    resolve_links,
)
from sfdevops_pages.models import Document, LinkStatus

INTRO_BODY = """\
See [Git](/docs/foundations/version-control-git) and [missing](/docs/foundations/does-not-exist).
Also [anchor](/docs/foundations/version-control-git#branching) and [Salesforce](https://developer.salesforce.com).

```bash
[ignored](/docs/nowhere)
```

Inline `[also ignored](/docs/nowhere)` here.
![diagram](/docs/img/diagram.png)
[rel](./foundations/version-control-git.md)
<Link to="/docs/intro">Intro</Link>
[top](#top)
"""


def _doc(path: str, body: str = "") -> Document:
    return Document(path, derive_slug(path), path, None, 1, body)


@pytest.fixture
def documents() -> list[Document]:
    """Return the intro page plus the Git page it links to."""
    return [
        _doc("intro.md", INTRO_BODY),
        _doc("foundations/version-control-git.md"),
    ]


def test_statuses_in_order(documents: list[Document]) -> None:
    """Each reference is classified in order of appearance."""
    links, _ = resolve_links(documents)
    observed = [(link.target, link.status) for link in links]

    assert observed == [
        ("/docs/foundations/version-control-git", LinkStatus.RESOLVED),
        ("/docs/foundations/does-not-exist", LinkStatus.UNRESOLVED),
        ("/docs/foundations/version-control-git#branching", LinkStatus.RESOLVED),
        ("https://developer.salesforce.com", LinkStatus.EXTERNAL),
        ("./foundations/version-control-git.md", LinkStatus.RESOLVED),
        ("/docs/intro", LinkStatus.RESOLVED),
    ], f"Unexpected links: {observed}"


def test_broken_link_diagnostic(documents: list[Document]) -> None:
    """Exactly one diagnostic names the source document and the target."""
    _, diagnostics = resolve_links(documents)

    (diagnostic,) = diagnostics
    assert diagnostic.issue_kind is IssueKind.UNRESOLVED_LINK, "Expected link issue"
    assert diagnostic.document_path == "intro.md", "Expected the source path"
    assert "/docs/foundations/does-not-exist" in diagnostic.detail, (
        "Expected the raw target in the detail"
    )
    assert "line 1" in diagnostic.detail, "Expected the line number in the detail"


def test_resolved_links_carry_slug_and_anchor(documents: list[Document]) -> None:
    """Anchors are recorded but not validated against the target."""
    links, _ = resolve_links(documents)
    anchored = links[2]

    assert anchored.slug == "foundations/version-control-git", "Expected target slug"
    assert anchored.anchor == "branching", "Expected the anchor to be split off"
    assert anchored.line == 2, "Expected the 1-based line of the reference"


def test_code_and_images_are_ignored() -> None:
    """Targets inside code or image syntax are not extracted."""
    targets = [target for _, target in extract_targets(INTRO_BODY)]

    assert "/docs/nowhere" not in targets, "Expected code to be skipped"
    assert "/docs/img/diagram.png" not in targets, "Expected images to be skipped"


def test_reference_definitions_and_autolinks() -> None:
    """Reference-style definitions and autolinks are extracted too."""
    body = "Read [the guide][g].\n\n[g]: /docs/guide\n\n<https://example.com/x>\n"
    assert extract_targets(body) == [
        (3, "/docs/guide"),
        (5, "https://example.com/x"),
    ], "Expected the reference target and the autolink"


def test_stray_backtick_does_not_hide_links() -> None:
    """An unmatched backtick cannot pair with a code span paragraphs later."""
    body = "Use the ` key to type.\n\nSee [gone](/docs/missing).\n\nThen run `ls`.\n"
    links, diagnostics = resolve_links([_doc("keys.md", body)])

    assert extract_targets(body) == [(3, "/docs/missing")], (
        "Expected the link between the backticks to be extracted"
    )
    assert [link.status for link in links] == [LinkStatus.UNRESOLVED], (
        "Expected the broken link to be recorded"
    )
    assert [item.issue_kind for item in diagnostics] == [IssueKind.UNRESOLVED_LINK], (
        "Expected an unresolved-link diagnostic"
    )


@pytest.mark.parametrize(
    "body",
    [
        "Run `` `git` `` then [next](/docs/next).\n",
        "A ``` fence-like run ``` and [next](/docs/next).\n",
        "Open `code\nspan` then [next](/docs/next).\n",
    ],
)
def test_code_spans_end_at_their_closing_run(body: str) -> None:
    """Code spans may hold backticks or a single line break but nothing more."""
    assert extract_targets(body)[-1][1] == "/docs/next", (
        "Expected the link after the code span to be extracted"
    )


def test_angle_bracket_destination_is_recorded_once() -> None:
    """A ``<url>`` link destination is not also reported as an autolink."""
    assert extract_targets("[x](<https://example.com>)\n") == [
        (1, "https://example.com")
    ], "Expected a single target"

@pytest.mark.parametrize(
    ("target", "status"),
    [
        ("mailto:team@example.com", LinkStatus.EXTERNAL),
        ("//cdn.example.com/lib.js", LinkStatus.EXTERNAL),
        ("/docs/", LinkStatus.RESOLVED),
        ("/docs/interview-prep/", LinkStatus.RESOLVED),
        ("../intro.md", LinkStatus.RESOLVED),
        ("missing.md", LinkStatus.UNRESOLVED),
    ],
)
def test_classify(target: str, status: LinkStatus) -> None:
    """Classification covers schemes, trailing slashes, and relative paths."""
    index = LinkIndex.from_documents(
        [_doc("index.md"), _doc("intro.md"), _doc("interview-prep/index.md")]
    )
    link = index.classify("interview-prep/index.md", target)

    assert link is not None, f"Expected {target!r} to be classified"
    assert link.status is status, f"Unexpected status for {target!r}"


@pytest.mark.parametrize("target", ["#top", "/blog/post", "img/logo.png", ""])
def test_non_document_targets_are_not_links(target: str) -> None:
    """Fragments, other site routes, and assets are not cross-document links."""
    index = LinkIndex.from_documents([_doc("intro.md")])

    assert index.classify("intro.md", target) is None, (
        f"Expected {target!r} to be ignored"
    )


def test_custom_route_base() -> None:
    """Routes are matched against the configured base only."""
    documents = [_doc("intro.md", "[a](/learn/intro) [b](/docs/intro)\n")]
    links, diagnostics = resolve_links(documents, route_base="/learn/")

    assert [link.status for link in links] == [LinkStatus.RESOLVED], (
        "Expected only the /learn route to be treated as a document link"
    )
    assert diagnostics == [], "Expected no diagnostics"


def test_footer_links_are_classified_after_documents() -> None:
    """Footer targets are checked against the documents like body links."""
    documents = [_doc("intro.md", "[self](/docs/intro)\n")]
    links, diagnostics = resolve_links(
        documents,
        footer_links=["/docs/intro", "/docs/salesforce/", "https://gitlab.com"],
    )

    assert [(link.source, link.status) for link in links] == [
        ("intro.md", LinkStatus.RESOLVED),
        (FOOTER_SOURCE, LinkStatus.RESOLVED),
        (FOOTER_SOURCE, LinkStatus.UNRESOLVED),
        (FOOTER_SOURCE, LinkStatus.EXTERNAL),
    ], "Expected footer links after the body links"
    (diagnostic,) = diagnostics
    assert diagnostic.document_path == FOOTER_SOURCE, "Expected the footer source"
    assert diagnostic.detail == "broken link '/docs/salesforce/'", (
        "Expected the broken footer route without a line number"
    )
