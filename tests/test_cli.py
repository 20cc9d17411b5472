"""Tests for the ``pages`` command line interface.

The commands are called as plain functions so the exit codes raised through
``SystemExit`` can be asserted directly. A missing ``site.yaml`` falls back to
defaults, which lets each test point ``--content-root`` at a fixture folder.
"""

from __future__ import annotations

import typing as typ

import msgspec.json
import pytest

from sfdevops_pages import cli

if typ.TYPE_CHECKING:
    from pathlib import Path


def test_check_reports_broken_link(
    tmp_path: Path, learning_path_docs: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Non-strict checks print diagnostics and succeed."""
    cli.check(config=tmp_path / "missing.yaml", content_root=learning_path_docs)

    output = capsys.readouterr().out
    assert "intro.md: [unresolved_link]" in output, "Expected the broken link"
    assert "6 documents" in output, "Expected the summary line"


def test_check_strict_exits_one(tmp_path: Path, learning_path_docs: Path) -> None:
    """Strict mode turns unresolved links into exit status 1."""
    with pytest.raises(SystemExit) as excinfo:
        cli.check(
            config=tmp_path / "missing.yaml",
            content_root=learning_path_docs,
            strict=True,
        )
    assert excinfo.value.code == cli.EXIT_BROKEN_LINKS, "Expected exit status 1"


def test_check_strict_passes_clean_site(
    tmp_path: Path, write_docs: typ.Callable[[dict[str, str]], Path]
) -> None:
    """Strict mode succeeds when every internal link resolves."""
    root = write_docs(
        {"intro.md": "[next](/docs/next)\n", "next.md": "---\ntitle: [bad\n---\n"}
    )
    cli.check(config=tmp_path / "missing.yaml", content_root=root, strict=True)


def test_missing_root_exits_two(tmp_path: Path) -> None:
    """An unreadable content root exits with status 2."""
    with pytest.raises(SystemExit) as excinfo:
        cli.check(config=tmp_path / "missing.yaml", content_root=tmp_path / "nope")
    assert excinfo.value.code == cli.EXIT_CONTENT_ROOT, "Expected exit status 2"


def test_build_writes_site(
    tmp_path: Path, learning_path_docs: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """``build`` renders pages, the homepage, and the graph JSON."""
    out = tmp_path / "out"
    cli.build(
        config=tmp_path / "missing.yaml",
        content_root=learning_path_docs,
        output_dir=out,
    )

    assert (out / "index.html").is_file(), "Expected the homepage"
    assert (out / "docs" / "intro" / "index.html").is_file(), "Expected intro page"
    graph = msgspec.json.decode((out / "site-graph.json").read_bytes())
    assert len(graph["documents"]) == 6, "Expected six serialized documents"
    assert len(graph["features"]) == 3, "Expected the default features"
    assert "wrote " in capsys.readouterr().out, "Expected written paths to be listed"


def test_build_strict_writes_before_failing(
    tmp_path: Path, learning_path_docs: Path
) -> None:
    """Strict builds still write output before exiting non-zero."""
    out = tmp_path / "out"
    with pytest.raises(SystemExit) as excinfo:
        cli.build(
            config=tmp_path / "missing.yaml",
            content_root=learning_path_docs,
            output_dir=out,
            strict=True,
        )
    assert excinfo.value.code == cli.EXIT_BROKEN_LINKS, "Expected exit status 1"
    assert (out / "site-graph.json").is_file(), "Expected output before exiting"


def test_config_file_is_used(
    tmp_path: Path, learning_path_docs: Path
) -> None:
    """Values from ``site.yaml`` apply unless overridden on the command line."""
    config = tmp_path / "site.yaml"
    config.write_text(
        f"site:\n  content_root: {learning_path_docs.as_posix()}\n  strict: true\n",
        encoding="utf-8",
    )
    with pytest.raises(SystemExit) as excinfo:
        cli.check(config=config)
    assert excinfo.value.code == cli.EXIT_BROKEN_LINKS, "Expected strict from config"

    cli.check(config=config, strict=False)


def test_app_dispatches_check(
    tmp_path: Path, learning_path_docs: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """The Cyclopts app parses arguments and environment variables."""
    monkeypatch.setenv("INPUT_CONTENT_ROOT", str(learning_path_docs))
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as excinfo:
        cli.app(["check", "--strict"])
    assert excinfo.value.code == cli.EXIT_BROKEN_LINKS, "Expected exit status 1"


def test_check_strict_fails_on_footer_route(
    tmp_path: Path,
    write_docs: typ.Callable[[dict[str, str]], Path],
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Footer routes from ``site.yaml`` are checked with the documents."""
    root = write_docs({"intro.md": "# Intro\n"})
    config = tmp_path / "site.yaml"
    config.write_text(
        "footer:\n"
        "  links:\n"
        "    - title: Salesforce\n"
        "      items:\n"
        "        - label: Platform Overview\n"
        "          to: /docs/salesforce/\n",
        encoding="utf-8",
    )
    with pytest.raises(SystemExit) as excinfo:
        cli.check(config=config, content_root=root, strict=True)

    assert excinfo.value.code == cli.EXIT_BROKEN_LINKS, "Expected exit status 1"
    assert "footer: [unresolved_link]" in capsys.readouterr().out, (
        "Expected the footer diagnostic"
    )
