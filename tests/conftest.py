"""Shared fixtures for building throwaway content roots."""

from __future__ import annotations

import typing as typ

import pytest

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


def _write_tree(root: Path, files: cabc.Mapping[str, str]) -> Path:
    """Write ``files`` (POSIX relative path -> text) below ``root``."""
    root.mkdir(parents=True, exist_ok=True)
    for relative, text in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def write_tree() -> typ.Callable[[Path, cabc.Mapping[str, str]], Path]:
    """Return the helper that writes files below an arbitrary root."""
    return _write_tree


@pytest.fixture
def write_docs(tmp_path: Path) -> typ.Callable[[dict[str, str]], Path]:
    """Return a helper that writes a content root under ``tmp_path/docs``."""

    def _write(files: dict[str, str]) -> Path:
        return _write_tree(tmp_path / "docs", files)

    return _write


@pytest.fixture
def learning_path_docs(write_docs: typ.Callable[[dict[str, str]], Path]) -> Path:
    """Return a small content root resembling the DevOps learning path."""
    return write_docs(
        {
            "intro.md": (
                "---\nsidebar_position: 1\ntitle: Introduction\n---\n"
                "Start with [Git](/docs/foundations/version-control-git) and avoid "
                "[this page](/docs/foundations/does-not-exist).\n"
            ),
            "foundations/what-is-salesforce-devops.md": (
                "---\nsidebar_position: 1\n---\n# What is Salesforce DevOps?\n\n"
                "Next: [environments](./understanding-environments.md).\n"
            ),
            "foundations/understanding-environments.md": (
                "---\nsidebar_position: 2\n---\n# Understanding Environments\n"
            ),
            "foundations/version-control-git.md": (
                "---\nsidebar_position: 3\ndescription: Git for admins\n---\n"
                "# Version Control with Git\n\n```bash\ngit init\n```\n"
            ),
            "interview-prep/index.md": (
                "---\nsidebar_position: 2\n---\n# Interview Prep\n\n"
                "Read the [workflow](/docs/interview-prep/complete-git-workflow#daily).\n"
            ),
            "interview-prep/complete-git-workflow.md": "# Complete Git Workflow\n",
        }
    )
