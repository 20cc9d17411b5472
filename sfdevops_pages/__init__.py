"""Content assembly and navigation engine for the Salesforce DevOps learning site.

This package turns a folder of Markdown tutorials into a ``SiteGraph``: the
loaded documents, a deterministic sidebar tree, resolved cross-document links,
rendered homepage feature blocks, and a diagnostics report. It also ships the
``pages`` CLI used locally and in CI.

Exports
-------
- ``build``: Pure entry point returning a ``SiteGraph`` for a content root.
- ``SiteAssembler``: Stateful orchestrator exposing the build lifecycle.
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from pathlib import Path
>>> from sfdevops_pages import build
>>> graph = build(Path("docs"))  # doctest: +SKIP
>>> graph.get("foundations/version-control-git").title  # doctest: +SKIP
'Version Control with Git'
"""

from __future__ import annotations

from .assembler import AssemblyState, SiteAssembler, build
from .cli import app, main

__all__ = ["AssemblyState", "SiteAssembler", "app", "build", "main"]
