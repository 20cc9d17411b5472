"""Cyclopts CLI entrypoint for building the Salesforce DevOps learning site.

The ``pages`` console script assembles the content root into a site graph,
reports diagnostics (broken links, malformed frontmatter, duplicate slugs),
and optionally renders the static HTML output. ``pages check`` only
assembles and reports, which suits CI; ``pages build`` also writes files.
With ``--strict`` any unresolved internal link, footer routes included, or
sidebar item naming no document makes the command exit with status 1. A
missing content root exits with status 2.

Examples
--------
Build the site using ``site.yaml`` from the current directory:

>>> from sfdevops_pages.cli import main
>>> main()  # doctest: +SKIP

Validate links in CI without writing output:

>>> from sfdevops_pages.cli import app
>>> app(["check", "--strict"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .assembler import build as build_site_graph
from .config import SiteConfig, default_homepage, load_site_config
from .diagnostics import ContentRootUnreadable
from .render import SiteRenderer

if typ.TYPE_CHECKING:
    from .models import SiteGraph

DEFAULT_CONFIG = Path("site.yaml")
EXIT_BROKEN_LINKS = 1
EXIT_CONTENT_ROOT = 2

app = App(name="pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _resolve_config(
    config: Path,
    *,
    content_root: Path | None,
    output_dir: Path | None,
    strict: bool | None,
    workers: int | None,
) -> SiteConfig:
    """Load ``config`` when present and apply command-line overrides."""
    if config.exists():
        site_config = load_site_config(config)
    else:
        site_config = SiteConfig()
        site_config.homepage = default_homepage(site_config.title, site_config.tagline)
    return site_config.with_overrides(
        content_root=content_root,
        output_dir=output_dir,
        strict=strict,
        workers=workers,
    )


def _assemble(site_config: SiteConfig) -> SiteGraph:
    """Build the site graph or exit with status 2 when the root is unreadable."""
    try:
        return build_site_graph(
            site_config.content_root,
            features=site_config.features,
            route_base=site_config.route_base,
            root_label=site_config.sidebar_label,
            workers=site_config.workers,
            sidebars=site_config.sidebars,
            footer_links=site_config.footer.targets(),
        )
    except ContentRootUnreadable as exc:
        print(f"error: {exc}")
        raise SystemExit(EXIT_CONTENT_ROOT) from exc


def _report(graph: SiteGraph, *, strict: bool) -> None:
    """Print diagnostics and exit non-zero for broken links in strict mode."""
    for diagnostic in graph.diagnostics:
        print(str(diagnostic))
    broken = len(graph.broken_links())
    print(
        f"{len(graph.documents)} documents, {len(graph.links)} links, "
        f"{broken} unresolved, {len(graph.diagnostics)} diagnostics"
    )
    if strict and graph.diagnostics.fails_strict():
        raise SystemExit(EXIT_BROKEN_LINKS)


@app.command(help="Assemble the site graph and render static HTML pages.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    content_root: typ.Annotated[
        Path | None,
        Parameter(help="Override the content root", env_var="INPUT_CONTENT_ROOT"),
    ] = None,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    strict: typ.Annotated[
        bool | None,
        Parameter(help="Fail on unresolved links", env_var="INPUT_STRICT"),
    ] = None,
    workers: typ.Annotated[
        int | None, Parameter(help="Parser threads", env_var="INPUT_WORKERS")
    ] = None,
    verbose: bool = False,
) -> None:
    """Build the site for the requested configuration.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file; defaults apply when the
        file does not exist.
    content_root : Path or None, optional
        Override the Markdown content root.
    output_dir : Path or None, optional
        Override the folder receiving the rendered site.
    strict : bool or None, optional
        Exit with status 1 when any internal link is unresolved. The pages
        are still written first.
    workers : int or None, optional
        Number of parser threads used while loading documents.
    verbose : bool, optional
        Log at DEBUG level.

    Raises
    ------
    SystemExit
        With status 1 for unresolved links in strict mode, or 2 when the
        content root cannot be read.
    """
    _configure_logging(verbose)
    site_config = _resolve_config(
        config,
        content_root=content_root,
        output_dir=output_dir,
        strict=strict,
        workers=workers,
    )
    graph = _assemble(site_config)
    for path in SiteRenderer(graph, site_config).run():
        print(f"wrote {_format_path(path)}")
    _report(graph, strict=site_config.strict)


@app.command(help="Assemble the site graph and report diagnostics only.")
def check(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    content_root: typ.Annotated[
        Path | None,
        Parameter(help="Override the content root", env_var="INPUT_CONTENT_ROOT"),
    ] = None,
    strict: typ.Annotated[
        bool | None,
        Parameter(help="Fail on unresolved links", env_var="INPUT_STRICT"),
    ] = None,
    workers: typ.Annotated[
        int | None, Parameter(help="Parser threads", env_var="INPUT_WORKERS")
    ] = None,
    verbose: bool = False,
) -> None:
    """Validate the content root without writing any output."""
    _configure_logging(verbose)
    site_config = _resolve_config(
        config,
        content_root=content_root,
        output_dir=None,
        strict=strict,
        workers=workers,
    )
    graph = _assemble(site_config)
    _report(graph, strict=site_config.strict)


def main() -> None:
    """Invoke the Cyclopts application that powers the `pages` console command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
