"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _as_bool,
    _as_positive_int,
    _normalize_route_base,
    _optional_str,
)
from .homepage import _build_homepage_config, default_homepage
from .navigation import _build_footer, _build_sidebars
from .models import SiteConfig, SiteConfigError


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the learning site build.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``site.yaml``).

    Returns
    -------
    SiteConfig
        Parsed configuration with defaults applied for every omitted value.
        A homepage is always present; when the file declares none the default
        hero, CTAs, and feature blocks are used. Optional top-level
        ``sidebars`` and ``footer`` sections declare named sidebars and footer
        link columns.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If the top-level structure is not a mapping or a value has the wrong
        type.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from sfdevops_pages.config import load_site_config
    >>> config = load_site_config(Path("site.yaml"))  # doctest: +SKIP
    >>> config.route_base  # doctest: +SKIP
    '/docs'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise SiteConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    site_raw = raw.get("site", {}) or {}
    if not isinstance(site_raw, dict):
        msg = "The 'site' section must be a mapping."
        raise SiteConfigError(msg)
    site_config = _build_site_config(site_raw, raw.get("homepage"))
    site_config.sidebars = _build_sidebars(raw.get("sidebars"))
    site_config.footer = _build_footer(raw.get("footer"))
    return site_config


def _build_site_config(
    site: typ.Mapping[str, typ.Any], homepage_raw: object | None
) -> SiteConfig:
    """Build a SiteConfig from the ``site`` mapping and optional homepage."""
    defaults = SiteConfig()
    title = _optional_str(site.get("title")) or defaults.title
    tagline = _optional_str(site.get("tagline")) or defaults.tagline

    match homepage_raw:
        case None:
            homepage = default_homepage(title, tagline)
        case dict():
            homepage = _build_homepage_config(homepage_raw, fallback_title=title)
        case _:
            msg = "Homepage configuration must be a mapping."
            raise SiteConfigError(msg)

    return SiteConfig(
        title=title,
        tagline=tagline,
        content_root=Path(site.get("content_root", defaults.content_root)),
        output_dir=Path(site.get("output_dir", defaults.output_dir)),
        route_base=_normalize_route_base(site.get("route_base"), defaults.route_base),
        strict=_as_bool(site.get("strict"), field="strict", default=defaults.strict),
        workers=_as_positive_int(
            site.get("workers"), field="workers", default=defaults.workers
        ),
        pygments_style=site.get("pygments_style", defaults.pygments_style),
        sidebar_label=_optional_str(site.get("sidebar_label")) or defaults.sidebar_label,
        navbar_title=_optional_str(site.get("navbar_title")),
        homepage=homepage,
    )


__all__ = ["load_site_config"]
