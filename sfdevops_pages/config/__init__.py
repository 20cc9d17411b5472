"""Load and validate the learning-site configuration YAML.

This subpackage parses the project's ``site.yaml`` file, applies documented
defaults, and produces typed dataclasses (:class:`SiteConfig`,
:class:`HomepageConfig`, :class:`CTAButtonConfig`, :class:`FooterConfig`)
that the assembler, renderer, and CLI consume. The primary entry point is
:func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from sfdevops_pages.config import load_site_config
>>> site = load_site_config(Path("site.yaml"))  # doctest: +SKIP
>>> site.content_root  # doctest: +SKIP
PosixPath('docs')
"""

from .homepage import DEFAULT_FEATURES, default_homepage
from .loader import load_site_config
from .models import (
    CTAButtonConfig,
    FooterColumn,
    FooterConfig,
    FooterLink,
    HomepageConfig,
    SiteConfig,
    SiteConfigError,
)

__all__ = [
    "DEFAULT_FEATURES",
    "CTAButtonConfig",
    "FooterColumn",
    "FooterConfig",
    "FooterLink",
    "HomepageConfig",
    "SiteConfig",
    "SiteConfigError",
    "default_homepage",
    "load_site_config",
]
