"""Typed dataclasses describing the learning-site configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from sfdevops_pages._constants import DEFAULT_ROUTE_BASE
from sfdevops_pages.models import FeatureBlock, SidebarDefinition


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class CTAButtonConfig:
    """Call-to-action button within the homepage hero."""

    label: str
    href: str
    variant: str = "secondary"


@dc.dataclass(slots=True)
class HomepageConfig:
    """Hero copy, CTAs, and feature highlights for the landing page."""

    title: str
    description: str = ""
    ctas: list[CTAButtonConfig] = dc.field(default_factory=list)
    features: list[FeatureBlock] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class FooterLink:
    """Footer entry pointing at a site route (``to``) or an external ``href``."""

    label: str
    to: str | None = None
    href: str | None = None

    @property
    def target(self) -> str:
        """Return the route or URL the entry links to."""
        return self.to or self.href or ""


@dc.dataclass(slots=True)
class FooterColumn:
    """Titled column of footer links."""

    title: str
    items: list[FooterLink] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class FooterConfig:
    """Footer link columns and copyright line shared by every page."""

    links: list[FooterColumn] = dc.field(default_factory=list)
    copyright: str | None = None

    def targets(self) -> list[str]:
        """Return every link target in column order."""
        return [item.target for column in self.links for item in column.items]


@dc.dataclass(slots=True)
class SiteConfig:
    """Build settings shared by the assembler, renderer, and CLI."""

    title: str = "Salesforce DevOps Learning Hub"
    tagline: str = "From Beginner to Production-Ready DevOps Expert"
    content_root: Path = Path("docs")
    output_dir: Path = Path("build")
    route_base: str = DEFAULT_ROUTE_BASE
    strict: bool = False
    workers: int = 1
    pygments_style: str = "monokai"
    sidebar_label: str = "Docs"
    navbar_title: str | None = None
    homepage: HomepageConfig | None = None
    sidebars: tuple[SidebarDefinition, ...] = ()
    footer: FooterConfig = dc.field(default_factory=FooterConfig)

    def with_overrides(
        self,
        *,
        content_root: Path | None = None,
        output_dir: Path | None = None,
        strict: bool | None = None,
        workers: int | None = None,
    ) -> SiteConfig:
        """Return a copy with any non-``None`` CLI override applied."""
        return dc.replace(
            self,
            content_root=content_root if content_root is not None else self.content_root,
            output_dir=output_dir if output_dir is not None else self.output_dir,
            strict=self.strict if strict is None else strict,
            workers=self.workers if workers is None else workers,
        )

    @property
    def features(self) -> list[FeatureBlock]:
        """Return the homepage feature blocks in declared order."""
        return list(self.homepage.features) if self.homepage else []


__all__ = [
    "CTAButtonConfig",
    "FooterColumn",
    "FooterConfig",
    "FooterLink",
    "HomepageConfig",
    "SiteConfig",
    "SiteConfigError",
]
