"""Homepage-specific configuration builders."""

from __future__ import annotations

import typing as typ

from sfdevops_pages.models import FeatureBlock

from .helpers import _optional_str, _required_str
from .models import CTAButtonConfig, HomepageConfig, SiteConfigError

DEFAULT_FEATURES: tuple[FeatureBlock, ...] = (
    FeatureBlock(
        title="Beginner-Friendly Learning Path",
        description=(
            "Start from zero knowledge and progress to production-ready DevOps "
            "engineer. 7 foundation topics with hands-on examples, real "
            "scenarios, and practical exercises. No prerequisites required."
        ),
        icon="img/undraw_docusaurus_mountain.svg",
    ),
    FeatureBlock(
        title="Interview Prep & Git Mastery",
        description=(
            "Master Git branching strategies, daily workflows, and 30+ technical "
            "interview questions. Build a portfolio with 5 projects. STAR method "
            "for behavioral interviews. Get ready for DevOps Lead roles."
        ),
        icon="img/undraw_docusaurus_tree.svg",
    ),
    FeatureBlock(
        title="Real-World CI/CD Pipelines",
        description=(
            "Learn GitLab CI/CD, automated testing, deployment strategies, and "
            "production troubleshooting. Code examples, diagrams, and complete "
            "workflows you can use immediately."
        ),
        icon="img/undraw_docusaurus_react.svg",
    ),
)

DEFAULT_CTAS: tuple[CTAButtonConfig, ...] = (
    CTAButtonConfig(label="Start Learning - Free", href="/docs/intro"),
    CTAButtonConfig(label="Interview Prep", href="/docs/interview-prep/", variant="outline"),
)


def default_homepage(title: str, description: str = "") -> HomepageConfig:
    """Return the homepage used when the config file declares none."""
    return HomepageConfig(
        title=title,
        description=description,
        ctas=list(DEFAULT_CTAS),
        features=list(DEFAULT_FEATURES),
    )


def _build_homepage_config(
    payload: typ.Mapping[str, typ.Any], *, fallback_title: str
) -> HomepageConfig:
    """Build the homepage configuration from the ``homepage`` mapping.

    Omitted ``ctas`` or ``features`` keys keep the default landing page
    content; an explicit empty list removes it.
    """
    match payload:
        case dict() as data:
            title = _optional_str(data.get("title")) or fallback_title
            description = _optional_str(data.get("description")) or ""
        case _:
            msg = "Homepage configuration must be a mapping."
            raise SiteConfigError(msg)

    return HomepageConfig(
        title=title,
        description=description,
        ctas=(
            [_build_cta(entry) for entry in _entries(data["ctas"], field="ctas")]
            if "ctas" in data
            else list(DEFAULT_CTAS)
        ),
        features=(
            [
                _build_feature(entry)
                for entry in _entries(data["features"], field="features")
            ]
            if "features" in data
            else list(DEFAULT_FEATURES)
        ),
    )


def _entries(value: object, *, field: str) -> list[object]:
    """Return the list stored under ``field``; ``null`` counts as empty."""
    match value:
        case None:
            return []
        case list():
            return value
        case _:
            msg = f"Homepage '{field}' must be a list."
            raise SiteConfigError(msg)


def _build_cta(entry: object) -> CTAButtonConfig:
    """Build one hero call-to-action button."""
    match entry:
        case {"label": label, "href": href, **rest}:
            return CTAButtonConfig(
                label=_required_str(label, field="ctas.label"),
                href=_required_str(href, field="ctas.href"),
                variant=_optional_str(rest.get("variant")) or "secondary",
            )
        case _:
            msg = "Hero CTA entries require 'label' and 'href'."
            raise SiteConfigError(msg)


def _build_feature(entry: object) -> FeatureBlock:
    """Build one feature block; the description may be empty."""
    match entry:
        case {"title": title, **rest}:
            return FeatureBlock(
                title=_required_str(title, field="features.title"),
                description=str(rest.get("description") or "").strip(),
                icon=_optional_str(rest.get("icon")),
            )
        case _:
            msg = "Feature entries require a 'title'."
            raise SiteConfigError(msg)


__all__ = [
    "DEFAULT_CTAS",
    "DEFAULT_FEATURES",
    "_build_homepage_config",
    "default_homepage",
]
