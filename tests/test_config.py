"""Tests for loading ``site.yaml`` into typed configuration dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path
from textwrap import dedent

import pytest

from sfdevops_pages.config import (
    DEFAULT_FEATURES,
    SiteConfig,
    SiteConfigError,
    load_site_config,
)
from sfdevops_pages.models import SidebarCategory, SidebarDefinition

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@pytest.fixture
def write_config(tmp_path: Path) -> cabc.Callable[[str], Path]:
    """Return a helper writing dedented YAML to ``site.yaml``."""

    def _write(text: str) -> Path:
        path = tmp_path / "site.yaml"
        path.write_text(dedent(text), encoding="utf-8")
        return path

    return _write


def test_full_config(write_config: cabc.Callable[[str], Path]) -> None:
    """Every documented key is parsed into the dataclasses."""
    path = write_config(
        """\
        site:
          title: Learn Salesforce DevOps
          tagline: Ship metadata safely
          content_root: content
          output_dir: public
          route_base: learn/
          strict: true
          workers: 4
          pygments_style: friendly
        homepage:
          title: Welcome
          ctas:
            - label: Start
              href: /learn/intro
              variant: primary
          features:
            - title: Second
              description: Declared first
              icon: img/two.svg
            - title: First
              description: Declared second
        """
    )
    config = load_site_config(path)

    assert config.tagline == "Ship metadata safely", "Expected the tagline"
    assert config.content_root == Path("content"), "Expected the content root"
    assert config.output_dir == Path("public"), "Expected the output folder"
    assert config.route_base == "/learn", "Expected a normalized route base"
    assert config.strict, "Expected strict mode"
    assert config.workers == 4, "Expected four workers"
    assert config.pygments_style == "friendly", "Expected the Pygments style"
    assert config.homepage is not None, "Expected a homepage"
    assert config.homepage.title == "Welcome", "Expected the homepage title"
    assert [cta.variant for cta in config.homepage.ctas] == ["primary"], (
        "Expected the declared CTA"
    )
    assert [block.title for block in config.features] == ["Second", "First"], (
        "Expected features in declared order"
    )
    assert config.features[1].icon is None, "Expected no icon for the second block"


def test_defaults_when_sections_missing(write_config: cabc.Callable[[str], Path]) -> None:
    """An empty file yields default settings and the default homepage."""
    config = load_site_config(write_config(""))
    defaults = SiteConfig()

    assert config.content_root == defaults.content_root, "Expected default root"
    assert config.route_base == "/docs", "Expected the default route base"
    assert not config.strict, "Expected strict mode off by default"
    assert tuple(config.features) == DEFAULT_FEATURES, "Expected default features"
    assert config.homepage is not None, "Expected a homepage"
    assert [cta.href for cta in config.homepage.ctas] == [
        "/docs/intro",
        "/docs/interview-prep/",
    ], "Expected the default CTAs"
    assert config.title == "Salesforce DevOps Learning Hub", "Expected the site title"
    assert config.sidebars == (), "Expected the folder-generated sidebar"
    assert config.footer.links == [], "Expected no footer columns"


def test_missing_file(tmp_path: Path) -> None:
    """A missing configuration file raises ``FileNotFoundError``."""
    with pytest.raises(FileNotFoundError):
        load_site_config(tmp_path / "absent.yaml")


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("- just\n- a list\n", "mapping"),
        ("site: [1, 2]\n", "'site' section"),
        ("site:\n  strict: maybe\n", "'strict'"),
        ("site:\n  workers: 0\n", "'workers'"),
        ("site:\n  workers: true\n", "'workers'"),
        ("homepage:\n  ctas:\n    - label: Only\n", "'label' and 'href'"),
        ("homepage:\n  features: nope\n", "'features' must be a list"),
        ("sidebars: [intro]\n", "'sidebars' section"),
        ("sidebars:\n  docs: intro\n", "'sidebars.docs' must be a list"),
        ("sidebars:\n  docs:\n    - label: Orphan\n", "document ids or categories"),
        ("footer: [1]\n", "'footer' section"),
        (
            "footer:\n  links:\n    - title: A\n      items:\n        - label: B\n",
            "exactly one of",
        ),
    ],
)
def test_invalid_values(
    write_config: cabc.Callable[[str], Path], text: str, message: str
) -> None:
    """Invalid structures are rejected with a descriptive error."""
    with pytest.raises(SiteConfigError, match=message):
        load_site_config(write_config(text))


def test_with_overrides_ignores_none() -> None:
    """CLI overrides only replace values that were provided."""
    base = SiteConfig(strict=True, workers=2)
    updated = base.with_overrides(output_dir=Path("out"), strict=None, workers=None)

    assert updated.output_dir == Path("out"), "Expected the output override"
    assert updated.strict, "Expected strict to be kept"
    assert updated.workers == 2, "Expected workers to be kept"
    assert base.output_dir == Path("build"), "Expected the original to be unchanged"


def test_sidebars_and_footer(write_config: cabc.Callable[[str], Path]) -> None:
    """Named sidebars and footer columns keep their declared order."""
    path = write_config(
        """\
        site:
          navbar_title: SF DevOps Hub
        sidebars:
          tutorialSidebar:
            label: Learn DevOps
            items:
              - intro
              - label: 1. Foundations (Days 1-7)
                link: foundations/index
                items:
                  - foundations/what-is-salesforce-devops
                  - id: foundations/version-control-git
          salesforceSidebar:
            - salesforce/index
        footer:
          links:
            - title: DevOps
              items:
                - label: Getting Started
                  to: /docs/intro
            - title: Connect
              items:
                - label: GitLab CI/CD
                  href: https://docs.gitlab.com/ee/ci/
          copyright: Copyright 2025 Salesforce DevOps Learning Hub.
        """
    )
    config = load_site_config(path)

    assert config.navbar_title == "SF DevOps Hub", "Expected the navbar title"
    assert config.sidebars == (
        SidebarDefinition(
            "tutorialSidebar",
            "Learn DevOps",
            (
                "intro",
                SidebarCategory(
                    "1. Foundations (Days 1-7)",
                    (
                        "foundations/what-is-salesforce-devops",
                        "foundations/version-control-git",
                    ),
                    link="foundations/index",
                ),
            ),
        ),
        SidebarDefinition(
            "salesforceSidebar", "salesforceSidebar", ("salesforce/index",)
        ),
    ), "Expected both sidebars in declared order"
    assert [column.title for column in config.footer.links] == ["DevOps", "Connect"], (
        "Expected the footer columns"
    )
    assert config.footer.targets() == [
        "/docs/intro",
        "https://docs.gitlab.com/ee/ci/",
    ], "Expected footer targets in column order"
    assert config.footer.copyright == (
        "Copyright 2025 Salesforce DevOps Learning Hub."
    ), "Expected the copyright line"
