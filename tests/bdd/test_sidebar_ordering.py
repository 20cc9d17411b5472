"""Behaviour tests proving the sidebar ignores file creation order.

The scenario writes the same content root twice, once in declaration order
and once reversed, assembles both, and compares the resulting navigation and
the canonical JSON encoding of the site graphs byte for byte.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from sfdevops_pages.assembler import build
from sfdevops_pages.serialization import serialize_site_graph

if typ.TYPE_CHECKING:
    from sfdevops_pages.models import SiteGraph

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "sidebar_ordering.feature"
)
scenarios(FEATURE_FILE)

LEARNING_PATH: tuple[tuple[str, str], ...] = (
    ("getting-started/welcome.md", "---\nsidebar_position: 1\n---\n# Welcome\n"),
    ("getting-started/setup.md", "---\nsidebar_position: 2\n---\n# Setup\n"),
    ("advanced-topics/monorepos.md", "---\nsidebar_position: 10\n---\n# Monorepos\n"),
    ("advanced-topics/packaging.md", "# Packaging\n"),
    ("glossary.md", "# Glossary\n"),
)


@pytest.fixture
def scenario_state() -> dict[str, typ.Any]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _write(root: Path, entries: typ.Iterable[tuple[str, str]]) -> Path:
    for relative, text in entries:
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    return root


@given("the learning path written in declaration order")
def given_forward(tmp_path: Path, scenario_state: dict[str, typ.Any]) -> None:
    """Write the learning path files in the order they are declared."""
    scenario_state["roots"] = [_write(tmp_path / "forward", LEARNING_PATH)]


@given("the same learning path written in reverse order")
def given_reverse(tmp_path: Path, scenario_state: dict[str, typ.Any]) -> None:
    """Write the same files again, last declared first."""
    scenario_state["roots"].append(
        _write(tmp_path / "reverse", reversed(LEARNING_PATH))
    )


@when("I assemble both content roots")
def when_assemble_both(scenario_state: dict[str, typ.Any]) -> None:
    """Assemble a site graph for each content root."""
    scenario_state["graphs"] = [build(root) for root in scenario_state["roots"]]


@then(parsers.parse('both sidebars list "{first}" before "{second}"'))
def then_sidebar_order(
    scenario_state: dict[str, typ.Any], first: str, second: str
) -> None:
    """Both trees place ``first`` ahead of ``second`` at the top level."""
    graphs = typ.cast("list[SiteGraph]", scenario_state["graphs"])
    for graph in graphs:
        labels = [child.label for child in graph.sidebar.children]
        assert labels.index(first) < labels.index(second), (
            f"Expected {first!r} before {second!r}, got {labels}"
        )


@then("both serialized site graphs are identical")
def then_identical(scenario_state: dict[str, typ.Any]) -> None:
    """The canonical encodings match byte for byte."""
    encoded = [serialize_site_graph(graph) for graph in scenario_state["graphs"]]
    assert encoded[0] == encoded[1], "Expected identical serialized graphs"
