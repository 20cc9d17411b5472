r"""Split documents into frontmatter and body and validate recognized keys.

The frontmatter block is YAML delimited by ``---`` lines at the very top of a
document. Only the keys enumerated in :data:`FRONTMATTER_SCHEMA` are honoured;
everything else is ignored. Problems never raise: the caller receives a
:class:`FrontmatterResult` whose ``issues`` list explains what was discarded.

Example
-------
>>> result = parse_frontmatter("---\nsidebar_position: 2\n---\n# Hi\n")
>>> result.metadata.sidebar_position
2
>>> result.body
'# Hi\n'
"""

from __future__ import annotations

import dataclasses as dc
import logging
import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from sfdevops_pages._constants import MAX_POSITION

logger = logging.getLogger(__name__)

FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(?P<block>.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.MULTILINE | re.DOTALL,
)
OPENING_PATTERN = re.compile(r"\A---[ \t]*\r?\n")


@dc.dataclass(frozen=True, slots=True)
class FieldSpec:
    """Expected type and default for a recognized frontmatter key."""

    name: str
    kind: type
    default: typ.Any


FRONTMATTER_SCHEMA: tuple[FieldSpec, ...] = (
    FieldSpec("sidebar_position", int, MAX_POSITION),
    FieldSpec("title", str, None),
    FieldSpec("description", str, None),
    FieldSpec("sidebar_label", str, None),
)


@dc.dataclass(frozen=True, slots=True)
class Frontmatter:
    """Validated frontmatter values with documented defaults."""

    sidebar_position: int = MAX_POSITION
    title: str | None = None
    description: str | None = None
    sidebar_label: str | None = None


@dc.dataclass(frozen=True, slots=True)
class FrontmatterResult:
    """Outcome of splitting a document.

    Attributes
    ----------
    metadata : Frontmatter
        Recognized values, defaults where absent or invalid.
    body : str
        Document text after the block; the full text when the block is
        missing or malformed.
    present : bool
        ``True`` when a well-formed block was found and removed.
    issues : tuple[str, ...]
        Human-readable reasons for any value that was discarded.
    """

    metadata: Frontmatter
    body: str
    present: bool
    issues: tuple[str, ...] = ()


def _load_yaml(block: str) -> object:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    return loader.load(block)


def _coerce(spec: FieldSpec, value: object) -> tuple[typ.Any, str | None]:
    """Return the validated value for ``spec`` or its default and an issue."""
    if value is None:
        return spec.default, None
    if spec.kind is int:
        if isinstance(value, bool) or not isinstance(value, int | float):
            return spec.default, f"'{spec.name}' must be an integer, got {value!r}"
        if isinstance(value, float) and not value.is_integer():
            return spec.default, f"'{spec.name}' must be an integer, got {value!r}"
        return int(value), None
    if isinstance(value, str):
        text = value.strip()
        return (text or spec.default), None
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value), None
    return spec.default, f"'{spec.name}' must be a string, got {type(value).__name__}"


def _validate(payload: typ.Mapping[str, object]) -> tuple[Frontmatter, list[str]]:
    values: dict[str, typ.Any] = {}
    issues: list[str] = []
    known = {spec.name for spec in FRONTMATTER_SCHEMA}
    for spec in FRONTMATTER_SCHEMA:
        value, issue = _coerce(spec, payload.get(spec.name))
        values[spec.name] = value
        if issue:
            issues.append(issue)
    ignored = sorted(str(key) for key in payload if key not in known)
    if ignored:
        logger.debug("Ignoring unrecognized frontmatter keys: %s", ", ".join(ignored))
    return Frontmatter(**values), issues


def parse_frontmatter(text: str) -> FrontmatterResult:
    """Split ``text`` into validated frontmatter and Markdown body.

    Parameters
    ----------
    text : str
        Full document contents.

    Returns
    -------
    FrontmatterResult
        Parsed metadata and body. A YAML error, a block that is not a mapping,
        or a missing closing delimiter yields default metadata, the untouched
        text as body, and one issue describing the failure.
    """
    text = text.removeprefix("\ufeff")
    found = FRONTMATTER_PATTERN.match(text)
    if found is None:
        if OPENING_PATTERN.match(text):
            return FrontmatterResult(
                Frontmatter(), text, False, ("frontmatter block is not terminated",)
            )
        return FrontmatterResult(Frontmatter(), text, False)

    try:
        loaded = _load_yaml(found.group("block"))
    except (YAMLError, RecursionError) as exc:
        # Deeply nested flow collections exhaust the parser stack.
        problem = getattr(exc, "problem", None) or exc.__class__.__name__
        return FrontmatterResult(
            Frontmatter(), text, False, (f"frontmatter is not valid YAML: {problem}",)
        )

    match loaded:
        case None:
            payload: typ.Mapping[str, object] = {}
        case dict():
            payload = loaded
        case _:
            msg = f"frontmatter must be a mapping, got {type(loaded).__name__}"
            return FrontmatterResult(Frontmatter(), text, False, (msg,))

    metadata, issues = _validate(payload)
    body = text[found.end() :]
    return FrontmatterResult(metadata, body, True, tuple(issues))


__all__ = [
    "FRONTMATTER_SCHEMA",
    "FieldSpec",
    "Frontmatter",
    "FrontmatterResult",
    "parse_frontmatter",
]
