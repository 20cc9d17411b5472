"""Builders for the ``sidebars`` and ``footer`` sections of ``site.yaml``.

Named sidebars are declared in navbar order; each lists document ids and
categories in the order they are displayed::

    sidebars:
      tutorialSidebar:
        label: Learn DevOps
        items:
          - intro
          - label: 1. Foundations (Days 1-7)
            items:
              - foundations/what-is-salesforce-devops
      referenceSidebar: [reference/cheat-sheets]

The footer holds titled link columns. ``to`` targets are site routes checked
against the documents; ``href`` targets are external URLs::

    footer:
      links:
        - title: DevOps
          items:
            - label: Getting Started
              to: /docs/intro
      copyright: Copyright 2025 Salesforce DevOps Learning Hub.
"""

from __future__ import annotations

import typing as typ

from sfdevops_pages.models import SidebarCategory, SidebarDefinition

from .helpers import _optional_str, _required_str
from .models import FooterColumn, FooterConfig, FooterLink, SiteConfigError


def _as_list(value: object, *, field: str) -> list[typ.Any]:
    if not isinstance(value, list):
        msg = f"'{field}' must be a list."
        raise SiteConfigError(msg)
    return value


def _sidebar_item(entry: object, *, field: str) -> str | SidebarCategory:
    """Return a document id or a category for one sidebar entry."""
    match entry:
        case str() if entry.strip():
            return entry.strip()
        case {"id": doc_id}:
            return _required_str(doc_id, field=f"{field}.id")
        case {"label": label, "items": items}:
            return SidebarCategory(
                label=_required_str(label, field=f"{field}.label"),
                items=tuple(
                    _sidebar_item(child, field=f"{field}.items")
                    for child in _as_list(items, field=f"{field}.items")
                ),
                link=_optional_str(entry.get("link")),
            )
    msg = (
        f"Sidebar entries in '{field}' must be document ids or categories "
        f"with 'label' and 'items', got {entry!r}."
    )
    raise SiteConfigError(msg)


def _build_sidebars(payload: object | None) -> tuple[SidebarDefinition, ...]:
    """Build named sidebars from the ``sidebars`` mapping, keeping its order."""
    if payload is None:
        return ()
    if not isinstance(payload, dict):
        msg = "The 'sidebars' section must be a mapping of sidebar ids."
        raise SiteConfigError(msg)

    definitions: list[SidebarDefinition] = []
    for sidebar_id, body in payload.items():
        field = f"sidebars.{sidebar_id}"
        match body:
            case list():
                label, items = str(sidebar_id), body
            case {"items": items}:
                label = _optional_str(body.get("label")) or str(sidebar_id)
            case _:
                msg = f"'{field}' must be a list or a mapping with 'items'."
                raise SiteConfigError(msg)
        definitions.append(
            SidebarDefinition(
                id=str(sidebar_id),
                label=label,
                items=tuple(
                    _sidebar_item(entry, field=field)
                    for entry in _as_list(items, field=f"{field}.items")
                ),
            )
        )
    return tuple(definitions)


def _footer_link(entry: object) -> FooterLink:
    if not isinstance(entry, dict):
        msg = "Footer links must be mappings with 'label' and 'to' or 'href'."
        raise SiteConfigError(msg)
    to = _optional_str(entry.get("to"))
    href = _optional_str(entry.get("href"))
    if (to is None) == (href is None):
        msg = "Footer links require exactly one of 'to' or 'href'."
        raise SiteConfigError(msg)
    return FooterLink(
        label=_required_str(entry.get("label"), field="footer link label"),
        to=to,
        href=href,
    )


def _build_footer(payload: object | None) -> FooterConfig:
    """Build the footer from the ``footer`` mapping."""
    if payload is None:
        return FooterConfig()
    if not isinstance(payload, dict):
        msg = "The 'footer' section must be a mapping."
        raise SiteConfigError(msg)

    columns: list[FooterColumn] = []
    for column in _as_list(payload.get("links") or [], field="footer.links"):
        if not isinstance(column, dict):
            msg = "Footer columns must be mappings with 'title' and 'items'."
            raise SiteConfigError(msg)
        columns.append(
            FooterColumn(
                title=_required_str(column.get("title"), field="footer column title"),
                items=[
                    _footer_link(entry)
                    for entry in _as_list(
                        column.get("items") or [], field="footer.links.items"
                    )
                ],
            )
        )
    return FooterConfig(
        links=columns, copyright=_optional_str(payload.get("copyright"))
    )


__all__ = ["_build_footer", "_build_sidebars"]
