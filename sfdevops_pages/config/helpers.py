"""Utility helpers shared by the site configuration loader."""

from __future__ import annotations

from .models import SiteConfigError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _required_str(value: object | None, *, field: str) -> str:
    """Return a stripped string or raise when the value is missing."""
    text = _optional_str(value)
    if text is None:
        msg = f"Site configuration requires '{field}'."
        raise SiteConfigError(msg)
    return text


def _normalize_route_base(value: object | None, default: str) -> str:
    """Return a route base with exactly one leading and no trailing slash."""
    text = _optional_str(value)
    if text is None:
        return default
    trimmed = text.strip("/")
    return f"/{trimmed}" if trimmed else "/"


def _as_bool(value: object | None, *, field: str, default: bool) -> bool:
    """Validate a YAML boolean."""
    match value:
        case None:
            return default
        case bool():
            return value
        case _:
            msg = f"'{field}' must be a boolean, got {value!r}."
            raise SiteConfigError(msg)


def _as_positive_int(value: object | None, *, field: str, default: int) -> int:
    """Validate a positive YAML integer."""
    match value:
        case None:
            return default
        case bool():
            pass
        case int() if value > 0:
            return value
    msg = f"'{field}' must be a positive integer, got {value!r}."
    raise SiteConfigError(msg)


__all__ = [
    "_as_bool",
    "_as_positive_int",
    "_normalize_route_base",
    "_optional_str",
    "_required_str",
]
